"""League user accounts and admin grants.

Credentials live with the identity provider in front of the API; these rows
only carry what the league needs to display and authorize users.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from volleyleague.schemas.base import utc_now


class LeagueUser(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    display_name: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.display_name or self.email


class AdminUser(SQLModel, table=True):  # type: ignore[call-arg]
    """Presence of a row grants league-admin rights."""

    __tablename__ = "admin_users"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    granted_at: datetime = Field(default_factory=utc_now)
