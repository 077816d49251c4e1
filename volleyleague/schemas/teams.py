"""Teams, roster membership and pending invites."""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from volleyleague.schemas.base import utc_now


class MemberStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class Team(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "teams"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    captain_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)


class TeamMember(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "team_members"
    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    status: MemberStatus = Field(default=MemberStatus.ACCEPTED)
    joined_at: datetime = Field(default_factory=utc_now)


class TeamInvite(SQLModel, table=True):  # type: ignore[call-arg]
    """Invite for an email that has no account yet; counts toward the roster."""

    __tablename__ = "team_invites"
    __table_args__ = (
        UniqueConstraint("team_id", "email", name="uq_team_invites_team_email"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    email: str = Field(index=True)
    invited_by: int = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
