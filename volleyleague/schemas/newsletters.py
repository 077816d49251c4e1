from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from volleyleague.schemas.base import utc_now


class Newsletter(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "newsletters"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: str
    created_by: int = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    published_at: Optional[datetime] = Field(default=None, index=True)
