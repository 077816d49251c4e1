"""Pydantic models for league-admin grants."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AdminRead(BaseModel):
    user_id: int
    email: str
    display_name: Optional[str] = Field(default=None)
    granted_at: datetime


class AdminGrant(BaseModel):
    email: str = Field(min_length=3, max_length=320)
