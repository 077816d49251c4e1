"""Pydantic models for teams and rosters."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from volleyleague.schemas.teams import MemberStatus


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    player_emails: list[str] = Field(default_factory=list)


class TeamRead(BaseModel):
    id: int
    name: str
    captain_id: int
    is_captain: bool = False


class RosterMember(BaseModel):
    member_id: int
    user_id: int
    email: str
    display_name: Optional[str] = Field(default=None)
    status: MemberStatus
    is_captain: bool


class PendingInvite(BaseModel):
    invite_id: int
    email: str
    created_at: datetime


class RosterResponse(BaseModel):
    team: TeamRead
    members: list[RosterMember] = Field(default_factory=list)
    invites: list[PendingInvite] = Field(default_factory=list)
    roster_limit: int


class AddPlayerRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)


class AddPlayerResult(BaseModel):
    outcome: str  # "added" | "invited"
    email: str
