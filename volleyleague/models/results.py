"""Pydantic models for recording game results."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TeamResultSubmit(BaseModel):
    sets_won: int = Field(ge=0)
    sets_lost: int = Field(ge=0)
    # None keeps the played roster already on file
    player_ids: Optional[list[int]] = Field(default=None)


class BulkTeamResult(BaseModel):
    team_id: int
    sets_won: int = Field(ge=0)
    sets_lost: int = Field(ge=0)


class GameDayResultsSubmit(BaseModel):
    results: list[BulkTeamResult] = Field(default_factory=list)


class TeamResultRead(BaseModel):
    game_day_id: int
    team_id: int
    sets_won: int
    sets_lost: int
    recorded_at: Optional[datetime] = Field(default=None)
    reported_by: Optional[int] = Field(default=None)
    player_ids: list[int] = Field(default_factory=list)
