"""Pydantic models for season administration."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from volleyleague.schemas.seasons import SeasonStatus


class RecurrenceConfig(BaseModel):
    day_of_week: int = Field(ge=0, le=6, description="0=Sunday .. 6=Saturday")
    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    exclude_dates: list[date] = Field(default_factory=list)


class SeasonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    time: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    exclude_dates: list[date] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_range(self) -> "SeasonCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class SeasonRead(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    recurring_config: RecurrenceConfig
    status: SeasonStatus
    created_at: datetime


class SeasonStatusUpdate(BaseModel):
    status: SeasonStatus


class SeasonTeamsUpdate(BaseModel):
    team_ids: list[int] = Field(default_factory=list)


class SeasonTeamRead(BaseModel):
    team_id: int
    team_name: str
    total_sets_won: int
    total_sets_lost: int
