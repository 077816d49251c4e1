"""Pydantic models for schedule (game day) responses."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class GameDayRead(BaseModel):
    id: int
    season_id: int
    game_date: date
    weekday: str
    description: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None)


class UpcomingGameDay(GameDayRead):
    season_name: str


class GameDayUpdate(BaseModel):
    description: Optional[str] = Field(default=None, max_length=2000)
    image_url: Optional[str] = Field(default=None, max_length=1024)
