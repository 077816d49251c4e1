"""Pydantic models for newsletters."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NewsletterCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)


class NewsletterUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)


class NewsletterRead(BaseModel):
    id: int
    title: str
    content: str
    created_by: int
    created_at: datetime
    published_at: Optional[datetime] = Field(default=None)
