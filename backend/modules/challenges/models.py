"""
Challenge data models.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class Challenge(BaseModel):
    """An environmental challenge users can take part in."""

    id: int
    title: str
    description: str
    start_date: date
    end_date: date
    created_by: Optional[int] = None
    created_at: datetime


class CreateChallengeRequest(BaseModel):
    """Body of POST /api/challenges (admin only)."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    start_date: date
    end_date: date
