"""
Activity data models.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class Activity(BaseModel):
    """An eco-friendly activity logged by a user."""

    id: int
    user_id: int
    activity_type: str
    date: date
    description: Optional[str] = None
    challenge_id: Optional[int] = None
    created_at: datetime


class CreateActivityRequest(BaseModel):
    """Body of POST /api/activities."""

    activity_type: str = Field(..., min_length=1, max_length=100, examples=["biking"])
    date: date
    description: Optional[str] = Field(None, max_length=2000)
    challenge_id: Optional[int] = Field(None, description="Challenge this activity counts toward")
