"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """
    Public view of a user account.

    This model is resolved from a verified session token and made
    available to route handlers via dependency injection. It never
    carries the password hash.
    """

    id: int = Field(..., description="User ID")
    email: str = Field(..., description="Case-normalized email address")
    username: Optional[str] = Field(None, description="Display name")
    is_admin: bool = Field(default=False, description="Administrator flag")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore storage-only columns such as password_hash
    }
