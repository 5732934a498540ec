"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import User


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


class UserRecord(BaseModel):
    """
    A stored user row, including the password hash.

    Never leaves the auth module; convert with ``to_user()``.
    """

    id: int
    email: str
    username: Optional[str] = None
    password_hash: str
    is_admin: bool = False
    created_at: datetime

    def to_user(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            username=self.username,
            is_admin=self.is_admin,
            created_at=self.created_at,
        )


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(..., description="Audience")
    jti: str = Field(..., description="Unique token ID")


class RegisterRequest(BaseModel):
    """Body of POST /api/users/register."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    username: Optional[str] = Field(None, max_length=100)


class LoginRequest(BaseModel):
    """Body of the login endpoints."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """Returned by register and login."""

    user_id: int
    auth_token: str
    user: User


class VerifyResponse(BaseModel):
    """Body of GET /api/auth/verify."""

    user: User
