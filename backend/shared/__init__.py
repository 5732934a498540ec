"""
Shared infrastructure for EcoChallenge backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging: Root logger setup
- repository: Supabase and in-memory repository bases
- migrations: SQL migration tracking

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    EcoChallengeError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
    ExternalServiceError,
)
from .models import User

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "EcoChallengeError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "InternalError",
    "ExternalServiceError",
    "User",
]
