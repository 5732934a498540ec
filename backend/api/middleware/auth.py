"""
Request authorization guard.

Extracts the bearer token, resolves it through the auth service, and
enforces role requirements. These run as route dependencies, so a route
body never starts before authorization has completed.
"""

import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    InsufficientPermissionsError,
    MissingTokenError,
    UnauthenticatedError,
)
from modules.auth.interfaces import IAuthService
from shared.models import User

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        UnauthenticatedError: Missing, invalid or expired token (401)
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    try:
        return await auth.verify(credentials.credentials)
    except UnauthenticatedError as e:
        logger.info(f"Rejected bearer token: {e.code}")
        raise


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    Dependency that requires an authenticated administrator.

    Raises:
        UnauthenticatedError: Not logged in (401)
        InsufficientPermissionsError: Logged in but not an admin (403)
    """
    if not user.is_admin:
        logger.info(f"User {user.id} denied admin-only operation")
        raise InsufficientPermissionsError(ADMIN_ROLE, user.id)
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[User]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    A present but invalid token is treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        return await auth.verify(credentials.credentials)
    except UnauthenticatedError:
        return None


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
RequireAdmin = Depends(require_admin)
OptionalAuth = Depends(get_optional_user)
