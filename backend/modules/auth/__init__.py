"""
Authentication module.

Handles registration, credential checks, session token issue and
verification.

Public API:
- IAuthService: Interface for auth operations
- IUserRepository: Credential Store contract
- AuthResult, TokenPayload, UserRecord: Data models
- Auth exceptions: DuplicateEmailError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import AuthResult, TokenPayload, UserRecord, normalize_email
from .exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UnauthenticatedError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
    CredentialStoreError,
    AuthConfigurationError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "AuthResult",
    "TokenPayload",
    "UserRecord",
    "normalize_email",
    # Exceptions
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "UnauthenticatedError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
    "CredentialStoreError",
    "AuthConfigurationError",
]
