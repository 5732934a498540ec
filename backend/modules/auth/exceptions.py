"""
Authentication module exceptions.

These exceptions are raised by the auth module and mapped to HTTP
responses by the API error handlers.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    InternalError,
    ValidationError,
)


class DuplicateEmailError(ValidationError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "An account with this email already exists",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Deliberately identical for an unknown email and a wrong password.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class UnauthenticatedError(AuthenticationError):
    """Raised when a request carries no usable session token."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class MissingTokenError(UnauthenticatedError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(UnauthenticatedError):
    """Raised when a token is malformed, forged, or bound to no user."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(UnauthenticatedError):
    """Raised when a token is past its expiry."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when an authenticated user lacks the required role."""

    def __init__(self, required_role: str, user_id: int):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}",
            code="FORBIDDEN",
            details={"required_role": required_role, "user_id": user_id},
        )


class CredentialStoreError(ExternalServiceError):
    """Raised when the credential store fails for a reason other than uniqueness."""

    def __init__(self, message: str = "Credential store unavailable"):
        super().__init__(message, service="credential_store", code="CREDENTIAL_STORE_ERROR")


class AuthConfigurationError(InternalError):
    """Raised when the server has no token signing secret configured."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_NOT_CONFIGURED",
        )
