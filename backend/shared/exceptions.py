"""
Error categories shared by every EcoChallenge module.

Modules raise their own subclasses (``DuplicateEmailError``,
``ChallengeNotFoundError``, ...). The API layer only looks at which
category an error belongs to:

    ValidationError      -> 400  bad input, e.g. a challenge ending before it starts
    AuthenticationError  -> 401  no token, bad token, wrong password
    AuthorizationError   -> 403  signed in, but not an admin
    NotFoundError        -> 404  unknown challenge or user
    InternalError        -> 500  storage outage, missing signing secret

so a new failure never needs its own status mapping.
"""

from typing import Optional, Any


class EcoChallengeError(Exception):
    """
    Root of the hierarchy.

    ``code`` is the machine-readable identifier clients switch on and
    defaults to the class name; ``details`` carries structured context
    such as the offending field or the failing backing service.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = dict(details) if details else {}

    def to_dict(self) -> dict[str, Any]:
        """The ``{"error", "message", "details"}`` body every error response uses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(EcoChallengeError):
    pass


class AuthenticationError(EcoChallengeError):
    """The caller could not be identified."""


class AuthorizationError(EcoChallengeError):
    """The caller is known but lacks the required role."""


class NotFoundError(EcoChallengeError):
    pass


class InternalError(EcoChallengeError):
    """A server-side fault the caller cannot fix by changing the request."""


class ExternalServiceError(InternalError):
    """
    A backing service (Supabase table, the EcoChallenge API as seen from
    the client) failed or could not be reached. ``service`` names it and is
    echoed in ``details`` for the logs.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, {**(details or {}), "service": service})
        self.service = service
