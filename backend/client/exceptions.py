"""
Session client exceptions.
"""

from typing import Optional

from shared.exceptions import EcoChallengeError, ExternalServiceError


class AuthRequestRejectedError(EcoChallengeError):
    """The API answered a login, register or verify call with a 4xx."""

    def __init__(self, message: str, status_code: int, code: Optional[str] = None):
        super().__init__(message, code=code, details={"status_code": status_code})
        self.status_code = status_code


class ApiUnavailableError(ExternalServiceError):
    """The API could not be reached or answered with a 5xx."""

    def __init__(self, message: str = "Authentication service unavailable"):
        super().__init__(message, service="api", code="API_UNAVAILABLE")
