"""
Challenges module exceptions.
"""

from datetime import date

from shared.exceptions import ExternalServiceError, NotFoundError, ValidationError


class ChallengeNotFoundError(NotFoundError):
    """Raised when a challenge is not found."""

    def __init__(self, challenge_id: int):
        super().__init__(
            f"Challenge not found: {challenge_id}",
            code="CHALLENGE_NOT_FOUND",
            details={"challenge_id": challenge_id},
        )


class InvalidChallengeDatesError(ValidationError):
    """Raised when a challenge ends before it starts."""

    def __init__(self, start_date: date, end_date: date):
        super().__init__(
            "end_date must not be before start_date",
            code="INVALID_CHALLENGE_DATES",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )


class ChallengeStoreError(ExternalServiceError):
    """Raised when the challenge store fails."""

    def __init__(self, message: str = "Challenge store unavailable"):
        super().__init__(message, service="challenge_store", code="CHALLENGE_STORE_ERROR")
