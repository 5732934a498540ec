"""
Challenges module.

Public API:
- ChallengeService: Create (admin), get and list challenges
- Challenge, CreateChallengeRequest: Data models
"""

from .models import Challenge, CreateChallengeRequest
from .exceptions import ChallengeNotFoundError, ChallengeStoreError, InvalidChallengeDatesError
from .service import ChallengeService

__all__ = [
    "ChallengeService",
    "Challenge",
    "CreateChallengeRequest",
    "ChallengeNotFoundError",
    "ChallengeStoreError",
    "InvalidChallengeDatesError",
]
