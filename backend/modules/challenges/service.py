"""
Challenge service.

Challenge creation is admin-only at the API layer; this service assumes
the caller has already been authorized.
"""

import asyncio
import logging
from typing import Optional

from modules.notifications.service import NotificationService

from .exceptions import ChallengeNotFoundError, InvalidChallengeDatesError
from .models import Challenge, CreateChallengeRequest
from .repository import IChallengeRepository

logger = logging.getLogger(__name__)


class ChallengeService:
    """Creates and lists challenges, announcing new ones to everyone."""

    def __init__(
        self,
        repository: IChallengeRepository,
        notifications: Optional[NotificationService] = None,
    ):
        self._repository = repository
        self._notifications = notifications

    async def create_challenge(
        self,
        request: CreateChallengeRequest,
        created_by: Optional[int] = None,
    ) -> Challenge:
        """
        Store a new challenge and broadcast an announcement.

        Raises:
            InvalidChallengeDatesError: If end_date is before start_date
        """
        if request.end_date < request.start_date:
            raise InvalidChallengeDatesError(request.start_date, request.end_date)

        challenge = await asyncio.to_thread(self._repository.create, request, created_by)
        logger.info(f"Challenge {challenge.id} created by user {created_by}")

        if self._notifications is not None:
            await self._notifications.create_notification(
                None, f"New challenge: {challenge.title}"
            )
        return challenge

    async def get_challenge(self, challenge_id: int) -> Challenge:
        """
        Raises:
            ChallengeNotFoundError: If no challenge has this ID
        """
        challenge = await asyncio.to_thread(self._repository.get, challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        return challenge

    async def list_challenges(self) -> list[Challenge]:
        return await asyncio.to_thread(self._repository.list_all)
