"""
Activity logging service.
"""

import asyncio
import logging

from modules.challenges.service import ChallengeService

from .models import Activity, CreateActivityRequest
from .repository import IActivityRepository

logger = logging.getLogger(__name__)


class ActivityService:
    """Logs activities for the authenticated user."""

    def __init__(self, repository: IActivityRepository, challenges: ChallengeService):
        self._repository = repository
        self._challenges = challenges

    async def log_activity(self, user_id: int, request: CreateActivityRequest) -> Activity:
        """
        Record an activity.

        Raises:
            ChallengeNotFoundError: If challenge_id names no challenge
        """
        if request.challenge_id is not None:
            await self._challenges.get_challenge(request.challenge_id)

        activity = await asyncio.to_thread(self._repository.create, user_id, request)
        logger.info(f"User {user_id} logged activity {activity.id} ({activity.activity_type})")
        return activity

    async def list_activities(self, user_id: int) -> list[Activity]:
        return await asyncio.to_thread(self._repository.list_for_user, user_id)
