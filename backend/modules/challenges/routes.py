"""
Challenge API endpoints.

Listing and reading are public; creation requires an administrator.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_challenge_service
from api.middleware.auth import require_admin
from shared.models import User

from .models import Challenge, CreateChallengeRequest
from .service import ChallengeService

router = APIRouter()


@router.post("", response_model=Challenge, status_code=status.HTTP_201_CREATED)
async def create_challenge(
    request: CreateChallengeRequest,
    admin: User = Depends(require_admin),
    service: ChallengeService = Depends(get_challenge_service),
) -> Challenge:
    """
    Create a new challenge.

    401 without a valid token, 403 for non-admin users.
    """
    return await service.create_challenge(request, created_by=admin.id)


@router.get("", response_model=list[Challenge])
async def list_challenges(
    service: ChallengeService = Depends(get_challenge_service),
) -> list[Challenge]:
    """List all challenges, latest start date first."""
    return await service.list_challenges()


@router.get("/{challenge_id}", response_model=Challenge)
async def get_challenge(
    challenge_id: int,
    service: ChallengeService = Depends(get_challenge_service),
) -> Challenge:
    """Get a single challenge."""
    return await service.get_challenge(challenge_id)
