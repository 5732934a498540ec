"""
Activity API endpoints. All require authentication.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_activity_service
from api.middleware.auth import get_current_user
from shared.models import User

from .models import Activity, CreateActivityRequest
from .service import ActivityService

router = APIRouter()


@router.post("", response_model=Activity, status_code=status.HTTP_201_CREATED)
async def log_activity(
    request: CreateActivityRequest,
    user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> Activity:
    """Log an activity for the current user."""
    return await service.log_activity(user.id, request)


@router.get("", response_model=list[Activity])
async def list_activities(
    user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> list[Activity]:
    """List the current user's activities, most recent first."""
    return await service.list_activities(user.id)
