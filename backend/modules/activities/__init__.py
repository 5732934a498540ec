"""
Activities module.

Public API:
- ActivityService: Log and list a user's activities
- Activity, CreateActivityRequest: Data models
"""

from .models import Activity, CreateActivityRequest
from .service import ActivityService

__all__ = [
    "ActivityService",
    "Activity",
    "CreateActivityRequest",
]
