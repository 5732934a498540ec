"""
Notifications module exceptions.
"""

from shared.exceptions import ExternalServiceError


class NotificationStoreError(ExternalServiceError):
    """Raised when a notification cannot be persisted or read."""

    def __init__(self, message: str = "Notification store unavailable"):
        super().__init__(message, service="notification_store", code="NOTIFICATION_STORE_ERROR")
