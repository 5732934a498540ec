"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations on the configured
storage backend (in-memory or Supabase).
"""

from typing import TYPE_CHECKING

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.activities.service import ActivityService
    from modules.challenges.service import ChallengeService
    from modules.notifications.broker import NotificationBroker
    from modules.notifications.service import NotificationService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._user_repository: "IUserRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._broker: "NotificationBroker | None" = None
        self._notification_service: "NotificationService | None" = None
        self._challenge_service: "ChallengeService | None" = None
        self._activity_service: "ActivityService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def users(self) -> "IUserRepository":
        """Get the credential store."""
        if self._user_repository is None:
            if self.uses_supabase:
                from modules.auth.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(get_supabase_client())
            else:
                from modules.auth.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService.from_settings(self.users, self.settings)
        return self._auth_service

    @property
    def broker(self) -> "NotificationBroker":
        """Get the notification broker instance."""
        if self._broker is None:
            from modules.notifications.broker import NotificationBroker
            self._broker = NotificationBroker(
                send_timeout=self.settings.notification_send_timeout,
                queue_size=self.settings.notification_queue_size,
            )
        return self._broker

    @property
    def notifications(self) -> "NotificationService":
        """Get the notification service instance."""
        if self._notification_service is None:
            from modules.notifications.service import NotificationService
            if self.uses_supabase:
                from modules.notifications.repository import SupabaseNotificationRepository
                from shared.database import get_supabase_client
                repository = SupabaseNotificationRepository(get_supabase_client())
            else:
                from modules.notifications.repository import InMemoryNotificationRepository
                repository = InMemoryNotificationRepository()
            self._notification_service = NotificationService(repository, self.broker)
        return self._notification_service

    @property
    def challenges(self) -> "ChallengeService":
        """Get the challenge service instance."""
        if self._challenge_service is None:
            from modules.challenges.service import ChallengeService
            if self.uses_supabase:
                from modules.challenges.repository import SupabaseChallengeRepository
                from shared.database import get_supabase_client
                repository = SupabaseChallengeRepository(get_supabase_client())
            else:
                from modules.challenges.repository import InMemoryChallengeRepository
                repository = InMemoryChallengeRepository()
            self._challenge_service = ChallengeService(repository, self.notifications)
        return self._challenge_service

    @property
    def activities(self) -> "ActivityService":
        """Get the activity service instance."""
        if self._activity_service is None:
            from modules.activities.service import ActivityService
            if self.uses_supabase:
                from modules.activities.repository import SupabaseActivityRepository
                from shared.database import get_supabase_client
                repository = SupabaseActivityRepository(get_supabase_client())
            else:
                from modules.activities.repository import InMemoryActivityRepository
                repository = InMemoryActivityRepository()
            self._activity_service = ActivityService(repository, self.challenges)
        return self._activity_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._settings = None
        self._user_repository = None
        self._auth_service = None
        self._broker = None
        self._notification_service = None
        self._challenge_service = None
        self._activity_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_broker() -> "NotificationBroker":
    """FastAPI dependency for the notification broker."""
    return get_container().broker


def get_notification_service() -> "NotificationService":
    """FastAPI dependency for notification service."""
    return get_container().notifications


def get_challenge_service() -> "ChallengeService":
    """FastAPI dependency for challenge service."""
    return get_container().challenges


def get_activity_service() -> "ActivityService":
    """FastAPI dependency for activity service."""
    return get_container().activities
