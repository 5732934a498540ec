"""
Supabase client for the ``supabase`` storage backend.

The API enforces authentication and the admin check itself, so every
repository (users, challenges, activities, notifications) shares one
service-role client. The ``memory`` backend never calls into this module.
"""

from functools import lru_cache

from supabase import create_client, Client

from .config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Build the shared service-role client on first use."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing: set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY, or run with STORAGE_BACKEND=memory."
        )
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def reset_client_cache() -> None:
    """Forget the cached client so the next call re-reads settings."""
    get_supabase_client.cache_clear()
