"""
Supabase client for the catalog tables.

One client per process, created on first use from SUPABASE_URL and
SUPABASE_SERVICE_KEY. Only the supabase catalog backend needs it.
"""

from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from config.settings import get_settings


class SupabaseClientError(Exception):
    """The Supabase client is not configured or could not be created."""
    pass


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Create (once) and return the Supabase client.

    Raises:
        SupabaseClientError: credentials missing or client creation failed
    """
    settings = get_settings()
    url, key = settings.supabase_url, settings.supabase_service_key
    if not url or not key:
        raise SupabaseClientError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for the supabase catalog backend"
        )
    try:
        return create_client(url, key)
    except Exception as e:
        raise SupabaseClientError(f"Could not create Supabase client for {url}: {e}") from e


def get_supabase_client_optional() -> Optional[Client]:
    """The Supabase client, or None when it cannot be created (readiness checks)."""
    try:
        return get_supabase_client()
    except SupabaseClientError:
        return None
