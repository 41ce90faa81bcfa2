"""Supabase client construction and blocking-call helpers.

The supabase client is synchronous. Adapters run its calls in a worker
thread through ``call_blocking`` so they can be awaited with a bounded
timeout from async services.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any, Callable, TypeVar

from supabase import Client, ClientOptions, create_client

from infrastructure.settings import SupabaseSettings, get_supabase_settings

T = TypeVar("T")


def _client_options() -> ClientOptions:
    """Server-side clients never persist or refresh sessions."""
    return ClientOptions(auto_refresh_token=False, persist_session=False)


def create_service_client(settings: SupabaseSettings) -> Client:
    """Create a client authenticated with the service role key.

    The service role bypasses the project's "signups disabled" gate and
    row-level security, so it is only used for trusted admin operations.

    Raises:
        RuntimeError: If the service role key is not configured
    """
    key = settings.service_role_key.get_secret_value().strip()
    if not key:
        raise RuntimeError("Missing Supabase credential: FLEET_SUPABASE_SERVICE_ROLE_KEY")
    return create_client(settings.url, key, options=_client_options())


def create_anon_client(settings: SupabaseSettings) -> Client:
    """Create a client with the public key, used for end-user sign in.

    Raises:
        RuntimeError: If the anonymous key is not configured
    """
    key = settings.anon_key.get_secret_value().strip()
    if not key:
        raise RuntimeError("Missing Supabase credential: FLEET_SUPABASE_ANON_KEY")
    return create_client(settings.url, key, options=_client_options())


@lru_cache
def get_service_client() -> Client:
    """Get the cached service-role client."""
    return create_service_client(get_supabase_settings())


@lru_cache
def get_anon_client() -> Client:
    """Get the cached anonymous client."""
    return create_anon_client(get_supabase_settings())


async def call_blocking(func: Callable[..., T], *args: Any, timeout: float) -> T:
    """Run a blocking client call in a worker thread with a timeout.

    Raises:
        asyncio.TimeoutError: If the call does not finish within ``timeout``
    """
    return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)
