"""Shared infrastructure dependencies.

Provides raw infrastructure resources (Supabase clients, bucket-bound blob
stores). Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.settings import get_supabase_settings
from infrastructure.supabase_client import get_service_client
from shared_kernel.storage import IBlobStore
from shared_kernel.storage.supabase_blob_store import SupabaseBlobStore


@lru_cache
def get_document_store() -> IBlobStore:
    """Blob store bound to the private verification documents bucket."""
    settings = get_supabase_settings()
    return SupabaseBlobStore(
        client=get_service_client(),
        bucket=settings.documents_bucket,
        timeout_seconds=settings.timeout_seconds,
    )


@lru_cache
def get_image_store() -> IBlobStore:
    """Blob store bound to the public listing images bucket."""
    settings = get_supabase_settings()
    return SupabaseBlobStore(
        client=get_service_client(),
        bucket=settings.images_bucket,
        timeout_seconds=settings.timeout_seconds,
    )
