"""Supabase Storage implementation of IBlobStore."""

from __future__ import annotations

from typing import TYPE_CHECKING

from infrastructure.supabase_client import call_blocking
from shared_kernel.storage.exceptions import BlobStoreError
from shared_kernel.storage.observability import BlobStoreProbe, DefaultBlobStoreProbe
from shared_kernel.storage.ports import IBlobStore

if TYPE_CHECKING:
    from supabase import Client


class SupabaseBlobStore(IBlobStore):
    """Blob store backed by one Supabase Storage bucket.

    Uploads are issued with ``upsert`` disabled so two writers can never
    silently overwrite each other; callers generate collision-resistant
    paths instead.
    """

    def __init__(
        self,
        client: "Client",
        bucket: str,
        timeout_seconds: float,
        probe: BlobStoreProbe | None = None,
    ):
        """Initialize the adapter.

        Args:
            client: Service-role Supabase client
            bucket: Bucket name this store writes to
            timeout_seconds: Bound on a single upload
            probe: Optional domain probe for observability
        """
        self._client = client
        self._bucket = bucket
        self._timeout = timeout_seconds
        self._probe = probe or DefaultBlobStoreProbe()

    @property
    def bucket(self) -> str:
        return self._bucket

    async def put(self, path: str, content: bytes, content_type: str) -> str:
        """Upload an object and return its path as the reference.

        Raises:
            BlobStoreError: If the upload fails or times out
        """
        storage = self._client.storage.from_(self._bucket)
        try:
            await call_blocking(
                storage.upload,
                path,
                content,
                {"content-type": content_type, "upsert": "false"},
                timeout=self._timeout,
            )
        except Exception as e:
            self._probe.blob_store_failed(
                bucket=self._bucket, path=path, error=repr(e)
            )
            raise BlobStoreError() from e

        self._probe.blob_stored(
            bucket=self._bucket, path=path, size_bytes=len(content)
        )
        return path

    def public_url(self, ref: str) -> str:
        """Return the public URL of an object in this bucket."""
        return self._client.storage.from_(self._bucket).get_public_url(ref)
