"""Blob store port.

Binary assets (verification documents, listing photos) are addressed by
path within a bucket. Implementations return a stable reference for each
write; references are opaque to callers apart from ``public_url``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IBlobStore(Protocol):
    """Path-addressed binary storage bound to a single bucket."""

    async def put(self, path: str, content: bytes, content_type: str) -> str:
        """Write a new object.

        Args:
            path: Object path within the bucket; must not already exist
            content: Raw bytes
            content_type: MIME type stored with the object

        Returns:
            Stable reference to the stored object (its path)

        Raises:
            BlobStoreError: If the write fails or times out
        """
        ...

    def public_url(self, ref: str) -> str:
        """Return the URL under which a stored object is served."""
        ...
