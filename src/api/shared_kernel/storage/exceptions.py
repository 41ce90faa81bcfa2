"""Exceptions for blob storage operations."""

from shared_kernel.errors import DependencyError


class BlobStoreError(DependencyError):
    """Raised when a blob cannot be written or the store is unreachable.

    Covers transport failures, timeouts and rejected writes (including an
    existing object at the same path, since uploads never overwrite).
    """

    pass
