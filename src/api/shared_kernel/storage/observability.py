"""Domain probe for blob store adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BlobStoreProbe(Protocol):
    """Domain probe for blob storage operations."""

    def blob_stored(self, bucket: str, path: str, size_bytes: int) -> None:
        """Record that an object was written."""
        ...

    def blob_store_failed(self, bucket: str, path: str, error: str) -> None:
        """Record that an object write failed."""
        ...

    def with_context(self, context: ObservationContext) -> BlobStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultBlobStoreProbe:
    """Default implementation of BlobStoreProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultBlobStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultBlobStoreProbe(logger=self._logger, context=context)

    def blob_stored(self, bucket: str, path: str, size_bytes: int) -> None:
        self._logger.debug(
            "blob_stored",
            bucket=bucket,
            path=path,
            size_bytes=size_bytes,
            **self._get_context_kwargs(),
        )

    def blob_store_failed(self, bucket: str, path: str, error: str) -> None:
        self._logger.error(
            "blob_store_failed",
            bucket=bucket,
            path=path,
            error=error,
            **self._get_context_kwargs(),
        )
