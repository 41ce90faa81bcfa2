"""Domain probe for listing media ingestion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MediaIngestionProbe(Protocol):
    """Domain probe for media ingestion operations."""

    def media_rejected(self, owner_id: str, field: str | None, reason: str) -> None:
        """Record that a batch failed validation or screening."""
        ...

    def media_ingested(self, owner_id: str, uploaded: int, retained: int) -> None:
        """Record that a batch was stored."""
        ...

    def orphaned_blobs(self, owner_id: str, paths: list[str]) -> None:
        """Record blobs left behind by a partially failed upload."""
        ...

    def with_context(self, context: ObservationContext) -> MediaIngestionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMediaIngestionProbe:
    """Default implementation of MediaIngestionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMediaIngestionProbe:
        """Create a new probe with observation context bound."""
        return DefaultMediaIngestionProbe(logger=self._logger, context=context)

    def media_rejected(self, owner_id: str, field: str | None, reason: str) -> None:
        self._logger.info(
            "media_rejected",
            owner_id=owner_id,
            field=field,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def media_ingested(self, owner_id: str, uploaded: int, retained: int) -> None:
        self._logger.info(
            "media_ingested",
            owner_id=owner_id,
            uploaded=uploaded,
            retained=retained,
            **self._get_context_kwargs(),
        )

    def orphaned_blobs(self, owner_id: str, paths: list[str]) -> None:
        """Orphans are an accepted tradeoff; informational only."""
        self._logger.info(
            "orphaned_blobs",
            owner_id=owner_id,
            paths=paths,
            count=len(paths),
            **self._get_context_kwargs(),
        )
