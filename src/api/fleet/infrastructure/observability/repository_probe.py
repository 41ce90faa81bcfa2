"""Domain probe for listing repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ListingRepositoryProbe(Protocol):
    """Domain probe for listing repository operations."""

    def listing_saved(self, listing_id: str, tenant_id: str) -> None:
        """Record that a listing was successfully saved."""
        ...

    def listing_retrieved(self, listing_id: str) -> None:
        """Record that a listing was retrieved."""
        ...

    def listing_deleted(self, listing_id: str) -> None:
        """Record that a listing was deleted."""
        ...

    def duplicate_plate_number(self, plate_number: str) -> None:
        """Record that a duplicate plate number was detected."""
        ...

    def with_context(self, context: ObservationContext) -> ListingRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultListingRepositoryProbe:
    """Default implementation of ListingRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultListingRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultListingRepositoryProbe(logger=self._logger, context=context)

    def listing_saved(self, listing_id: str, tenant_id: str) -> None:
        self._logger.info(
            "listing_saved",
            listing_id=listing_id,
            listing_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def listing_retrieved(self, listing_id: str) -> None:
        self._logger.debug(
            "listing_retrieved",
            listing_id=listing_id,
            **self._get_context_kwargs(),
        )

    def listing_deleted(self, listing_id: str) -> None:
        self._logger.info(
            "listing_deleted_from_store",
            listing_id=listing_id,
            **self._get_context_kwargs(),
        )

    def duplicate_plate_number(self, plate_number: str) -> None:
        self._logger.warning(
            "duplicate_plate_number",
            plate_number=plate_number,
            **self._get_context_kwargs(),
        )
