"""Protocol for listing service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ListingServiceProbe(Protocol):
    """Domain probe for listing application service operations."""

    def listing_created(self, listing_id: str, tenant_id: str) -> None:
        """Record that a listing was created."""
        ...

    def listing_updated(self, listing_id: str, tenant_id: str) -> None:
        """Record that a listing was updated."""
        ...

    def listing_deleted(self, listing_id: str, tenant_id: str) -> None:
        """Record that a listing was deleted."""
        ...

    def listing_access_denied(self, principal_id: str, reason: str) -> None:
        """Record that a principal was refused a listing operation."""
        ...

    def listing_operation_failed(
        self, operation: str, kind: str, field: str | None, error: str
    ) -> None:
        """Record that a listing operation ended in a failure."""
        ...

    def with_context(self, context: ObservationContext) -> ListingServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultListingServiceProbe:
    """Default implementation of ListingServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultListingServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultListingServiceProbe(logger=self._logger, context=context)

    def listing_created(self, listing_id: str, tenant_id: str) -> None:
        self._logger.info(
            "listing_created",
            listing_id=listing_id,
            listing_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def listing_updated(self, listing_id: str, tenant_id: str) -> None:
        self._logger.info(
            "listing_updated",
            listing_id=listing_id,
            listing_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def listing_deleted(self, listing_id: str, tenant_id: str) -> None:
        self._logger.info(
            "listing_deleted",
            listing_id=listing_id,
            listing_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def listing_access_denied(self, principal_id: str, reason: str) -> None:
        self._logger.warning(
            "listing_access_denied",
            acting_principal_id=principal_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def listing_operation_failed(
        self, operation: str, kind: str, field: str | None, error: str
    ) -> None:
        self._logger.warning(
            "listing_operation_failed",
            operation=operation,
            kind=kind,
            field=field,
            error=error,
            **self._get_context_kwargs(),
        )
