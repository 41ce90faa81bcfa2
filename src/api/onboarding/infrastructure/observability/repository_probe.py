"""Domain probe for tenant repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str, status: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenants_listed(self, status: str, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def duplicate_registration_number(self, registration_number: str) -> None:
        """Record that a duplicate registration number was detected."""
        ...

    def duplicate_owner(self, owner_id: str) -> None:
        """Record that a principal already owns a tenant."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str, status: str) -> None:
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, status: str, count: int) -> None:
        self._logger.debug(
            "tenants_listed",
            status=status,
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_registration_number(self, registration_number: str) -> None:
        self._logger.warning(
            "duplicate_registration_number",
            registration_number=registration_number,
            **self._get_context_kwargs(),
        )

    def duplicate_owner(self, owner_id: str) -> None:
        self._logger.warning(
            "duplicate_tenant_owner",
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )
