"""Protocol for tenant approval service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ApprovalServiceProbe(Protocol):
    """Domain probe for tenant review operations."""

    def tenant_approved(self, tenant_id: str, owner_id: str, reviewer_id: str) -> None:
        """Record that a tenant was approved and its owner promoted."""
        ...

    def tenant_rejected(self, tenant_id: str, reviewer_id: str) -> None:
        """Record that a tenant was rejected."""
        ...

    def review_denied(self, principal_id: str, role: str) -> None:
        """Record that a non-reviewer attempted a review."""
        ...

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that the reviewed tenant does not exist."""
        ...

    def invalid_transition(self, tenant_id: str, status: str, target: str) -> None:
        """Record an attempt to review a tenant that is not pending."""
        ...

    def role_escalation_gap(self, tenant_id: str, owner_id: str, error: str) -> None:
        """Record that a tenant is approved but its owner was not promoted."""
        ...

    def role_reconciled(self, tenant_id: str, owner_id: str) -> None:
        """Record that a missing owner promotion was re-applied."""
        ...

    def role_reconciliation_failed(
        self, tenant_id: str, owner_id: str, error: str
    ) -> None:
        """Record that re-applying an owner promotion failed."""
        ...

    def role_reconciliation_aborted(self, error: str) -> None:
        """Record that the reconciliation run could not list approved tenants."""
        ...

    def review_failed(self, tenant_id: str, kind: str, error: str) -> None:
        """Record that a review ended in a failure."""
        ...

    def with_context(self, context: ObservationContext) -> ApprovalServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultApprovalServiceProbe:
    """Default implementation of ApprovalServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultApprovalServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultApprovalServiceProbe(logger=self._logger, context=context)

    def tenant_approved(self, tenant_id: str, owner_id: str, reviewer_id: str) -> None:
        self._logger.info(
            "tenant_approved",
            tenant_id=tenant_id,
            owner_id=owner_id,
            reviewer_id=reviewer_id,
            **self._get_context_kwargs(),
        )

    def tenant_rejected(self, tenant_id: str, reviewer_id: str) -> None:
        self._logger.info(
            "tenant_rejected",
            tenant_id=tenant_id,
            reviewer_id=reviewer_id,
            **self._get_context_kwargs(),
        )

    def review_denied(self, principal_id: str, role: str) -> None:
        self._logger.warning(
            "review_denied",
            principal_id=principal_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def invalid_transition(self, tenant_id: str, status: str, target: str) -> None:
        self._logger.info(
            "invalid_status_transition",
            tenant_id=tenant_id,
            status=status,
            target=target,
            **self._get_context_kwargs(),
        )

    def role_escalation_gap(self, tenant_id: str, owner_id: str, error: str) -> None:
        """The tenant row says approved while the owner is still a rider."""
        self._logger.error(
            "role_escalation_gap",
            tenant_id=tenant_id,
            owner_id=owner_id,
            error=error,
            requires_manual_reconciliation=True,
            **self._get_context_kwargs(),
        )

    def role_reconciled(self, tenant_id: str, owner_id: str) -> None:
        self._logger.info(
            "role_reconciled",
            tenant_id=tenant_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def role_reconciliation_failed(
        self, tenant_id: str, owner_id: str, error: str
    ) -> None:
        self._logger.error(
            "role_reconciliation_failed",
            tenant_id=tenant_id,
            owner_id=owner_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def role_reconciliation_aborted(self, error: str) -> None:
        self._logger.error(
            "role_reconciliation_aborted",
            error=error,
            **self._get_context_kwargs(),
        )

    def review_failed(self, tenant_id: str, kind: str, error: str) -> None:
        self._logger.warning(
            "review_failed",
            tenant_id=tenant_id,
            kind=kind,
            error=error,
            **self._get_context_kwargs(),
        )
