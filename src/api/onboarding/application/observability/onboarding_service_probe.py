"""Protocol for tenant onboarding service observability.

Defines the interface for domain probes that capture application-level
domain events for the self-registration workflow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OnboardingServiceProbe(Protocol):
    """Domain probe for tenant onboarding operations."""

    def registration_rejected(self, field: str | None, reason: str) -> None:
        """Record that a registration failed validation."""
        ...

    def principal_provisioned(self, principal_id: str) -> None:
        """Record that the applicant's principal was created."""
        ...

    def documents_stored(self, principal_id: str, count: int) -> None:
        """Record that verification documents were stored."""
        ...

    def tenant_registered(
        self, tenant_id: str, principal_id: str, registration_number: str
    ) -> None:
        """Record that a pending tenant was created."""
        ...

    def auto_authentication_failed(self, principal_id: str, error: str) -> None:
        """Record that the post-registration sign in failed."""
        ...

    def onboarding_failed(
        self,
        kind: str,
        field: str | None,
        error: str,
        principal_id: str | None = None,
    ) -> None:
        """Record that the workflow ended in a failure."""
        ...

    def with_context(self, context: ObservationContext) -> OnboardingServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOnboardingServiceProbe:
    """Default implementation of OnboardingServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultOnboardingServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultOnboardingServiceProbe(logger=self._logger, context=context)

    def registration_rejected(self, field: str | None, reason: str) -> None:
        self._logger.info(
            "registration_rejected",
            field=field,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def principal_provisioned(self, principal_id: str) -> None:
        self._logger.info(
            "principal_provisioned",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def documents_stored(self, principal_id: str, count: int) -> None:
        self._logger.info(
            "verification_documents_stored",
            principal_id=principal_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_registered(
        self, tenant_id: str, principal_id: str, registration_number: str
    ) -> None:
        self._logger.info(
            "tenant_registered",
            tenant_id=tenant_id,
            principal_id=principal_id,
            registration_number=registration_number,
            **self._get_context_kwargs(),
        )

    def auto_authentication_failed(self, principal_id: str, error: str) -> None:
        self._logger.warning(
            "auto_authentication_failed",
            principal_id=principal_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def onboarding_failed(
        self,
        kind: str,
        field: str | None,
        error: str,
        principal_id: str | None = None,
    ) -> None:
        self._logger.warning(
            "onboarding_failed",
            kind=kind,
            field=field,
            error=error,
            applicant_principal_id=principal_id,
            **self._get_context_kwargs(),
        )
