"""Domain probe for the identity provider adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProviderProbe(Protocol):
    """Domain probe for identity provider calls."""

    def principal_created(self, principal_id: str) -> None:
        """Record that a principal was created."""
        ...

    def principal_deleted(self, principal_id: str) -> None:
        """Record that a principal was deleted."""
        ...

    def role_changed(self, principal_id: str, role: str) -> None:
        """Record that a principal's role was replaced."""
        ...

    def identity_call_failed(self, operation: str, error: str) -> None:
        """Record that a call to the identity provider failed."""
        ...

    def session_rejected(self) -> None:
        """Record that a bearer token could not be resolved."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProviderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProviderProbe:
    """Default implementation of IdentityProviderProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProviderProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProviderProbe(logger=self._logger, context=context)

    def principal_created(self, principal_id: str) -> None:
        self._logger.info(
            "identity_principal_created",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_deleted(self, principal_id: str) -> None:
        self._logger.info(
            "identity_principal_deleted",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def role_changed(self, principal_id: str, role: str) -> None:
        self._logger.info(
            "identity_role_changed",
            principal_id=principal_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def identity_call_failed(self, operation: str, error: str) -> None:
        self._logger.error(
            "identity_call_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )

    def session_rejected(self) -> None:
        self._logger.debug("identity_session_rejected", **self._get_context_kwargs())
