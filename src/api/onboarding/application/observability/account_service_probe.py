"""Protocol for rider account service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccountServiceProbe(Protocol):
    """Domain probe for rider sign up and sign in."""

    def sign_up_rejected(self, field: str | None, reason: str) -> None:
        """Record that a sign up failed validation."""
        ...

    def rider_signed_up(self, principal_id: str) -> None:
        """Record that a rider principal was created."""
        ...

    def sign_up_failed(self, kind: str, error: str) -> None:
        """Record that creating the rider principal failed."""
        ...

    def auto_authentication_failed(self, principal_id: str, error: str) -> None:
        """Record that the post sign up sign in failed."""
        ...

    def signed_in(self) -> None:
        """Record a successful sign in."""
        ...

    def sign_in_failed(self, kind: str, error: str) -> None:
        """Record a refused or failed sign in."""
        ...

    def with_context(self, context: ObservationContext) -> AccountServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccountServiceProbe:
    """Default implementation of AccountServiceProbe using structlog.

    Emails and passwords are never logged.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultAccountServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccountServiceProbe(logger=self._logger, context=context)

    def sign_up_rejected(self, field: str | None, reason: str) -> None:
        self._logger.info(
            "sign_up_rejected",
            field=field,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def rider_signed_up(self, principal_id: str) -> None:
        self._logger.info(
            "rider_signed_up",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def sign_up_failed(self, kind: str, error: str) -> None:
        self._logger.warning(
            "sign_up_failed",
            kind=kind,
            error=error,
            **self._get_context_kwargs(),
        )

    def auto_authentication_failed(self, principal_id: str, error: str) -> None:
        self._logger.warning(
            "auto_authentication_failed",
            principal_id=principal_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def signed_in(self) -> None:
        self._logger.debug("signed_in", **self._get_context_kwargs())

    def sign_in_failed(self, kind: str, error: str) -> None:
        self._logger.info(
            "sign_in_failed",
            kind=kind,
            error=error,
            **self._get_context_kwargs(),
        )
