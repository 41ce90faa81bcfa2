"""Observability probes for saga execution.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering the saga runner with logging concerns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SagaProbe(Protocol):
    """Protocol for saga execution observability."""

    def step_completed(self, saga: str, step: str) -> None:
        """Record that a saga step completed."""
        ...

    def step_failed(self, saga: str, step: str, kind: str, error: str) -> None:
        """Record that a saga step failed and compensation will start."""
        ...

    def compensation_applied(self, saga: str, step: str) -> None:
        """Record that a compensating action succeeded."""
        ...

    def compensation_failed(self, saga: str, step: str, error: str) -> None:
        """Record that a compensating action failed, leaving partial state."""
        ...

    def with_context(self, context: ObservationContext) -> SagaProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSagaProbe:
    """Default implementation of SagaProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSagaProbe:
        """Create a new probe with observation context bound."""
        return DefaultSagaProbe(logger=self._logger, context=context)

    def step_completed(self, saga: str, step: str) -> None:
        self._logger.debug(
            "saga_step_completed",
            saga=saga,
            step=step,
            **self._get_context_kwargs(),
        )

    def step_failed(self, saga: str, step: str, kind: str, error: str) -> None:
        self._logger.warning(
            "saga_step_failed",
            saga=saga,
            step=step,
            kind=kind,
            error=error,
            **self._get_context_kwargs(),
        )

    def compensation_applied(self, saga: str, step: str) -> None:
        self._logger.info(
            "saga_compensation_applied",
            saga=saga,
            step=step,
            **self._get_context_kwargs(),
        )

    def compensation_failed(self, saga: str, step: str, error: str) -> None:
        """Partial state remains; this event is the reconciliation signal."""
        self._logger.error(
            "saga_compensation_failed",
            saga=saga,
            step=step,
            error=error,
            requires_manual_reconciliation=True,
            **self._get_context_kwargs(),
        )
