"""Domain probe for the content classifier adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClassifierProbe(Protocol):
    """Domain probe for classifier calls."""

    def classifier_called(self, size_bytes: int) -> None:
        """Record a successful classification request."""
        ...

    def classifier_call_failed(self, error: str) -> None:
        """Record a failed classification request."""
        ...

    def with_context(self, context: ObservationContext) -> ClassifierProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClassifierProbe:
    """Default implementation of ClassifierProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultClassifierProbe:
        """Create a new probe with observation context bound."""
        return DefaultClassifierProbe(logger=self._logger, context=context)

    def classifier_called(self, size_bytes: int) -> None:
        self._logger.debug(
            "classifier_called",
            size_bytes=size_bytes,
            **self._get_context_kwargs(),
        )

    def classifier_call_failed(self, error: str) -> None:
        self._logger.error(
            "classifier_call_failed",
            error=error,
            **self._get_context_kwargs(),
        )
