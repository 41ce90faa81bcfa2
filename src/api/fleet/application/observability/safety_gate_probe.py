"""Domain probe for image safety screening.

Raw classifier scores are only ever written here, never returned to
callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SafetyGateProbe(Protocol):
    """Domain probe for safety gate operations."""

    def image_classified(
        self, image_index: int, adult: str, violence: str, suggestive: str
    ) -> None:
        """Record the scores of one image."""
        ...

    def classification_failed(self, image_index: int, error: str) -> None:
        """Record that an image could not be classified."""
        ...

    def batch_rejected(self, category: str, image_index: int, batch_size: int) -> None:
        """Record that a batch was rejected."""
        ...

    def batch_accepted(self, batch_size: int) -> None:
        """Record that a batch passed screening."""
        ...

    def failed_open(self, image_index: int) -> None:
        """Record that an unverified image was accepted by the fail-open override."""
        ...

    def with_context(self, context: ObservationContext) -> SafetyGateProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSafetyGateProbe:
    """Default implementation of SafetyGateProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSafetyGateProbe:
        """Create a new probe with observation context bound."""
        return DefaultSafetyGateProbe(logger=self._logger, context=context)

    def image_classified(
        self, image_index: int, adult: str, violence: str, suggestive: str
    ) -> None:
        self._logger.debug(
            "image_classified",
            image_index=image_index,
            adult=adult,
            violence=violence,
            suggestive=suggestive,
            **self._get_context_kwargs(),
        )

    def classification_failed(self, image_index: int, error: str) -> None:
        self._logger.error(
            "image_classification_failed",
            image_index=image_index,
            error=error,
            **self._get_context_kwargs(),
        )

    def batch_rejected(self, category: str, image_index: int, batch_size: int) -> None:
        self._logger.warning(
            "image_batch_rejected",
            category=category,
            image_index=image_index,
            batch_size=batch_size,
            **self._get_context_kwargs(),
        )

    def batch_accepted(self, batch_size: int) -> None:
        self._logger.debug(
            "image_batch_accepted",
            batch_size=batch_size,
            **self._get_context_kwargs(),
        )

    def failed_open(self, image_index: int) -> None:
        self._logger.warning(
            "image_screening_failed_open",
            image_index=image_index,
            **self._get_context_kwargs(),
        )
