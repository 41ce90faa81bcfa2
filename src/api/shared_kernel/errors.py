"""Error taxonomy shared by every bounded context.

Every step-level failure inside a workflow is translated into exactly one
of these kinds before it leaves the application layer. Raw causes from
external services are chained with ``raise ... from`` for logging, but
only ``message`` and ``field`` are ever shown to callers.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Discriminator for failures surfaced to callers."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNSAFE_CONTENT = "unsafe_content"
    DEPENDENCY = "dependency"
    CONSISTENCY_GAP = "consistency_gap"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"


class FleetError(Exception):
    """Base class for all typed workflow failures.

    Attributes:
        message: Caller-safe description of the failure
        field: Offending input field, when one can be named
    """

    kind: ErrorKind = ErrorKind.DEPENDENCY
    default_message: str = "The request could not be completed. Please try again."

    def __init__(self, message: str | None = None, field: str | None = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(FleetError):
    """Caller input is malformed. Not retryable without changing the input."""

    kind = ErrorKind.VALIDATION
    default_message = "Please check your inputs."


class ConflictError(FleetError):
    """A uniqueness rule was violated. Retry only with a different value."""

    kind = ErrorKind.CONFLICT
    default_message = "This record already exists."


class UnsafeContentError(FleetError):
    """Uploaded content was rejected by the safety screen.

    Carries the violating category but never the raw classifier scores.
    """

    kind = ErrorKind.UNSAFE_CONTENT
    default_message = "One or more images were rejected by content screening."

    def __init__(
        self,
        category: str,
        message: str | None = None,
        field: str | None = None,
    ):
        self.category = category
        super().__init__(message, field)


class DependencyError(FleetError):
    """An external service failed or timed out. The caller may retry."""

    kind = ErrorKind.DEPENDENCY
    default_message = "A required service is unavailable. Please try again."


class ConsistencyGapError(FleetError):
    """Partial state was left behind and needs manual reconciliation.

    Raised when a compensating action fails, or when the second write of a
    non-transactional pair fails after the first one committed.
    """

    kind = ErrorKind.CONSISTENCY_GAP
    default_message = (
        "The request was only partially applied and has been flagged for review."
    )


class NotFoundError(FleetError):
    """The referenced record does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "The requested record was not found."


class UnauthorizedError(FleetError):
    """The acting principal may not perform this operation."""

    kind = ErrorKind.FORBIDDEN
    default_message = "You do not have permission to perform this action."


class UnauthenticatedError(FleetError):
    """The caller could not be identified, e.g. wrong email or password."""

    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required."
