"""Discriminated results returned by workflows to their callers.

Workflows never raise across the application boundary: they return either
``Success`` carrying the produced data or ``Failure`` carrying a caller-safe
message and an ``ErrorKind``. The presentation layer decides how to render
each variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, Union

from shared_kernel.errors import ErrorKind, FleetError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful completion of a workflow."""

    data: T
    message: str = ""
    status: Literal["success"] = "success"

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Terminal failure of a workflow, with any compensation already applied."""

    message: str
    kind: ErrorKind
    field: str | None = None
    status: Literal["error"] = "error"

    @property
    def is_success(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: FleetError) -> Failure:
        """Build a failure from a typed workflow error."""
        return cls(message=error.message, kind=error.kind, field=error.field)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the error envelope exposed to callers."""
        body: dict[str, Any] = {
            "status": self.status,
            "message": self.message,
            "kind": self.kind.value,
        }
        if self.field is not None:
            body["field"] = self.field
        return body


OperationResult = Union[Success[T], Failure]
