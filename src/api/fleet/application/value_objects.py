"""Application-layer value objects for the fleet bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from fleet.domain.value_objects import (
    MAX_CAPACITY,
    MAX_HOURLY_RATE,
    MAX_LISTING_NAME_LENGTH,
    MAX_PLATE_NUMBER_LENGTH,
    normalize_plate_number,
)
from shared_kernel.errors import ValidationError
from shared_kernel.uploads import UploadedFile

MIN_NAME_LENGTH = 2


@dataclass(frozen=True)
class Actor:
    """The authenticated principal performing a fleet operation."""

    principal_id: str
    is_operator_admin: bool


@dataclass(frozen=True)
class ListingDraft:
    """Editable listing fields submitted by an operator."""

    name: str
    plate_number: str
    capacity: int
    hourly_rate: Decimal
    description: str = ""
    features: frozenset[str] = frozenset()
    is_available: bool = True

    def validate(self) -> None:
        """Check every field, reporting the first one that fails.

        Length and range limits match the listings table so no accepted
        draft fails at write time, after its images were uploaded.

        Raises:
            ValidationError: With ``field`` naming the offending input
        """
        name = self.name.strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError("Vehicle name is required", field="name")
        if len(name) > MAX_LISTING_NAME_LENGTH:
            raise ValidationError(
                f"Vehicle name must be at most {MAX_LISTING_NAME_LENGTH} characters",
                field="name",
            )
        plate_number = normalize_plate_number(self.plate_number)
        if not plate_number:
            raise ValidationError("Plate number is required", field="plate_number")
        if len(plate_number) > MAX_PLATE_NUMBER_LENGTH:
            raise ValidationError(
                f"Plate number must be at most {MAX_PLATE_NUMBER_LENGTH} characters",
                field="plate_number",
            )
        if self.capacity <= 0:
            raise ValidationError("Capacity must be at least 1", field="capacity")
        if self.capacity > MAX_CAPACITY:
            raise ValidationError("Capacity is too large", field="capacity")
        if not self.hourly_rate.is_finite() or self.hourly_rate < 0:
            raise ValidationError(
                "Rate per hour cannot be negative", field="hourly_rate"
            )
        if self.hourly_rate > MAX_HOURLY_RATE:
            raise ValidationError(
                f"Rate per hour must be at most {MAX_HOURLY_RATE}",
                field="hourly_rate",
            )


@dataclass(frozen=True)
class UploadBatch:
    """Images submitted with one listing create or update.

    Empty file parts (a form field left blank) are dropped on construction.

    Attributes:
        primary: New cover photo, or None to keep the existing one
        exterior: New exterior photos
        interior: New interior photos
        retained_exterior: References of existing exterior photos to keep
        retained_interior: References of existing interior photos to keep
    """

    primary: UploadedFile | None = None
    exterior: tuple[UploadedFile, ...] = field(default_factory=tuple)
    interior: tuple[UploadedFile, ...] = field(default_factory=tuple)
    retained_exterior: tuple[str, ...] = field(default_factory=tuple)
    retained_interior: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.primary is not None and self.primary.is_empty:
            object.__setattr__(self, "primary", None)
        object.__setattr__(
            self, "exterior", tuple(f for f in self.exterior if not f.is_empty)
        )
        object.__setattr__(
            self, "interior", tuple(f for f in self.interior if not f.is_empty)
        )
        object.__setattr__(
            self, "retained_exterior", tuple(r for r in self.retained_exterior if r)
        )
        object.__setattr__(
            self, "retained_interior", tuple(r for r in self.retained_interior if r)
        )

    @property
    def new_image_count(self) -> int:
        return (1 if self.primary else 0) + len(self.exterior) + len(self.interior)
