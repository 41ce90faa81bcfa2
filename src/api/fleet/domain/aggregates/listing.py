"""Listing aggregate for the fleet context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from fleet.domain.value_objects import ListingId, normalize_plate_number


@dataclass(frozen=True)
class ListingMediaSet:
    """The image references attached to a listing.

    Every reference has passed safety screening. Order is display order.
    """

    primary: str
    exterior: tuple[str, ...] = ()
    interior: tuple[str, ...] = ()

    def all_references(self) -> tuple[str, ...]:
        return (self.primary, *self.exterior, *self.interior)


@dataclass
class Listing:
    """A vehicle offered by an approved operator.

    Business rules:
    - Belongs to exactly one tenant
    - Plate numbers are stored normalized and are globally unique
    - Images only ever come out of the media ingestion pipeline
    """

    id: ListingId
    tenant_id: str
    name: str
    plate_number: str
    capacity: int
    hourly_rate: Decimal
    media: ListingMediaSet
    description: str = ""
    features: frozenset[str] = frozenset()
    is_available: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        tenant_id: str,
        name: str,
        plate_number: str,
        capacity: int,
        hourly_rate: Decimal,
        media: ListingMediaSet,
        description: str = "",
        features: frozenset[str] | set[str] = frozenset(),
        is_available: bool = True,
    ) -> "Listing":
        """Factory method for a new listing with a generated ID."""
        return cls(
            id=ListingId.generate(),
            tenant_id=tenant_id,
            name=name.strip(),
            plate_number=normalize_plate_number(plate_number),
            capacity=capacity,
            hourly_rate=hourly_rate,
            media=media,
            description=description.strip(),
            features=frozenset(features),
            is_available=is_available,
        )

    def revise(
        self,
        name: str,
        plate_number: str,
        capacity: int,
        hourly_rate: Decimal,
        media: ListingMediaSet,
        description: str,
        features: frozenset[str] | set[str],
        is_available: bool,
    ) -> None:
        """Replace the editable fields and the media set."""
        self.name = name.strip()
        self.plate_number = normalize_plate_number(plate_number)
        self.capacity = capacity
        self.hourly_rate = hourly_rate
        self.media = media
        self.description = description.strip()
        self.features = frozenset(features)
        self.is_available = is_available
        self.updated_at = datetime.now(UTC)

    def belongs_to(self, tenant_id: str) -> bool:
        return self.tenant_id == tenant_id
