"""Pydantic models for fleet API responses."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from fleet.domain.aggregates import Listing


class ListingResponse(BaseModel):
    """Response model for a vehicle listing."""

    id: str = Field(..., description="Listing ID (ULID format)")
    tenant_id: str = Field(..., description="Owning Sacco ID")
    name: str
    plate_number: str = Field(..., description="Normalized plate number")
    capacity: int
    rate_per_hour: Decimal
    description: str
    features: list[str]
    cover_photo: str = Field(..., description="Public URL of the cover photo")
    exterior_photos: list[str]
    interior_photos: list[str]
    is_available: bool

    @classmethod
    def from_domain(cls, listing: Listing) -> ListingResponse:
        """Convert domain Listing aggregate to API response."""
        return cls(
            id=listing.id.value,
            tenant_id=listing.tenant_id,
            name=listing.name,
            plate_number=listing.plate_number,
            capacity=listing.capacity,
            rate_per_hour=listing.hourly_rate,
            description=listing.description,
            features=sorted(listing.features),
            cover_photo=listing.media.primary,
            exterior_photos=list(listing.media.exterior),
            interior_photos=list(listing.media.interior),
            is_available=listing.is_available,
        )
