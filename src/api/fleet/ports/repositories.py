"""Repository protocols (ports) for the fleet bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fleet.domain.aggregates import Listing
from fleet.domain.value_objects import ListingId


@runtime_checkable
class IListingRepository(Protocol):
    """Repository for Listing aggregate persistence.

    Plate number uniqueness is enforced by a unique index.
    """

    async def save(self, listing: Listing) -> None:
        """Insert a new listing or update an existing one.

        Raises:
            DuplicatePlateNumberError: If another listing has the plate number
        """
        ...

    async def get_by_id(self, listing_id: ListingId) -> Listing | None:
        """Retrieve a listing by its ID."""
        ...

    async def get_by_plate_number(self, plate_number: str) -> Listing | None:
        """Retrieve a listing by its normalized plate number."""
        ...

    async def delete(self, listing: Listing) -> bool:
        """Delete a listing.

        Returns:
            True if deleted, False if not found
        """
        ...
