"""PostgreSQL implementation of IListingRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleet.domain.aggregates import Listing, ListingMediaSet
from fleet.domain.value_objects import ListingId
from fleet.infrastructure.models import ListingModel
from fleet.infrastructure.models.listing import PLATE_NUMBER_CONSTRAINT
from fleet.infrastructure.observability import (
    DefaultListingRepositoryProbe,
    ListingRepositoryProbe,
)
from fleet.ports.exceptions import DuplicatePlateNumberError
from fleet.ports.repositories import IListingRepository
from infrastructure.database.models import violates


class ListingRepository(IListingRepository):
    """Repository managing PostgreSQL storage for Listing aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ListingRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultListingRepositoryProbe()

    async def save(self, listing: Listing) -> None:
        """Insert or update a listing.

        Raises:
            DuplicatePlateNumberError: If another listing has the plate number
        """
        try:
            model = await self._get_model(listing.id)
            if model is None:
                model = ListingModel(id=listing.id.value, tenant_id=listing.tenant_id)
                self._session.add(model)

            model.name = listing.name
            model.plate_number = listing.plate_number
            model.capacity = listing.capacity
            model.hourly_rate = listing.hourly_rate
            model.description = listing.description
            model.features = sorted(listing.features)
            model.primary_image = listing.media.primary
            model.exterior_images = list(listing.media.exterior)
            model.interior_images = list(listing.media.interior)
            model.is_available = listing.is_available

            await self._session.flush()

        except IntegrityError as e:
            if violates(e, PLATE_NUMBER_CONSTRAINT):
                self._probe.duplicate_plate_number(listing.plate_number)
                raise DuplicatePlateNumberError() from e
            raise

        self._probe.listing_saved(listing.id.value, listing.tenant_id)

    async def get_by_id(self, listing_id: ListingId) -> Listing | None:
        model = await self._get_model(listing_id)
        if model is None:
            return None

        self._probe.listing_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_plate_number(self, plate_number: str) -> Listing | None:
        stmt = select(ListingModel).where(ListingModel.plate_number == plate_number)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def delete(self, listing: Listing) -> bool:
        model = await self._get_model(listing.id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.listing_deleted(listing.id.value)
        return True

    async def _get_model(self, listing_id: ListingId) -> ListingModel | None:
        stmt = select(ListingModel).where(ListingModel.id == listing_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: ListingModel) -> Listing:
        return Listing(
            id=ListingId(value=model.id),
            tenant_id=model.tenant_id,
            name=model.name,
            plate_number=model.plate_number,
            capacity=model.capacity,
            hourly_rate=model.hourly_rate,
            media=ListingMediaSet(
                primary=model.primary_image,
                exterior=tuple(model.exterior_images or ()),
                interior=tuple(model.interior_images or ()),
            ),
            description=model.description,
            features=frozenset(model.features or ()),
            is_available=model.is_available,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
