"""SQLAlchemy ORM model for the listings table."""

from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fleet.domain.value_objects import MAX_LISTING_NAME_LENGTH, MAX_PLATE_NUMBER_LENGTH
from infrastructure.database.models import Base, TimestampMixin

PLATE_NUMBER_CONSTRAINT = "uq_listings_plate_number"


class ListingModel(Base, TimestampMixin):
    """ORM model for listings table.

    Plate numbers are stored normalized and are globally unique. Image
    columns hold public URLs.
    """

    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(MAX_LISTING_NAME_LENGTH), nullable=False
    )
    plate_number: Mapped[str] = mapped_column(
        String(MAX_PLATE_NUMBER_LENGTH), nullable=False, unique=True
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    primary_image: Mapped[str] = mapped_column(Text, nullable=False)
    exterior_images: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    interior_images: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ListingModel(id={self.id}, plate_number={self.plate_number})>"
