"""SQLAlchemy ORM models for the fleet bounded context."""

from fleet.infrastructure.models.listing import ListingModel

__all__ = ["ListingModel"]
