"""Aggregates for the fleet bounded context."""

from fleet.domain.aggregates.listing import Listing, ListingMediaSet

__all__ = ["Listing", "ListingMediaSet"]
