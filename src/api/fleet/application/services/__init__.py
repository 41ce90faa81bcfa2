"""Application services for the fleet bounded context."""

from fleet.application.services.listing_service import ListingService
from fleet.application.services.media_ingestion import MediaIngestionPipeline
from fleet.application.services.safety_gate import SafetyGate

__all__ = ["ListingService", "MediaIngestionPipeline", "SafetyGate"]
