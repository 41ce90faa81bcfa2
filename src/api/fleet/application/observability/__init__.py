"""Domain-Oriented Observability for the fleet application layer."""

from fleet.application.observability.listing_service_probe import (
    DefaultListingServiceProbe,
    ListingServiceProbe,
)
from fleet.application.observability.media_ingestion_probe import (
    DefaultMediaIngestionProbe,
    MediaIngestionProbe,
)
from fleet.application.observability.safety_gate_probe import (
    DefaultSafetyGateProbe,
    SafetyGateProbe,
)

__all__ = [
    "ListingServiceProbe",
    "DefaultListingServiceProbe",
    "MediaIngestionProbe",
    "DefaultMediaIngestionProbe",
    "SafetyGateProbe",
    "DefaultSafetyGateProbe",
]
