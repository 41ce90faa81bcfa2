"""Domain-Oriented Observability for fleet infrastructure."""

from fleet.infrastructure.observability.classifier_probe import (
    ClassifierProbe,
    DefaultClassifierProbe,
)
from fleet.infrastructure.observability.repository_probe import (
    DefaultListingRepositoryProbe,
    ListingRepositoryProbe,
)

__all__ = [
    "ClassifierProbe",
    "DefaultClassifierProbe",
    "ListingRepositoryProbe",
    "DefaultListingRepositoryProbe",
]
