"""Ports for the fleet bounded context."""

from fleet.ports.classifier import IContentClassifier
from fleet.ports.operators import IOperatorDirectory, OperatorAccount
from fleet.ports.repositories import IListingRepository

__all__ = [
    "IContentClassifier",
    "IListingRepository",
    "IOperatorDirectory",
    "OperatorAccount",
]
