"""Value objects for the fleet domain.

Covers listing identity, plate normalization and the safety screening
vocabulary: ordered likelihoods, violation categories and verdicts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum, StrEnum

from ulid import ULID

_WHITESPACE = re.compile(r"\s+")

# Column widths of the listings table.
MAX_LISTING_NAME_LENGTH = 255
MAX_PLATE_NUMBER_LENGTH = 32
MAX_CAPACITY = 2**31 - 1
MAX_HOURLY_RATE = Decimal("9999999999.99")


@dataclass(frozen=True)
class ListingId:
    """Identifier for a Listing aggregate (ULID)."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> ListingId:
        """Generate a new ListingId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> ListingId:
        """Create ListingId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid ListingId: {value}") from e

        return cls(value=value)


def normalize_plate_number(raw: str) -> str:
    """Trim, collapse inner whitespace and upper-case a plate number.

    "kdc 123a" and " KDC  123A " are the same vehicle.
    """
    return _WHITESPACE.sub(" ", raw.strip()).upper()


class Likelihood(IntEnum):
    """Classifier confidence that an image shows a category. Ordered."""

    UNKNOWN = 0
    VERY_UNLIKELY = 1
    UNLIKELY = 2
    POSSIBLE = 3
    LIKELY = 4
    VERY_LIKELY = 5

    @classmethod
    def from_label(cls, label: str | None) -> Likelihood:
        """Parse a label such as "VERY_LIKELY" or "very_likely".

        Raises:
            ValueError: If the label is missing or unknown
        """
        if not label:
            raise ValueError("Missing likelihood label")
        try:
            return cls[label.strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unknown likelihood label: {label}") from e


class SafetyCategory(StrEnum):
    """Reason a batch of images was rejected.

    UNVERIFIED means no verdict could be obtained (classifier failure).
    """

    ADULT = "adult"
    VIOLENCE = "violence"
    SUGGESTIVE = "suggestive"
    UNVERIFIED = "unverified"


@dataclass(frozen=True)
class SafetyScores:
    """Independent per-category likelihoods for one image."""

    adult: Likelihood
    violence: Likelihood
    suggestive: Likelihood

    def violation(self) -> SafetyCategory | None:
        """First violated category, checked as adult, violence, suggestive.

        Adult and violence reject at LIKELY; suggestive content only at
        VERY_LIKELY.
        """
        if self.adult >= Likelihood.LIKELY:
            return SafetyCategory.ADULT
        if self.violence >= Likelihood.LIKELY:
            return SafetyCategory.VIOLENCE
        if self.suggestive >= Likelihood.VERY_LIKELY:
            return SafetyCategory.SUGGESTIVE
        return None


@dataclass(frozen=True)
class Accepted:
    """Every image in the batch passed screening."""

    @property
    def is_accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """At least one image failed screening.

    Attributes:
        category: Violated category of the first failing image
        image_index: Position of that image in the batch
    """

    category: SafetyCategory
    image_index: int | None = None

    @property
    def is_accepted(self) -> bool:
        return False


SafetyVerdict = Accepted | Rejected


class ImageRole(StrEnum):
    """Slot an image occupies on a listing; also its storage folder."""

    PRIMARY = "covers"
    EXTERIOR = "exterior"
    INTERIOR = "interior"
