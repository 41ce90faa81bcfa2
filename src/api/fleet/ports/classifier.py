"""Content classifier port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fleet.domain.value_objects import SafetyScores
from shared_kernel.uploads import UploadedFile


@runtime_checkable
class IContentClassifier(Protocol):
    """Scores an image for adult, violent and suggestive content."""

    async def classify(self, image: UploadedFile) -> SafetyScores:
        """Classify one image.

        Raises:
            ClassifierError: If no verdict could be obtained
        """
        ...
