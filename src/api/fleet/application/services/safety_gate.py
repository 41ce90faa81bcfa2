"""Safety gate: batch screening of listing images.

The gate is fail-closed. The only ways to produce Accepted are every
image passing the policy, or the explicit fail-open development
override covering a classifier failure.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from fleet.application.observability import DefaultSafetyGateProbe, SafetyGateProbe
from fleet.domain.value_objects import (
    Accepted,
    Rejected,
    SafetyCategory,
    SafetyScores,
    SafetyVerdict,
)
from fleet.ports.classifier import IContentClassifier
from shared_kernel.uploads import UploadedFile


class SafetyGate:
    """Screens a batch of images and returns one aggregate verdict.

    All images are classified concurrently, each call bounded by
    ``timeout_seconds``. The batch is rejected if any image violates the
    policy; the reported reason is the first violating image in batch order.
    """

    def __init__(
        self,
        classifier: IContentClassifier,
        timeout_seconds: float,
        fail_open: bool = False,
        probe: SafetyGateProbe | None = None,
    ):
        """Initialize the gate.

        Args:
            classifier: Content classifier adapter
            timeout_seconds: Bound on one classification call
            fail_open: Development override accepting unverifiable images
            probe: Optional domain probe for observability
        """
        self._classifier = classifier
        self._timeout = timeout_seconds
        self._fail_open = fail_open
        self._probe = probe or DefaultSafetyGateProbe()

    async def classify_batch(self, images: Sequence[UploadedFile]) -> SafetyVerdict:
        """Classify every image and apply the rejection policy.

        Args:
            images: Images in batch order

        Returns:
            Accepted, or Rejected with the category and index of the first
            failing image
        """
        if not images:
            return Accepted()

        outcomes = await asyncio.gather(
            *(self._classify(index, image) for index, image in enumerate(images))
        )

        for index, scores in enumerate(outcomes):
            if scores is None:
                if self._fail_open:
                    self._probe.failed_open(image_index=index)
                    continue
                category = SafetyCategory.UNVERIFIED
            else:
                category = scores.violation()
                if category is None:
                    continue

            self._probe.batch_rejected(
                category=category.value, image_index=index, batch_size=len(images)
            )
            return Rejected(category=category, image_index=index)

        self._probe.batch_accepted(batch_size=len(images))
        return Accepted()

    async def _classify(self, index: int, image: UploadedFile) -> SafetyScores | None:
        """Classify one image; None means no verdict could be obtained."""
        try:
            scores = await asyncio.wait_for(
                self._classifier.classify(image), timeout=self._timeout
            )
        except Exception as e:
            self._probe.classification_failed(image_index=index, error=repr(e))
            return None

        self._probe.image_classified(
            image_index=index,
            adult=scores.adult.name,
            violence=scores.violence.name,
            suggestive=scores.suggestive.name,
        )
        return scores
