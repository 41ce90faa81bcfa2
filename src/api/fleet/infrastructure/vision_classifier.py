"""Google Cloud Vision SafeSearch implementation of IContentClassifier.

Calls the ``images:annotate`` REST endpoint with an API key. The
``racy`` annotation is this system's "suggestive" category.
"""

from __future__ import annotations

import base64
from typing import Any

import httpx

from fleet.domain.value_objects import Likelihood, SafetyScores
from fleet.infrastructure.observability import (
    ClassifierProbe,
    DefaultClassifierProbe,
)
from fleet.ports.classifier import IContentClassifier
from fleet.ports.exceptions import ClassifierError
from shared_kernel.uploads import UploadedFile

SAFE_SEARCH_FEATURE = "SAFE_SEARCH_DETECTION"


def build_request(image: UploadedFile) -> dict[str, Any]:
    """Build the annotate request body for one image."""
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image.content).decode("ascii")},
                "features": [{"type": SAFE_SEARCH_FEATURE}],
            }
        ]
    }


def parse_scores(payload: dict[str, Any]) -> SafetyScores:
    """Extract scores from an annotate response.

    Raises:
        ClassifierError: If the response carries an error or no annotation
    """
    responses = payload.get("responses") or []
    if not responses:
        raise ClassifierError("Classifier returned no responses")

    first = responses[0]
    if first.get("error"):
        raise ClassifierError(
            f"Classifier error: {first['error'].get('message', 'unknown')}"
        )

    annotation = first.get("safeSearchAnnotation")
    if not annotation:
        raise ClassifierError("Classifier returned no safe search annotation")

    try:
        return SafetyScores(
            adult=Likelihood.from_label(annotation.get("adult")),
            violence=Likelihood.from_label(annotation.get("violence")),
            suggestive=Likelihood.from_label(annotation.get("racy")),
        )
    except ValueError as e:
        raise ClassifierError(str(e)) from e


class VisionSafeSearchClassifier(IContentClassifier):
    """Content classifier backed by Cloud Vision SafeSearch."""

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        timeout_seconds: float,
        client: httpx.AsyncClient | None = None,
        probe: ClassifierProbe | None = None,
    ):
        """Initialize the classifier.

        Args:
            api_key: Cloud Vision API key
            endpoint: Annotate endpoint URL
            timeout_seconds: HTTP timeout for one request
            client: Optional shared HTTP client; one is created per call otherwise
            probe: Optional domain probe for observability
        """
        self._api_key = api_key
        self._endpoint = endpoint
        self._timeout = timeout_seconds
        self._client = client
        self._probe = probe or DefaultClassifierProbe()

    async def classify(self, image: UploadedFile) -> SafetyScores:
        if not self._api_key:
            raise ClassifierError("Cloud Vision API key is not configured")

        try:
            payload = await self._post(build_request(image))
        except httpx.HTTPError as e:
            self._probe.classifier_call_failed(error=repr(e))
            raise ClassifierError(f"Classifier request failed: {e}") from e

        scores = parse_scores(payload)
        self._probe.classifier_called(size_bytes=image.size)
        return scores

    async def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        params = {"key": self._api_key}
        if self._client is not None:
            response = await self._client.post(
                self._endpoint, params=params, json=body, timeout=self._timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._endpoint, params=params, json=body)
        response.raise_for_status()
        return response.json()
