"""Unit tests for VisionSafeSearchClassifier using an httpx mock transport."""

import base64
import json

import httpx
import pytest

from fleet.domain.value_objects import Likelihood
from fleet.infrastructure.vision_classifier import (
    VisionSafeSearchClassifier,
    build_request,
    parse_scores,
)
from fleet.ports.classifier import IContentClassifier
from fleet.ports.exceptions import ClassifierError

ENDPOINT = "https://vision.test/v1/images:annotate"


def _annotation(adult="VERY_UNLIKELY", violence="UNLIKELY", racy="POSSIBLE"):
    return {
        "responses": [
            {
                "safeSearchAnnotation": {
                    "adult": adult,
                    "spoof": "UNLIKELY",
                    "medical": "UNLIKELY",
                    "violence": violence,
                    "racy": racy,
                }
            }
        ]
    }


def _classifier(handler, api_key="test-key") -> VisionSafeSearchClassifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VisionSafeSearchClassifier(
        api_key=api_key, endpoint=ENDPOINT, timeout_seconds=5, client=client
    )


class TestBuildRequest:
    def test_encodes_image_and_requests_safe_search(self, make_upload):
        body = build_request(make_upload(content=b"raw-bytes"))

        request = body["requests"][0]
        assert base64.b64decode(request["image"]["content"]) == b"raw-bytes"
        assert request["features"] == [{"type": "SAFE_SEARCH_DETECTION"}]


class TestParseScores:
    def test_maps_racy_to_suggestive(self):
        scores = parse_scores(_annotation(racy="VERY_LIKELY"))

        assert scores.adult == Likelihood.VERY_UNLIKELY
        assert scores.violence == Likelihood.UNLIKELY
        assert scores.suggestive == Likelihood.VERY_LIKELY

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"responses": []},
            {"responses": [{"error": {"code": 3, "message": "Bad image data."}}]},
            {"responses": [{}]},
            _annotation(adult="SOMEWHAT"),
        ],
    )
    def test_unusable_responses_raise(self, payload):
        with pytest.raises(ClassifierError):
            parse_scores(payload)


class TestClassify:
    @pytest.mark.asyncio
    async def test_posts_to_endpoint_with_key(self, make_upload):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_annotation(adult="LIKELY"))

        classifier = _classifier(handler)

        scores = await classifier.classify(make_upload())

        assert isinstance(classifier, IContentClassifier)
        assert scores.adult == Likelihood.LIKELY
        assert seen[0].url.params["key"] == "test-key"
        assert json.loads(seen[0].content)["requests"][0]["features"][0]["type"] == (
            "SAFE_SEARCH_DETECTION"
        )

    @pytest.mark.asyncio
    async def test_http_error_raises_classifier_error(self, make_upload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": {"message": "unavailable"}})

        with pytest.raises(ClassifierError):
            await _classifier(handler).classify(make_upload())

    @pytest.mark.asyncio
    async def test_transport_error_raises_classifier_error(self, make_upload):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ClassifierError):
            await _classifier(handler).classify(make_upload())

    @pytest.mark.asyncio
    async def test_missing_api_key_never_calls_out(self, make_upload):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_annotation())

        with pytest.raises(ClassifierError):
            await _classifier(handler, api_key="").classify(make_upload())

        assert calls == []
