"""Unit tests for SupabaseBlobStore with a mocked Supabase client."""

from unittest.mock import MagicMock, Mock

import pytest

from shared_kernel.storage import BlobStoreError, IBlobStore
from shared_kernel.storage.observability import BlobStoreProbe
from shared_kernel.storage.supabase_blob_store import SupabaseBlobStore


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def mock_probe():
    return Mock(spec=BlobStoreProbe)


@pytest.fixture
def store(client, mock_probe):
    return SupabaseBlobStore(
        client=client, bucket="sacco-docs", timeout_seconds=5, probe=mock_probe
    )


class TestSupabaseBlobStore:
    def test_implements_protocol(self, store):
        assert isinstance(store, IBlobStore)

    @pytest.mark.asyncio
    async def test_put_uploads_without_overwrite(self, store, client, mock_probe):
        ref = await store.put("owner-1/1-cert.pdf", b"%PDF", "application/pdf")

        assert ref == "owner-1/1-cert.pdf"
        client.storage.from_.assert_called_with("sacco-docs")
        client.storage.from_.return_value.upload.assert_called_once_with(
            "owner-1/1-cert.pdf",
            b"%PDF",
            {"content-type": "application/pdf", "upsert": "false"},
        )
        mock_probe.blob_stored.assert_called_once()

    @pytest.mark.asyncio
    async def test_put_failure_raises_blob_store_error(self, store, client, mock_probe):
        client.storage.from_.return_value.upload.side_effect = RuntimeError("409")

        with pytest.raises(BlobStoreError):
            await store.put("owner-1/1-cert.pdf", b"%PDF", "application/pdf")

        mock_probe.blob_store_failed.assert_called_once()

    def test_public_url(self, store, client):
        client.storage.from_.return_value.get_public_url.return_value = "https://x/y"

        assert store.public_url("owner-1/covers/1.jpg") == "https://x/y"
