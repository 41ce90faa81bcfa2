"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.uploads import UploadedFile


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session


@pytest.fixture
def make_upload():
    """Factory for in-memory uploaded files."""

    def _make(
        filename: str = "photo.jpg",
        content: bytes = b"\xff\xd8\xff\xe0image",
        content_type: str = "image/jpeg",
    ) -> UploadedFile:
        return UploadedFile(filename=filename, content=content, content_type=content_type)

    return _make
