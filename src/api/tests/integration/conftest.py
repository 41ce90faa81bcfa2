"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import fleet.infrastructure.models  # noqa: F401
import onboarding.infrastructure.models  # noqa: F401
from fleet.infrastructure.listing_repository import ListingRepository
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from onboarding.infrastructure.tenant_repository import TenantRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        FLEET_DB_HOST, FLEET_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("FLEET_DB_HOST", "localhost"),
        port=int(os.getenv("FLEET_DB_PORT", "5432")),
        database=os.getenv("FLEET_DB_DATABASE", "fleet_test"),
        username=os.getenv("FLEET_DB_USERNAME", "fleet"),
        password=SecretStr(os.getenv("FLEET_DB_PASSWORD", "fleet_dev_password")),
    )


@pytest_asyncio.fixture
async def async_session(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session over freshly created tables.

    Tables are created from the ORM metadata before each test and both
    tables are emptied afterwards.
    """
    engine = create_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        yield session

    async with engine.begin() as conn:
        await conn.execute(text("TRUNCATE listings, tenants"))
    await engine.dispose()


@pytest.fixture
def tenant_repository(async_session: AsyncSession) -> TenantRepository:
    return TenantRepository(session=async_session)


@pytest.fixture
def listing_repository(async_session: AsyncSession) -> ListingRepository:
    return ListingRepository(session=async_session)
