"""
Pytest configuration and fixtures for Interface Monitor tests.

Provides:
- Async test database with SQLite
- Test client for API testing
- Factory fixtures for creating test data
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from interface_monitor.config import AppConfig, Settings, get_config, get_settings
from interface_monitor.core.database import get_db
from interface_monitor.core.datetime_utils import utc_now
from interface_monitor.main import app
from interface_monitor.models import Base, InterfaceLog, LogSeverity, LogStatus

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Override settings for testing
class TestSettings(Settings):
    database_url: str = TEST_DATABASE_URL
    debug: bool = True
    cors_origins: str = "http://localhost:3000"


@pytest.fixture
def default_config() -> AppConfig:
    """Config with built-in defaults (ignores the repo's config.yml)."""
    return AppConfig(config_path=Path("does-not-exist.yml"))


@pytest_asyncio.fixture
async def db_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, default_config: AppConfig) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with database override."""
    from interface_monitor.core.rate_limit import limiter

    async def override_get_db():
        yield db_session

    def override_get_settings():
        return TestSettings()

    def override_get_config():
        return default_config

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = override_get_settings
    app.dependency_overrides[get_config] = override_get_config

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================================
# Factory Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def log_factory(db_session: AsyncSession):
    """Factory for creating interface logs directly in the database."""

    async def _create_log(
        interface_name: str = "SAP SuccessFactors Employee Sync",
        integration_key: str = "SF-ECP-EMP-001",
        status: LogStatus = LogStatus.SUCCESS,
        message: str = "Successfully processed 1,247 employee records",
        severity: LogSeverity = LogSeverity.MEDIUM,
        duration: int = 1500,
        records_processed: int = 100,
        timestamp: datetime | None = None,
        minutes_ago: float | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> InterfaceLog:
        if timestamp is None:
            timestamp = utc_now() - timedelta(minutes=minutes_ago if minutes_ago is not None else 10)

        log = InterfaceLog(
            interface_name=interface_name,
            integration_key=integration_key,
            status=status,
            message=message,
            severity=severity,
            duration=duration,
            records_processed=records_processed,
            timestamp=timestamp,
            metadata_json=metadata,
        )
        db_session.add(log)
        await db_session.flush()
        return log

    return _create_log


@pytest.fixture
def log_payload():
    """Factory for API request bodies."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "interfaceName": "Workday HR Data Export",
            "integrationKey": "WD-EXPORT-003",
            "status": "success",
            "message": "Exported 312 worker records",
            "severity": "low",
            "duration": 4200,
            "recordsProcessed": 312,
            "metadata": {
                "sourceSystem": "Workday",
                "targetSystem": "Downstream System",
                "jobId": "JOB-1",
                "userId": "admin1",
            },
        }
        payload.update(overrides)
        return {k: v for k, v in payload.items() if v is not None}

    return _make
