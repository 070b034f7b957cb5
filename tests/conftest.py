"""Pytest fixtures for long weekend detection tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Nager.Date, Google Calendar)
2. Isolated test environment with controlled configuration
"""

import os
from datetime import date, datetime
from typing import Callable

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("DEBUG", "true")
os.environ["DEFAULT_COUNTRY"] = "US"
os.environ.pop("GOOGLE_CALENDAR_API_KEY", None)
os.environ.pop("THURSDAY_BRIDGE", None)

from long_weekends.config import Settings
from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday, HolidayKind
from long_weekends.sources.base import HolidaySource, SourceError


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from long_weekends.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with short source deadlines for tests."""
    return Settings(source_timeout_seconds=1.0)


@pytest.fixture
def us_config() -> ServiceConfig:
    return ServiceConfig(country="US")


@pytest.fixture
def india_config() -> ServiceConfig:
    return ServiceConfig(country="IN")


@pytest.fixture
def fixed_now() -> datetime:
    """Reference "now" used by the India scenarios."""
    return datetime(2025, 8, 1)


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def make_holiday() -> Callable[..., Holiday]:
    """Factory for holidays with sensible defaults."""

    def _make(
        day: date,
        name: str = "Test Holiday",
        kind: HolidayKind = HolidayKind.PUBLIC,
        country: str = "US",
    ) -> Holiday:
        return Holiday(name=name, date=day, kind=kind, country=country, description=name)

    return _make


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


class StubSource(HolidaySource):
    """Source returning canned holidays, or raising if given an exception."""

    def __init__(self, name: str, holidays: list[Holiday] | None = None, error: Exception | None = None):
        self.name = name
        self.holidays = holidays or []
        self.error = error
        self.calls: list[tuple[date, date, ServiceConfig]] = []

    async def fetch(self, start: date, end: date, config: ServiceConfig) -> list[Holiday]:
        self.calls.append((start, end, config))
        if self.error is not None:
            raise self.error
        return list(self.holidays)


@pytest.fixture
def stub_source() -> type[StubSource]:
    return StubSource


@pytest.fixture
def failing_source() -> Callable[[str], StubSource]:
    def _make(name: str) -> StubSource:
        return StubSource(name, error=SourceError(f"{name} is down", source=name, status_code=503))

    return _make
