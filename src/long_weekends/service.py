"""Calendar service: holiday lookup and long weekend detection.

## Lookup Process

1. Query all holiday sources concurrently (see `sources.aggregator`)
2. Remove holidays reported by more than one source
3. Evaluate each public holiday against the weekday rules
4. Rank the resulting long weekends by proximity

Source failures never reach the caller: the worst case is the static
fallback table.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, Mapping

from long_weekends.config import Settings, get_settings
from long_weekends.detection.analyzer import detect_long_weekends
from long_weekends.detection.dedup import deduplicate_holidays
from long_weekends.detection.rules import SpanRule, build_span_rules
from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday
from long_weekends.models.long_weekend import LongWeekend
from long_weekends.sources.aggregator import HolidayAggregator
from long_weekends.sources.base import HolidaySource
from long_weekends.sources.google_calendar import CalendarHolidayFeed
from long_weekends.sources.nager import PublicHolidayFeed
from long_weekends.sources.static import StaticHolidaySource

logger = logging.getLogger(__name__)


def as_date(value: date | datetime) -> date:
    """Truncate datetimes to their calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def default_sources(settings: Settings) -> list[HolidaySource]:
    """Sources in priority order: public feed, Google Calendar, static table."""
    return [
        PublicHolidayFeed(
            base_url=settings.nager_base_url,
            user_agent=settings.user_agent,
            timeout=settings.source_timeout_seconds,
        ),
        CalendarHolidayFeed(),
        StaticHolidaySource(),
    ]


class CalendarService:
    """Holiday and long weekend lookups for one configuration.

    Each service owns its `ServiceConfig`; build one per request (see
    `create_calendar_service`) rather than sharing a mutable instance.

    Example:
        ```python
        async with CalendarService(ServiceConfig(country="IN")) as service:
            weekends = await service.detect_long_weekends(
                date(2025, 8, 1), date(2025, 10, 30)
            )
        ```
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        sources: Sequence[HolidaySource] | None = None,
        settings: Settings | None = None,
        rules: Mapping[int, SpanRule] | None = None,
    ):
        """Initialize the service.

        Args:
            config: Country/region/API key; defaults come from settings
            sources: Holiday sources in priority order (default: all three)
            settings: Application settings (default: `get_settings()`)
            rules: Weekday rule table (default: from `thursday_bridge` setting)
        """
        self.settings = settings or get_settings()
        self._config = config or ServiceConfig(
            country=self.settings.default_country,
            region=self.settings.default_region,
            api_key=self.settings.google_calendar_api_key,
        )
        self.sources = list(sources) if sources is not None else default_sources(self.settings)
        self.rules = dict(rules) if rules is not None else build_span_rules(
            self.settings.thursday_bridge
        )
        self.aggregator = HolidayAggregator(
            self.sources, timeout=self.settings.source_timeout_seconds
        )

    async def __aenter__(self) -> CalendarService:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for source in self.sources:
            await source.aclose()

    def get_config(self) -> ServiceConfig:
        """Current configuration (immutable, safe to hand out)."""
        return self._config

    def update_config(self, **changes: Any) -> ServiceConfig:
        """Shallow-merge `changes` into the configuration.

        Affects every later call on this instance.
        """
        self._config = self._config.merged(**changes)
        return self._config

    async def fetch_holidays(
        self,
        start: date | datetime,
        end: date | datetime,
    ) -> list[Holiday]:
        """Deduplicated holidays between `start` and `end`, sorted by date."""
        start_date, end_date = as_date(start), as_date(end)
        if end_date < start_date:
            return []

        config = self._config
        collected = await self.aggregator.collect(start_date, end_date, config)
        holidays = sorted(deduplicate_holidays(collected), key=lambda h: h.date)

        logger.info(
            f"Fetched {len(holidays)} holidays for {config.country} "
            f"between {start_date} and {end_date}"
        )
        return holidays

    async def detect_long_weekends(
        self,
        start: date | datetime,
        end: date | datetime,
        now: date | datetime | None = None,
    ) -> list[LongWeekend]:
        """Upcoming long weekends in range, nearest first.

        Args:
            start: First date to consider
            end: Last date to consider (inclusive)
            now: Reference time for `days_until` (default: current local time)
        """
        _, weekends = await self.fetch_calendar_data(start, end, now)
        return weekends

    async def fetch_calendar_data(
        self,
        start: date | datetime,
        end: date | datetime,
        now: date | datetime | None = None,
    ) -> tuple[list[Holiday], list[LongWeekend]]:
        """Holidays in range and the long weekends derived from them.

        Sources are queried once, so both lists describe the same data.
        """
        holidays = await self.fetch_holidays(start, end)
        reference = now if now is not None else datetime.now()

        weekends = detect_long_weekends(
            holidays,
            reference,
            rules=self.rules,
            horizon_days=self.settings.upcoming_horizon_days,
            limit=self.settings.max_long_weekends,
        )

        logger.info(f"Detected {len(weekends)} long weekends from {len(holidays)} holidays")
        return holidays, weekends


def create_calendar_service(
    settings: Settings | None = None,
    **config: Any,
) -> CalendarService:
    """Build a service from settings, overriding config fields as given.

    `None` overrides fall back to the settings defaults.
    """
    settings = settings or get_settings()
    base = ServiceConfig(
        country=settings.default_country,
        region=settings.default_region,
        api_key=settings.google_calendar_api_key,
    )
    return CalendarService(base.merged(**config), settings=settings)
