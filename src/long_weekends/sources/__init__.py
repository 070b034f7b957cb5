"""Holiday data sources."""

from long_weekends.sources.aggregator import HolidayAggregator, SourceOutcome
from long_weekends.sources.base import (
    HolidaySource,
    HttpHolidaySource,
    RateLimitError,
    SourceError,
)
from long_weekends.sources.google_calendar import CalendarHolidayFeed
from long_weekends.sources.nager import PublicHolidayFeed
from long_weekends.sources.static import StaticHolidaySource, fallback_holidays

__all__ = [
    "HolidaySource",
    "HttpHolidaySource",
    "SourceError",
    "RateLimitError",
    "HolidayAggregator",
    "SourceOutcome",
    "PublicHolidayFeed",
    "CalendarHolidayFeed",
    "StaticHolidaySource",
    "fallback_holidays",
]
