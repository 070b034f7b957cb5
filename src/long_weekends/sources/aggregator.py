"""Concurrent holiday aggregation across sources.

## Aggregation Process

1. Start every source concurrently, each under its own deadline
2. Record each source's outcome independently (holidays or error)
3. Fold the successful outcomes together in source order
4. If no source succeeded, use the static fallback table
5. Keep holidays inside the requested window, sorted by date

Duplicates are kept; deduplication is a separate step.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday
from long_weekends.sources.base import HolidaySource
from long_weekends.sources.static import fallback_holidays

logger = logging.getLogger(__name__)


@dataclass
class SourceOutcome:
    """Result of querying a single source."""

    source: str
    holidays: list[Holiday] = field(default_factory=list)
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class HolidayAggregator:
    """Fan out a holiday query to several sources and merge the results.

    Example:
        ```python
        aggregator = HolidayAggregator(
            [PublicHolidayFeed(), CalendarHolidayFeed(), StaticHolidaySource()],
            timeout=5.0,
        )
        holidays = await aggregator.collect(start, end, ServiceConfig(country="IN"))
        ```
    """

    def __init__(self, sources: Sequence[HolidaySource], timeout: float | None = 10.0):
        """Initialize the aggregator.

        Args:
            sources: Sources in priority order; earlier ones win deduplication
            timeout: Per-source deadline in seconds (None disables it)
        """
        self.sources = list(sources)
        self.timeout = timeout

    async def _run_source(
        self,
        source: HolidaySource,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> SourceOutcome:
        try:
            holidays = await asyncio.wait_for(
                source.fetch(start, end, config), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Holiday source {source.name} timed out after {self.timeout}s")
            return SourceOutcome(source=source.name, error=e)
        except Exception as e:
            logger.warning(f"Holiday source {source.name} failed: {e}")
            return SourceOutcome(source=source.name, error=e)

        logger.debug(f"Holiday source {source.name} returned {len(holidays)} holidays")
        return SourceOutcome(source=source.name, holidays=list(holidays))

    async def gather(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[SourceOutcome]:
        """Query all sources concurrently; never raises for source failures."""
        return list(
            await asyncio.gather(
                *(self._run_source(source, start, end, config) for source in self.sources)
            )
        )

    async def collect(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        """Merged, date-filtered, date-sorted holidays from every source."""
        if end < start:
            return []

        outcomes = await self.gather(start, end, config)
        succeeded = [outcome for outcome in outcomes if outcome.success]

        if succeeded:
            merged = [holiday for outcome in succeeded for holiday in outcome.holidays]
        else:
            logger.warning(
                f"All {len(outcomes)} holiday sources failed, using static fallback "
                f"for {config.country}"
            )
            merged = fallback_holidays(start, end, config.country)

        in_window = [holiday for holiday in merged if start <= holiday.date <= end]
        return sorted(in_window, key=lambda h: h.date)
