"""Nager.Date public holiday feed.

## API Documentation Summary
Source: https://date.nager.at/swagger/index.html

## Endpoint
- GET https://date.nager.at/api/v3/PublicHolidays/{year}/{countryCode}
- One request per calendar year
- Unknown country codes answer 204 No Content (empty body)

## Response Format
```json
[
  {
    "date": "2025-07-04",
    "localName": "Independence Day",
    "name": "Independence Day",
    "countryCode": "US",
    "global": true,
    "counties": null,
    "types": ["Public"]
  }
]
```

## Field Translation (Nager.Date -> Holiday)
| Nager field | Holiday field | Notes |
|-------------|---------------|-------|
| name | name | English name |
| date | date | YYYY-MM-DD |
| localName | description | Falls back to name |
| types | kind | See TYPE_TO_KIND |
| global / counties | (filter) | Regional records need a matching region |
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday, HolidayKind
from long_weekends.sources.base import (
    HttpHolidaySource,
    RateLimitError,
    SourceError,
    years_spanned,
)

logger = logging.getLogger(__name__)


# Nager.Date holiday types to HolidayKind; first match in `types` wins
TYPE_TO_KIND: dict[str, HolidayKind] = {
    "public": HolidayKind.PUBLIC,
    "bank": HolidayKind.PUBLIC,
    "optional": HolidayKind.OPTIONAL,
    "observance": HolidayKind.OBSERVANCE,
}


def _parse_kind(types: list[str] | None) -> HolidayKind:
    for holiday_type in types or []:
        kind = TYPE_TO_KIND.get(str(holiday_type).lower())
        if kind is not None:
            return kind
    return HolidayKind.PUBLIC


def _applies_to_region(record: dict[str, Any], country: str, region: str) -> bool:
    """Check whether a record covers the configured region.

    Nationwide records always apply. Regional ones list ISO 3166-2 codes
    such as "US-CA" in `counties`.
    """
    counties = record.get("counties")
    if record.get("global", True) or not counties:
        return True
    if not region:
        return False
    return f"{country}-{region}" in counties or region in counties


class PublicHolidayFeed(HttpHolidaySource):
    """Nager.Date public holiday API, queried once per year in range.

    Example:
        ```python
        async with PublicHolidayFeed() as feed:
            holidays = await feed.fetch(
                date(2025, 1, 1), date(2025, 12, 31), ServiceConfig(country="DE")
            )
        ```
    """

    name = "nager"

    def __init__(
        self,
        base_url: str = "https://date.nager.at/api/v3",
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client=client, user_agent=user_agent, timeout=timeout)
        self.base_url = base_url.rstrip("/")

    async def fetch(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        holidays: list[Holiday] = []
        failures: list[SourceError] = []
        years = years_spanned(start, end)

        for year in years:
            try:
                holidays.extend(await self._fetch_year(year, config))
            except RateLimitError as e:
                logger.warning(
                    f"Nager.Date rate limited for {config.country} {year} "
                    f"(Retry-After: {e.retry_after})"
                )
                failures.append(e)
            except SourceError as e:
                logger.info(f"Nager.Date failed for {config.country} {year}: {e}")
                failures.append(e)
            except httpx.HTTPError as e:
                logger.info(f"Nager.Date request error for {config.country} {year}: {e}")
                failures.append(SourceError(str(e), source=self.name))

        if failures and len(failures) == len(years):
            last = failures[-1]
            raise SourceError(
                f"All {len(years)} yearly requests failed",
                source=self.name,
                status_code=last.status_code,
                response_body=last.response_body,
            )

        return holidays

    async def _fetch_year(self, year: int, config: ServiceConfig) -> list[Holiday]:
        url = f"{self.base_url}/PublicHolidays/{year}/{config.country}"
        response = await self._fetch(url)

        if not response.text.strip():
            logger.debug(f"Empty Nager.Date response for {config.country} {year}")
            return []

        try:
            data = response.json()
        except ValueError as e:
            raise SourceError(
                f"Failed to parse response: {e}",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        if not isinstance(data, list):
            raise SourceError(
                "Unexpected response shape",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        holidays = self._translate_response(data, config)
        logger.debug(f"Added {len(holidays)} Nager.Date holidays for {year}")
        return holidays

    def _translate_response(
        self,
        response_data: list[Any],
        config: ServiceConfig,
    ) -> list[Holiday]:
        """Translate Nager.Date records, dropping malformed ones.

        See module docstring for the field mapping.
        """
        holidays: list[Holiday] = []

        for record in response_data:
            if not isinstance(record, dict):
                continue
            if not _applies_to_region(record, config.country, config.region):
                continue

            try:
                name = record["name"]
                holidays.append(
                    Holiday(
                        name=name,
                        date=date.fromisoformat(record["date"]),
                        kind=_parse_kind(record.get("types")),
                        country=config.country,
                        description=record.get("localName") or name,
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed Nager.Date record {record!r}: {e}")
                continue

        return holidays
