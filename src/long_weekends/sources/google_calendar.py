"""Google Calendar public holiday feed.

Google publishes read-only holiday calendars per country. They can be read
with a plain API key, no OAuth consent required.

## API Documentation

https://developers.google.com/calendar/api/v3/reference/events/list

## Calendar IDs

Naming is inconsistent between countries, so several candidate IDs are tried
in order until one returns events:

- `{CC}__en@holiday.calendar.google.com`
- `en.{CC}@holiday.calendar.google.com`
- `en.{cc}@holiday.calendar.google.com`

India uses the `india` slug instead of the country code.

## Event Translation
| Event field | Holiday field | Notes |
|-------------|---------------|-------|
| summary | name | |
| start.date / start.dateTime | date | Date part only |
| description | description | "Public holiday" / "Observance" text |
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday, HolidayKind
from long_weekends.sources.base import HolidaySource, SourceError

logger = logging.getLogger(__name__)

HOLIDAY_CALENDAR_DOMAIN = "holiday.calendar.google.com"

# Countries whose holiday calendars use a slug instead of the ISO code
SPECIAL_CALENDAR_IDS: dict[str, list[str]] = {
    "IN": [
        f"india__en@{HOLIDAY_CALENDAR_DOMAIN}",
        f"en.india@{HOLIDAY_CALENDAR_DOMAIN}",
        f"en.in@{HOLIDAY_CALENDAR_DOMAIN}",
        f"IN__en@{HOLIDAY_CALENDAR_DOMAIN}",
    ],
}


def candidate_calendar_ids(country: str) -> list[str]:
    """Holiday calendar IDs to try for a country, most likely first."""
    country = country.upper()
    if country in SPECIAL_CALENDAR_IDS:
        return list(SPECIAL_CALENDAR_IDS[country])
    return [
        f"{country}__en@{HOLIDAY_CALENDAR_DOMAIN}",
        f"en.{country}@{HOLIDAY_CALENDAR_DOMAIN}",
        f"en.{country.lower()}@{HOLIDAY_CALENDAR_DOMAIN}",
    ]


def _event_date(event: dict[str, Any]) -> date:
    start = event.get("start") or {}
    if start.get("date"):
        return date.fromisoformat(start["date"])
    return date.fromisoformat(start["dateTime"].split("T")[0])


def _event_kind(description: str | None) -> HolidayKind:
    if description and description.strip().lower().startswith("observance"):
        return HolidayKind.OBSERVANCE
    return HolidayKind.PUBLIC


class CalendarHolidayFeed(HolidaySource):
    """Google Calendar holiday feed, enabled by `ServiceConfig.api_key`.

    The Google client library is synchronous, so requests run in a worker
    thread to keep the aggregator's event loop free.
    """

    name = "google_calendar"

    def __init__(self, max_results: int = 250):
        self.max_results = max_results
        self._services: dict[str, Any] = {}

    def _get_service(self, api_key: str) -> Any:
        """Build (once per key) the Calendar v3 service."""
        if api_key not in self._services:
            self._services[api_key] = build(
                "calendar", "v3", developerKey=api_key, cache_discovery=False
            )
        return self._services[api_key]

    async def fetch(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        if not config.api_key:
            logger.debug("No Google Calendar API key configured")
            return []

        return await asyncio.to_thread(self._fetch_holidays, start, end, config)

    def _fetch_holidays(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        service = self._get_service(config.api_key)
        time_min = datetime.combine(start, time.min, tzinfo=timezone.utc)
        time_max = datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc)

        calendar_ids = candidate_calendar_ids(config.country)
        errors: list[Exception] = []

        for calendar_id in calendar_ids:
            try:
                logger.debug(f"Trying Google Calendar {calendar_id}")
                items = self._list_events(service, calendar_id, time_min, time_max)
            except HttpError as e:
                logger.debug(f"Calendar {calendar_id} not available ({e.resp.status})")
                errors.append(e)
                continue
            except (OSError, httplib2.HttpLib2Error) as e:
                logger.debug(f"Calendar {calendar_id} request failed: {e!r}")
                errors.append(e)
                continue

            holidays = self._translate_events(items, config)
            if holidays:
                logger.info(f"Found {len(holidays)} holidays in Google Calendar {calendar_id}")
                return holidays

        if len(errors) == len(calendar_ids):
            last = errors[-1]
            raise SourceError(
                f"No holiday calendar available for {config.country}: {last!r}",
                source=self.name,
                status_code=last.resp.status if isinstance(last, HttpError) else None,
            )

        logger.info(f"No Google Calendar holidays found for {config.country}")
        return []

    def _list_events(
        self,
        service: Any,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
    ) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        params: dict[str, Any] = {
            "calendarId": calendar_id,
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
            "maxResults": self.max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }

        while True:
            result = service.events().list(**params).execute()
            items.extend(result.get("items", []))

            page_token = result.get("nextPageToken")
            if not page_token:
                break
            params["pageToken"] = page_token

        return items

    def _translate_events(
        self,
        items: list[dict[str, Any]],
        config: ServiceConfig,
    ) -> list[Holiday]:
        holidays: list[Holiday] = []

        for event in items:
            if event.get("status") == "cancelled":
                continue
            try:
                name = event["summary"]
                description = event.get("description") or None
                holidays.append(
                    Holiday(
                        name=name,
                        date=_event_date(event),
                        kind=_event_kind(description),
                        country=config.country,
                        description=description or name,
                    )
                )
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                logger.debug(f"Skipping malformed calendar event {event.get('id')}: {e}")
                continue

        return holidays
