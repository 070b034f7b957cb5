"""Holiday and long weekend routes.

Each request gets its own `CalendarService` built from settings plus the
request's country/region, so concurrent requests never share configuration.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from long_weekends.config import Settings, get_settings
from long_weekends.models.holiday import Holiday
from long_weekends.models.long_weekend import LongWeekend
from long_weekends.service import CalendarService, create_calendar_service

logger = logging.getLogger(__name__)

router = APIRouter()

COUNTRY_PATTERN = r"^[A-Za-z]{2}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LongWeekendsResponse(CamelModel):
    """Upcoming long weekends for a country."""

    success: bool = True
    long_weekends: list[LongWeekend]
    country: str
    region: str
    api_source: str = Field(description="'google-calendar' when an API key was used")
    fetched_at: datetime


class CalendarDataResponse(CamelModel):
    """Holidays and long weekends for a country."""

    success: bool = True
    holidays: list[Holiday]
    long_weekends: list[LongWeekend]
    country: str
    region: str
    fetched_at: datetime


class CalendarConfigRequest(CamelModel):
    """Configuration supplied in a POST body."""

    country: str = Field(default="US", pattern=COUNTRY_PATTERN)
    region: str = ""
    api_key: str | None = None


def add_months(day: date, months: int) -> date:
    """Same day `months` later, clamped to the end of shorter months."""
    month_index = day.month - 1 + months
    year, month = day.year + month_index // 12, month_index % 12 + 1
    for candidate in range(day.day, 0, -1):
        try:
            return day.replace(year=year, month=month, day=candidate)
        except ValueError:
            continue
    raise ValueError(f"Cannot add {months} months to {day}")


def lookahead_window(settings: Settings) -> tuple[date, date]:
    today = date.today()
    return today, add_months(today, settings.lookahead_months)


async def get_calendar_service(
    country: str | None = Query(default=None, pattern=COUNTRY_PATTERN),
    region: str | None = Query(default=None, max_length=10),
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[CalendarService, None]:
    """Per-request service for the queried country/region."""
    service = create_calendar_service(settings, country=country, region=region)
    try:
        yield service
    finally:
        await service.aclose()


@router.get("/long-weekends", response_model=LongWeekendsResponse)
async def get_long_weekends(
    service: CalendarService = Depends(get_calendar_service),
    settings: Settings = Depends(get_settings),
) -> LongWeekendsResponse:
    """Long weekends within the configured lookahead window."""
    config = service.get_config()
    start, end = lookahead_window(settings)
    logger.info(f"Fetching long weekends for {config.country} {config.region}".rstrip())

    try:
        long_weekends = await service.detect_long_weekends(start, end)
    except Exception as e:
        logger.exception("Error fetching long weekends")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch long weekends: {str(e)}",
        )

    return LongWeekendsResponse(
        long_weekends=long_weekends,
        country=config.country,
        region=config.region,
        api_source="google-calendar" if config.api_key else "fallback",
        fetched_at=datetime.now(timezone.utc),
    )


@router.post("/long-weekends", response_model=CalendarDataResponse)
async def post_long_weekends(
    data: CalendarConfigRequest,
    settings: Settings = Depends(get_settings),
) -> CalendarDataResponse:
    """Holidays and long weekends for the configuration in the body."""
    start, end = lookahead_window(settings)

    async with create_calendar_service(
        settings,
        country=data.country,
        region=data.region,
        api_key=data.api_key or None,
    ) as service:
        config = service.get_config()
        try:
            holidays, long_weekends = await service.fetch_calendar_data(start, end)
        except Exception as e:
            logger.exception("Error fetching calendar data")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch calendar data: {str(e)}",
            )

    return CalendarDataResponse(
        holidays=holidays,
        long_weekends=long_weekends,
        country=config.country,
        region=config.region,
        fetched_at=datetime.now(timezone.utc),
    )


@router.get("/holidays", response_model=list[Holiday])
async def list_holidays(
    start: date | None = Query(default=None, description="First date (default: today)"),
    end: date | None = Query(default=None, description="Last date (default: lookahead)"),
    service: CalendarService = Depends(get_calendar_service),
    settings: Settings = Depends(get_settings),
) -> list[Holiday]:
    """Deduplicated holidays in a date range (empty when `end` precedes `start`)."""
    default_start, default_end = lookahead_window(settings)
    return await service.fetch_holidays(start or default_start, end or default_end)
