"""Static fallback holiday table.

Fixed-date public holidays for a handful of countries. The table is always
available: it is queried alongside the network sources and is also the
last-resort answer when every other source fails.

Movable feasts (Easter, Diwali, Thanksgiving, ...) are deliberately absent;
only holidays with the same month/day every year are listed.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday, HolidayKind
from long_weekends.sources.base import HolidaySource, years_spanned


class FixedHoliday(NamedTuple):
    month: int
    day: int
    name: str
    description: str


FIXED_HOLIDAYS: dict[str, list[FixedHoliday]] = {
    "US": [
        FixedHoliday(1, 1, "New Year's Day", "New Year celebration"),
        FixedHoliday(6, 19, "Juneteenth", "Juneteenth National Independence Day"),
        FixedHoliday(7, 4, "Independence Day", "Independence Day"),
        FixedHoliday(11, 11, "Veterans Day", "Veterans Day"),
        FixedHoliday(12, 25, "Christmas Day", "Christmas celebration"),
    ],
    "IN": [
        FixedHoliday(1, 26, "Republic Day", "Republic Day of India"),
        FixedHoliday(8, 15, "Independence Day", "Independence Day of India"),
        FixedHoliday(10, 2, "Gandhi Jayanti", "Birth anniversary of Mahatma Gandhi"),
        FixedHoliday(12, 25, "Christmas Day", "Christmas Day"),
    ],
    "GB": [
        FixedHoliday(1, 1, "New Year's Day", "New Year's Day"),
        FixedHoliday(12, 25, "Christmas Day", "Christmas Day"),
        FixedHoliday(12, 26, "Boxing Day", "Boxing Day"),
    ],
    "CA": [
        FixedHoliday(1, 1, "New Year's Day", "New Year's Day"),
        FixedHoliday(7, 1, "Canada Day", "Canada Day"),
        FixedHoliday(12, 25, "Christmas Day", "Christmas Day"),
    ],
    "AU": [
        FixedHoliday(1, 1, "New Year's Day", "New Year's Day"),
        FixedHoliday(1, 26, "Australia Day", "Australia Day"),
        FixedHoliday(4, 25, "Anzac Day", "Anzac Day"),
        FixedHoliday(12, 25, "Christmas Day", "Christmas Day"),
        FixedHoliday(12, 26, "Boxing Day", "Boxing Day"),
    ],
    "DE": [
        FixedHoliday(1, 1, "New Year's Day", "Neujahr"),
        FixedHoliday(5, 1, "Labour Day", "Tag der Arbeit"),
        FixedHoliday(10, 3, "German Unity Day", "Tag der Deutschen Einheit"),
        FixedHoliday(12, 25, "Christmas Day", "Erster Weihnachtstag"),
        FixedHoliday(12, 26, "St. Stephen's Day", "Zweiter Weihnachtstag"),
    ],
}

# Used for any country without its own table
GENERIC_HOLIDAYS: list[FixedHoliday] = [
    FixedHoliday(1, 1, "New Year's Day", "New Year celebration"),
    FixedHoliday(12, 25, "Christmas Day", "Christmas celebration"),
]


def fallback_holidays(start: date, end: date, country: str) -> list[Holiday]:
    """Fixed-date holidays for `country` between `start` and `end` inclusive."""
    if end < start:
        return []

    country = country.upper()
    table = FIXED_HOLIDAYS.get(country, GENERIC_HOLIDAYS)
    holidays: list[Holiday] = []

    for year in years_spanned(start, end):
        for entry in table:
            holiday_date = date(year, entry.month, entry.day)
            if start <= holiday_date <= end:
                holidays.append(
                    Holiday(
                        name=entry.name,
                        date=holiday_date,
                        kind=HolidayKind.PUBLIC,
                        country=country,
                        description=entry.description,
                    )
                )

    return sorted(holidays, key=lambda h: h.date)


class StaticHolidaySource(HolidaySource):
    """The fixed-date table exposed as a regular source."""

    name = "static"

    async def fetch(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        return fallback_holidays(start, end, config.country)
