"""Duplicate removal for holidays and long weekends."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from datetime import date
from typing import TypeVar

from long_weekends.models.holiday import Holiday
from long_weekends.models.long_weekend import LongWeekend

T = TypeVar("T")


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first item for each key, preserving input order."""
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique


def holiday_key(holiday: Holiday) -> tuple[date, str]:
    # Exact name match only: differently named entries on one date are kept
    return (holiday.date, holiday.name)


def deduplicate_holidays(holidays: Iterable[Holiday]) -> list[Holiday]:
    """Collapse holidays reported by several sources for the same date and name."""
    return unique_by(holidays, holiday_key)


def deduplicate_long_weekends(weekends: Iterable[LongWeekend]) -> list[LongWeekend]:
    """Collapse long weekends sharing an id."""
    return unique_by(weekends, lambda weekend: weekend.id)
