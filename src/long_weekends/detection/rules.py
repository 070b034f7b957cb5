"""Weekday rules that turn a holiday into a long weekend.

Each rule is keyed by the holiday's weekday (`date.weekday()`, Monday=0)
and describes the span of days off relative to the holiday date.

| Holiday weekday | Span | Days | Bridge |
|-----------------|------|------|--------|
| Friday | -1 .. +2 | Thu Fri Sat Sun | no |
| Monday | -2 .. 0 | Sat Sun Mon | no |
| Tuesday | -4 .. -1 | Fri Sat Sun Mon | yes |

Holidays on any other weekday produce no long weekend. A Thursday rule
(Thu-Sun, Friday as bridge day) exists but is opt-in.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping

WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def weekday_name(day: date) -> str:
    """Lowercase English weekday name, independent of locale."""
    return WEEKDAY_NAMES[day.weekday()]


@dataclass(frozen=True)
class SpanRule:
    """Days-off span relative to a holiday.

    Attributes:
        start_offset: Days from the holiday to the first day off
        end_offset: Days from the holiday to the last day off
        bridge: Whether a regular workday must be taken off to join the span
    """

    start_offset: int
    end_offset: int
    bridge: bool = False

    def __post_init__(self) -> None:
        if self.end_offset < self.start_offset:
            raise ValueError("end_offset must not be before start_offset")

    def span(self, holiday_date: date) -> tuple[date, date]:
        return (
            holiday_date + timedelta(days=self.start_offset),
            holiday_date + timedelta(days=self.end_offset),
        )

    def days(self, holiday_date: date) -> list[str]:
        start, end = self.span(holiday_date)
        return [
            weekday_name(start + timedelta(days=offset))
            for offset in range((end - start).days + 1)
        ]

    @property
    def name_suffix(self) -> str:
        return "Long Weekend" if self.bridge else "Weekend"

    @property
    def reason_suffix(self) -> str:
        return " (bridge day)" if self.bridge else ""


FRIDAY_RULE = SpanRule(start_offset=-1, end_offset=2)
MONDAY_RULE = SpanRule(start_offset=-2, end_offset=0)
# Assumes the Monday before a Tuesday holiday is taken off
TUESDAY_BRIDGE_RULE = SpanRule(start_offset=-4, end_offset=-1, bridge=True)
# Thursday holiday with the Friday taken off
THURSDAY_BRIDGE_RULE = SpanRule(start_offset=0, end_offset=3, bridge=True)

DEFAULT_SPAN_RULES: Mapping[int, SpanRule] = {
    calendar.FRIDAY: FRIDAY_RULE,
    calendar.MONDAY: MONDAY_RULE,
    calendar.TUESDAY: TUESDAY_BRIDGE_RULE,
}


def build_span_rules(thursday_bridge: bool = False) -> dict[int, SpanRule]:
    """Rule table, optionally extended with the Thursday bridge rule."""
    rules = dict(DEFAULT_SPAN_RULES)
    if thursday_bridge:
        rules[calendar.THURSDAY] = THURSDAY_BRIDGE_RULE
    return rules
