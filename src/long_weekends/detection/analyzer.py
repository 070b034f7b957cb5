"""Long weekend analysis.

Pure date computations: no I/O, no wall clock. The reference "now" is
always passed in.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Mapping

from long_weekends.detection.dedup import deduplicate_long_weekends
from long_weekends.detection.rules import DEFAULT_SPAN_RULES, SpanRule, weekday_name
from long_weekends.models.holiday import Holiday
from long_weekends.models.long_weekend import LongWeekend

logger = logging.getLogger(__name__)

UPCOMING_HORIZON_DAYS = 30
MAX_LONG_WEEKENDS = 10

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(holiday_date: date, now: datetime | date) -> int:
    """Whole days from `now` to the start of `holiday_date`, rounded up.

    A holiday later today counts as 0. Timezone-aware `now` values are
    compared by their wall-clock time since holidays carry no zone.
    """
    if not isinstance(now, datetime):
        now = datetime.combine(now, time.min)
    elif now.tzinfo is not None:
        now = now.replace(tzinfo=None)

    delta = datetime.combine(holiday_date, time.min) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def analyze_holiday(
    holiday: Holiday,
    now: datetime | date,
    rules: Mapping[int, SpanRule] = DEFAULT_SPAN_RULES,
    horizon_days: int = UPCOMING_HORIZON_DAYS,
) -> LongWeekend | None:
    """Build the long weekend created by `holiday`, if any.

    Returns None for non-public holidays, holidays already past, and
    holidays on a weekday without a rule.
    """
    if not holiday.is_public:
        return None

    remaining = days_until(holiday.date, now)
    if remaining < 0:
        return None

    rule = rules.get(holiday.date.weekday())
    if rule is None:
        return None

    start_date, end_date = rule.span(holiday.date)

    return LongWeekend(
        id=f"holiday-{holiday.date.isoformat()}-{weekday_name(holiday.date)}",
        name=f"{holiday.name} {rule.name_suffix}",
        start_date=start_date,
        end_date=end_date,
        days=rule.days(holiday.date),
        is_upcoming=remaining <= horizon_days,
        days_until=remaining,
        reason=f"Public holiday: {holiday.name}{rule.reason_suffix}",
        holidays=[holiday],
    )


def detect_long_weekends(
    holidays: Iterable[Holiday],
    now: datetime | date,
    rules: Mapping[int, SpanRule] = DEFAULT_SPAN_RULES,
    horizon_days: int = UPCOMING_HORIZON_DAYS,
    limit: int = MAX_LONG_WEEKENDS,
) -> list[LongWeekend]:
    """Long weekends for `holidays`, nearest first, at most `limit`."""
    found: list[LongWeekend] = []

    for holiday in holidays:
        weekend = analyze_holiday(holiday, now, rules=rules, horizon_days=horizon_days)
        if weekend is not None:
            logger.debug(f"Holiday {holiday.name} on {holiday.date} creates {weekend.id}")
            found.append(weekend)

    ranked = sorted(deduplicate_long_weekends(found), key=lambda w: w.days_until)
    return ranked[:limit]
