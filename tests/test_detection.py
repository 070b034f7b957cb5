"""Tests for deduplication, weekday rules and long weekend analysis."""

from datetime import date, datetime, timedelta, timezone

import pytest

from long_weekends.detection.analyzer import (
    analyze_holiday,
    days_until,
    detect_long_weekends,
)
from long_weekends.detection.dedup import (
    deduplicate_holidays,
    deduplicate_long_weekends,
)
from long_weekends.detection.rules import (
    DEFAULT_SPAN_RULES,
    SpanRule,
    build_span_rules,
    weekday_name,
)
from long_weekends.models.holiday import HolidayKind


NOW = datetime(2025, 8, 1)


class TestDaysUntil:
    """Tests for the days_until computation."""

    def test_whole_days_from_midnight(self):
        assert days_until(date(2025, 8, 15), datetime(2025, 8, 1)) == 14

    def test_rounds_up_partial_days(self):
        assert days_until(date(2025, 8, 15), datetime(2025, 8, 1, 18, 30)) == 14

    def test_today_is_zero(self):
        assert days_until(date(2025, 8, 1), datetime(2025, 8, 1, 9, 0)) == 0

    def test_yesterday_is_negative(self):
        assert days_until(date(2025, 7, 31), datetime(2025, 8, 1, 9, 0)) == -1

    def test_accepts_plain_date(self):
        assert days_until(date(2025, 8, 15), date(2025, 8, 1)) == 14

    def test_aware_now_uses_wall_clock(self):
        now = datetime(2025, 8, 1, 23, 0, tzinfo=timezone(timedelta(hours=5)))
        assert days_until(date(2025, 8, 2), now) == 1


class TestSpanRules:
    """Tests for the weekday rule table."""

    def test_default_rules_cover_friday_monday_tuesday(self):
        assert sorted(DEFAULT_SPAN_RULES) == [0, 1, 4]

    def test_days_follow_span(self):
        rule = SpanRule(start_offset=-1, end_offset=2)
        assert rule.days(date(2025, 8, 15)) == ["thursday", "friday", "saturday", "sunday"]

    def test_invalid_offsets(self):
        with pytest.raises(ValueError):
            SpanRule(start_offset=2, end_offset=0)

    def test_thursday_bridge_is_opt_in(self):
        assert 3 not in build_span_rules()
        assert 3 in build_span_rules(thursday_bridge=True)

    def test_weekday_name(self):
        assert weekday_name(date(2025, 10, 2)) == "thursday"


class TestAnalyzeHoliday:
    """Tests for single-holiday analysis."""

    def test_friday_holiday(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 8, 15), "Independence Day"), NOW)

        assert weekend is not None
        assert weekend.id == "holiday-2025-08-15-friday"
        assert weekend.name == "Independence Day Weekend"
        assert weekend.start_date == date(2025, 8, 14)
        assert weekend.end_date == date(2025, 8, 17)
        assert weekend.days == ["thursday", "friday", "saturday", "sunday"]
        assert weekend.reason == "Public holiday: Independence Day"
        assert weekend.days_until == 14
        assert weekend.is_upcoming is True

    def test_monday_holiday(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 9, 1), "Labor Day"), NOW)

        assert weekend is not None
        assert weekend.id == "holiday-2025-09-01-monday"
        assert weekend.start_date == date(2025, 8, 30)
        assert weekend.end_date == date(2025, 9, 1)
        assert weekend.days == ["saturday", "sunday", "monday"]
        assert weekend.reason == "Public holiday: Labor Day"

    def test_tuesday_holiday_is_bridge(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 11, 11), "Veterans Day"), NOW)

        assert weekend is not None
        assert weekend.id == "holiday-2025-11-11-tuesday"
        assert weekend.name == "Veterans Day Long Weekend"
        assert weekend.start_date == date(2025, 11, 7)
        assert weekend.end_date == date(2025, 11, 10)
        assert weekend.days == ["friday", "saturday", "sunday", "monday"]
        assert weekend.reason == "Public holiday: Veterans Day (bridge day)"

    @pytest.mark.parametrize(
        "day",
        [
            date(2025, 8, 13),  # Wednesday
            date(2025, 10, 2),  # Thursday
            date(2025, 8, 16),  # Saturday
            date(2025, 8, 17),  # Sunday
        ],
    )
    def test_other_weekdays_produce_nothing(self, make_holiday, day):
        assert analyze_holiday(make_holiday(day), NOW) is None

    def test_thursday_with_bridge_rule(self, make_holiday):
        weekend = analyze_holiday(
            make_holiday(date(2025, 10, 2), "Gandhi Jayanti"),
            NOW,
            rules=build_span_rules(thursday_bridge=True),
        )

        assert weekend is not None
        assert weekend.days == ["thursday", "friday", "saturday", "sunday"]
        assert weekend.end_date == date(2025, 10, 5)
        assert weekend.reason.endswith("(bridge day)")

    @pytest.mark.parametrize("kind", [HolidayKind.OBSERVANCE, HolidayKind.OPTIONAL])
    def test_non_public_holidays_ignored(self, make_holiday, kind):
        assert analyze_holiday(make_holiday(date(2025, 8, 15), kind=kind), NOW) is None

    def test_past_holiday_ignored(self, make_holiday):
        assert analyze_holiday(make_holiday(date(2025, 7, 4)), NOW) is None

    def test_holiday_today_counts(self, make_holiday):
        # 2025-08-15 is a Friday
        weekend = analyze_holiday(make_holiday(date(2025, 8, 15)), datetime(2025, 8, 15, 12, 0))
        assert weekend is not None
        assert weekend.days_until == 0

    def test_beyond_horizon_not_upcoming(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 9, 1)), NOW)
        assert weekend is not None
        assert weekend.days_until == 31
        assert weekend.is_upcoming is False

    def test_custom_horizon(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 9, 1)), NOW, horizon_days=45)
        assert weekend.is_upcoming is True


class TestDetectLongWeekends:
    """Tests for ranking and truncation."""

    def test_sorted_by_days_until(self, make_holiday):
        holidays = [
            make_holiday(date(2025, 11, 11), "Veterans Day"),
            make_holiday(date(2025, 8, 15), "Independence Day"),
            make_holiday(date(2025, 9, 1), "Labor Day"),
        ]
        weekends = detect_long_weekends(holidays, NOW)

        assert [w.holidays[0].name for w in weekends] == [
            "Independence Day",
            "Labor Day",
            "Veterans Day",
        ]

    def test_limited_to_ten(self, make_holiday):
        # 15 consecutive Fridays starting 2025-08-15
        holidays = [make_holiday(date(2025, 8, 15) + timedelta(weeks=i)) for i in range(15)]
        weekends = detect_long_weekends(holidays, NOW)

        assert len(weekends) == 10
        assert [w.days_until for w in weekends] == sorted(w.days_until for w in weekends)
        assert all(w.days_until >= 0 for w in weekends)

    def test_deduplicates_by_id(self, make_holiday):
        # Same date, different names -> same long weekend id
        holidays = [
            make_holiday(date(2025, 8, 15), "Independence Day"),
            make_holiday(date(2025, 8, 15), "Parsi New Year"),
        ]
        weekends = detect_long_weekends(holidays, NOW)

        assert len(weekends) == 1
        assert weekends[0].holidays[0].name == "Independence Day"

    def test_empty_input(self):
        assert detect_long_weekends([], NOW) == []

    def test_india_scenario(self, make_holiday, fixed_now):
        holidays = [
            make_holiday(date(2025, 8, 15), "Independence Day", country="IN"),
            make_holiday(date(2025, 10, 2), "Gandhi Jayanti", country="IN"),
        ]
        weekends = detect_long_weekends(holidays, fixed_now)

        assert len(weekends) == 1
        weekend = weekends[0]
        assert weekend.days == ["thursday", "friday", "saturday", "sunday"]
        assert weekend.start_date == date(2025, 8, 14)
        assert weekend.end_date == date(2025, 8, 17)
        assert weekend.days_until == 14


class TestDeduplication:
    """Tests for holiday and long weekend deduplication."""

    def test_same_date_and_name_collapsed(self, make_holiday):
        first = make_holiday(date(2025, 7, 4), "Independence Day")
        second = make_holiday(date(2025, 7, 4), "Independence Day", kind=HolidayKind.OBSERVANCE)

        result = deduplicate_holidays([first, second])
        assert result == [first]

    def test_different_names_kept(self, make_holiday):
        holidays = [
            make_holiday(date(2025, 7, 4), "Independence Day"),
            make_holiday(date(2025, 7, 4), "Fourth of July"),
        ]
        assert len(deduplicate_holidays(holidays)) == 2

    def test_preserves_input_order(self, make_holiday):
        holidays = [
            make_holiday(date(2025, 12, 25), "Christmas Day"),
            make_holiday(date(2025, 1, 1), "New Year's Day"),
            make_holiday(date(2025, 12, 25), "Christmas Day"),
        ]
        result = deduplicate_holidays(holidays)
        assert [h.name for h in result] == ["Christmas Day", "New Year's Day"]

    def test_idempotent(self, make_holiday):
        holidays = [
            make_holiday(date(2025, 7, 4), "Independence Day"),
            make_holiday(date(2025, 7, 4), "Independence Day"),
            make_holiday(date(2025, 12, 25), "Christmas Day"),
        ]
        once = deduplicate_holidays(holidays)
        assert deduplicate_holidays(once) == once

    def test_long_weekends_by_id(self, make_holiday):
        weekend = analyze_holiday(make_holiday(date(2025, 8, 15)), NOW)
        assert deduplicate_long_weekends([weekend, weekend]) == [weekend]
