"""Long weekend detection: deduplication, weekday rules and analysis."""

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
    THURSDAY_BRIDGE_RULE,
    SpanRule,
    build_span_rules,
)

__all__ = [
    "analyze_holiday",
    "days_until",
    "detect_long_weekends",
    "deduplicate_holidays",
    "deduplicate_long_weekends",
    "DEFAULT_SPAN_RULES",
    "THURSDAY_BRIDGE_RULE",
    "SpanRule",
    "build_span_rules",
]
