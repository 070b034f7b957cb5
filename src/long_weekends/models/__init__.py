"""Domain models for long weekend detection."""

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday, HolidayKind
from long_weekends.models.long_weekend import LongWeekend

__all__ = [
    "Holiday",
    "HolidayKind",
    "LongWeekend",
    "ServiceConfig",
]
