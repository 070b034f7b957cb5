"""Holiday aggregation and long weekend detection."""

from long_weekends.models import Holiday, HolidayKind, LongWeekend, ServiceConfig
from long_weekends.service import CalendarService, create_calendar_service

__version__ = "0.1.0"

__all__ = [
    "CalendarService",
    "create_calendar_service",
    "Holiday",
    "HolidayKind",
    "LongWeekend",
    "ServiceConfig",
]
