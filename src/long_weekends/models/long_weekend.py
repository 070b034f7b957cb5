"""Long weekend model."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from long_weekends.models.holiday import Holiday


class LongWeekend(BaseModel):
    """A contiguous run of days off anchored on one public holiday.

    Long weekends are derived on demand and never mutated. `id` is stable
    for a given holiday date and weekday pattern, so it doubles as the key
    for deduplication across sources and runs.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., description="e.g. 'holiday-2025-08-15-friday'")
    name: str
    start_date: date = Field(..., description="First day off (inclusive)")
    end_date: date = Field(..., description="Last day off (inclusive)")
    days: list[str] = Field(..., description="Lowercase weekday names, chronological")
    is_upcoming: bool
    days_until: int = Field(..., ge=0, description="Days from now to the holiday")
    reason: str
    holidays: list[Holiday] = Field(..., min_length=1)
