"""Holiday models shared by every holiday source."""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class HolidayKind(str, Enum):
    """Observance category reported by a source."""

    PUBLIC = "public"  # Day off; the only kind that can create a long weekend
    OBSERVANCE = "observance"
    OPTIONAL = "optional"


class Holiday(BaseModel):
    """A single whole-day calendar observance.

    Holidays carry a plain calendar date with no time of day or timezone.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(..., min_length=1, description="Display name")
    date: datetime.date = Field(..., description="Calendar date of the holiday")
    kind: HolidayKind = Field(
        default=HolidayKind.PUBLIC, description="Observance category"
    )
    country: str = Field(..., description="ISO 3166-1 alpha-2 country code")
    description: str | None = Field(
        default=None, description="Human-readable detail, often the local name"
    )

    @field_validator("country", mode="after")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return v.upper()

    @property
    def is_public(self) -> bool:
        return self.kind == HolidayKind.PUBLIC
