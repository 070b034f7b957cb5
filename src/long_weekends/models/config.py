"""Per-service holiday lookup configuration."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceConfig(BaseModel):
    """Country/region/API key used by one calendar service.

    Instances are immutable; use `merged()` to derive an updated copy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    country: str = Field(
        default="US", pattern=r"^[A-Za-z]{2}$", description="ISO country code"
    )
    region: str = Field(default="", description="Subdivision code, e.g. 'CA'")
    api_key: str | None = Field(
        default=None, description="Google API key enabling the calendar feed"
    )

    @field_validator("country", mode="after")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return v.upper()

    @field_validator("region", mode="before")
    @classmethod
    def normalize_region(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_api_key_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def merged(self, **changes: Any) -> Self:
        """Return a copy with `changes` shallow-merged in.

        Keys set to None are ignored so partial updates keep existing values;
        pass `api_key=""` to clear the key.
        """
        updates = {key: value for key, value in changes.items() if value is not None}
        return type(self).model_validate({**self.model_dump(), **updates})
