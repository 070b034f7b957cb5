"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
API keys should be provided via environment variables, not config files.

## Optional Environment Variables

- DEFAULT_COUNTRY: ISO country code used when a request names none (default: US)
- DEFAULT_REGION: Region/subdivision code (default: empty)
- GOOGLE_CALENDAR_API_KEY: Enables the Google Calendar holiday feed
- SOURCE_TIMEOUT_SECONDS: Per-source deadline for holiday lookups (default: 10)
- THURSDAY_BRIDGE: Treat Thursday holidays as Thursday-Sunday long weekends
- LOG_LEVEL: Logging level for the CLI (default: INFO)

## Example .env file

```
DEFAULT_COUNTRY=IN
GOOGLE_CALENDAR_API_KEY=your-google-api-key
SOURCE_TIMEOUT_SECONDS=5
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Long Weekend Planner"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Holiday lookup defaults
    default_country: str = Field(default="US", pattern=r"^[A-Za-z]{2}$")
    default_region: str = ""

    # Holiday sources
    google_calendar_api_key: str | None = None
    nager_base_url: str = "https://date.nager.at/api/v3"
    user_agent: str = Field(
        default="long-weekends/0.1.0",
        description="User-Agent sent to holiday APIs",
    )
    source_timeout_seconds: float = Field(default=10.0, gt=0, le=120)

    # Detection
    upcoming_horizon_days: int = Field(default=30, ge=0)
    max_long_weekends: int = Field(default=10, ge=1, le=100)
    lookahead_months: int = Field(default=3, ge=1, le=24)
    thursday_bridge: bool = False

    @field_validator("default_country", mode="after")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return v.upper()

    @property
    def google_calendar_configured(self) -> bool:
        """Check if the Google Calendar feed can be used."""
        return bool(self.google_calendar_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
