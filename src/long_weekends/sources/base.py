"""Base holiday source abstraction.

This module defines the interface for holiday data sources and the errors
they raise. Every source translates its upstream data into the canonical
`Holiday` model defined in `long_weekends.models.holiday`.

## Failure Contract

- A source raises `SourceError` when it cannot produce anything at all
  (network failure, non-2xx status, unreadable body).
- A single malformed record is dropped; the rest of the batch is kept.
- Callers (the aggregator) treat any failure as an empty contribution.

## Supported Sources

### Nager.Date (date.nager.at)
- Endpoint: https://date.nager.at/api/v3/PublicHolidays/{year}/{countryCode}
- Auth: None
- Response: JSON array of {date, localName, name, global, counties, types}
- Unknown countries answer 204 No Content

### Google Calendar public holiday calendars
- Endpoint: https://www.googleapis.com/calendar/v3/calendars/{id}/events
- Auth: API key (developerKey)
- Response: {items: [{summary, description, start: {date|dateTime}}]}

### Static table
- In-process fixed-date holidays; never fails
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from long_weekends.models.config import ServiceConfig
from long_weekends.models.holiday import Holiday


class SourceError(Exception):
    """Base exception for holiday source errors."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.source = source
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(SourceError):
    """Raised when a source rate limit is exceeded."""

    def __init__(
        self,
        source: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {source}",
            source=source,
            status_code=status_code,
        )
        self.retry_after = retry_after


def years_spanned(start: date, end: date) -> range:
    """Calendar years touched by the inclusive range."""
    return range(start.year, end.year + 1)


class HolidaySource(ABC):
    """Abstract base class for holiday sources.

    Attributes:
        name: Short source identifier used in logs and errors
    """

    name: str

    @abstractmethod
    async def fetch(
        self,
        start: date,
        end: date,
        config: ServiceConfig,
    ) -> list[Holiday]:
        """Get holidays between `start` and `end` (inclusive).

        Sources may return records outside the window; the aggregator
        applies the final date filter.

        Raises:
            SourceError: If the source cannot produce any data
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        return None

    async def __aenter__(self) -> HolidaySource:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()


class HttpHolidaySource(HolidaySource):
    """Holiday source backed by a JSON HTTP API.

    A client can be injected (tests pass one built on `httpx.MockTransport`);
    otherwise one is created lazily and closed by `aclose()`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ):
        self.user_agent = user_agent or "long-weekends/0.1.0"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Fetch a URL, retrying transport errors once.

        Raises:
            SourceError: On any 4xx/5xx response
            RateLimitError: On HTTP 429
        """
        client = self._get_client()
        response = await client.get(
            url, params=params, headers=self._get_default_headers()
        )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                status_code=429,
            )

        if response.status_code >= 400:
            raise SourceError(
                f"API request failed: {response.status_code}",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
