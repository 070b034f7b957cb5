"""FastAPI application and routes.

This module provides the REST API for holiday and long weekend lookups.

## API Structure

- /api/calendar/long-weekends - Upcoming long weekends (GET) or holidays plus
  long weekends for a posted configuration (POST)
- /api/calendar/holidays - Deduplicated holidays in a date range
- /health - Health check

Dates are serialized as ISO-8601 strings and fields use camelCase.
"""

from long_weekends.api.app import create_app

__all__ = ["create_app"]
