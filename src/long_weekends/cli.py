"""Command-line interface for holiday and long weekend lookups."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, timedelta

from long_weekends.config import get_settings
from long_weekends.service import create_calendar_service


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="long-weekends",
        description="Long Weekends - find holidays that make a long weekend",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--country", help="ISO country code (default: from settings)")
    common.add_argument("--region", help="Region/subdivision code")

    # Holidays command
    holidays_parser = subparsers.add_parser(
        "holidays", parents=[common], help="List holidays in a date range"
    )
    holidays_parser.add_argument("--start", type=_parse_date, help="First date (default: today)")
    holidays_parser.add_argument("--end", type=_parse_date, help="Last date (default: start + 90 days)")

    # Detect command
    detect_parser = subparsers.add_parser(
        "detect", parents=[common], help="Detect upcoming long weekends"
    )
    detect_parser.add_argument(
        "--days",
        type=int,
        default=90,
        help="Number of days ahead to search (default: 90)",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: from settings)")
    serve_parser.add_argument("--port", type=int, help="Port (default: from settings)")

    return parser


async def _run(args: argparse.Namespace) -> list[dict]:
    settings = get_settings()

    async with create_calendar_service(
        settings, country=args.country, region=args.region
    ) as service:
        if args.command == "holidays":
            start = args.start or date.today()
            end = args.end or start + timedelta(days=90)
            holidays = await service.fetch_holidays(start, end)
            return [h.model_dump(mode="json", by_alias=True) for h in holidays]

        today = date.today()
        weekends = await service.detect_long_weekends(
            today, today + timedelta(days=args.days)
        )
        return [w.model_dump(mode="json", by_alias=True) for w in weekends]


def main() -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve":
        import uvicorn

        from long_weekends.api import create_app

        settings = get_settings()
        uvicorn.run(create_app(), host=args.host or settings.host, port=args.port or settings.port)
        return 0

    result = asyncio.run(_run(args))
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
