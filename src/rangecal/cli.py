from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import orjson

from .api import serialize_events
from .bootstrap import configure_logging
from .domain import CalendarDate
from .errors import CalendarError
from .services import ServiceContext, build_events_manager
from .services.http import run_local_server


def _parse_day(value: str) -> CalendarDate:
    try:
        return CalendarDate.from_date(date.fromisoformat(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} must be formatted YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="rangecal command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_parser = subparsers.add_parser("api", help="Serve the events API over HTTP.")
    api_parser.add_argument("--host", default="127.0.0.1")
    api_parser.add_argument("--port", type=int, default=8000)
    api_parser.add_argument("--demo-file", type=Path, default=None, help="JSON file seeding the local-only store.")

    range_parser = subparsers.add_parser("range", help="Print the events between two dates as JSON.")
    range_parser.add_argument("start", type=_parse_day)
    range_parser.add_argument("end", type=_parse_day)
    range_parser.add_argument("--demo-file", type=Path, default=None, help="JSON file seeding the local-only store.")

    return parser


async def _print_range(start: CalendarDate, end: CalendarDate, demo_file: Optional[Path]) -> None:
    manager = build_events_manager(ServiceContext(), demo_file=demo_file)
    try:
        events = await manager.resolve_range(start, end)
    finally:
        await manager.aclose()
    sys.stdout.write(orjson.dumps(serialize_events(events), option=orjson.OPT_INDENT_2).decode() + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    logger = logging.getLogger(__name__)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "api":
        manager = build_events_manager(ServiceContext(), demo_file=args.demo_file)
        run_local_server(host=args.host, port=args.port, manager=manager)
    elif args.command == "range":
        try:
            asyncio.run(_print_range(args.start, args.end, args.demo_file))
        except CalendarError as exc:
            logger.error("%s", exc)
            return 1
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
