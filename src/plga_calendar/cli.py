from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional, Sequence

import orjson

from .api import call_api
from .bootstrap import configure_logging
from .domain import PlgaCalendarError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PLGA Calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_parser = subparsers.add_parser("api", help="Start the HTTP API server.")
    api_parser.add_argument("--host", default=None)
    api_parser.add_argument("--port", type=int, default=None)

    day_parser = subparsers.add_parser("day", help="List activities covering a day (YYYY-MM-DD).")
    day_parser.add_argument("date")

    month_parser = subparsers.add_parser("month", help="List activities overlapping a month (YYYY-MM).")
    month_parser.add_argument("month", nargs="?", default=None)

    delete_parser = subparsers.add_parser("delete", help="Delete an activity by id.")
    delete_parser.add_argument("activity_id")

    subparsers.add_parser("tools", help="List registered API functions.")

    return parser


def _emit(payload: Any) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    logger = logging.getLogger(__name__)
    logger.debug("PLGA Calendar CLI running %s", args.command)

    if args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
        return 0

    try:
        if args.command == "day":
            _emit(call_api("activities_for_day", date=args.date))
        elif args.command == "month":
            _emit(call_api("activities_for_month", month=args.month))
        elif args.command == "delete":
            _emit(call_api("activity_delete", activity_id=args.activity_id))
        elif args.command == "tools":
            _emit(call_api("list_available_tools"))
        else:  # pragma: no cover - argparse enforces choices
            parser.print_help()
            return 2
    except PlgaCalendarError as exc:
        logger.error("%s failed: %s", args.command, exc)
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
