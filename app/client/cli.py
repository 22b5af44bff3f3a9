"""
Schedule client CLI.

Fetches the course list from the proxy once and writes the weekly schedule
page as HTML:

    schedule-client
    schedule-client --week next --output next_week.html
    schedule-client --api-url http://localhost:3000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app.client.render import render_page
from app.client.timer import ImmediateTimer
from app.client.view import ScheduleView
from app.config import settings
from app.logging_config import setup_logging

logger = logging.getLogger("app.client")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schedule-client", description="Render this/next week's courses as HTML")
    parser.add_argument("--api-url", default=settings.SCHEDULE_API_URL, help="proxy base URL")
    parser.add_argument("--week", choices=["current", "next"], default="current")
    parser.add_argument("--output", "-o", type=Path, default=None, help="write HTML here instead of stdout")
    return parser


def main(argv: list[str] | None = None, view: ScheduleView | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file="client.log")

    view = view or ScheduleView(api_url=args.api_url, timer=ImmediateTimer())
    if not view.load():
        print(view.error, file=sys.stderr)
        return 1

    view.select_week(args.week)
    html = render_page(view)

    if args.output:
        args.output.write_text(html, encoding="utf-8")
        logger.info("[Client] wrote %s (%s week)", args.output, args.week)
    else:
        sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
