"""Command-line entry point: `weatherlookup search Paris`."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from weatherlookup import config
from weatherlookup.lookup_state import LookupState
from weatherlookup.orchestrator import LookupOrchestrator
from weatherlookup.rendering import render_recent, render_session
from weatherlookup.units import TemperatureUnit, UnitPreference
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NEEDS_SELECTION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weatherlookup", description="Current weather and forecast for a place.")
    parser.add_argument("--log-level", default=None, help="Logging level (default from WEATHER_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Look up the weather for a place name")
    search.add_argument("query", nargs="+", help="Place name, e.g. 'Springfield'")
    search.add_argument(
        "--unit",
        choices=[u.value for u in TemperatureUnit],
        default=None,
        help="Temperature unit (default from WEATHER_DEFAULT_UNIT)",
    )
    search.add_argument("--pick", type=int, default=None, help="Choose the Nth candidate when several places match")

    sub.add_parser("recent", help="List recent searches")
    sub.add_parser("clear-recent", help="Forget recent searches")
    return parser


async def _run_search(orchestrator: LookupOrchestrator, query: str, pick: Optional[int]):
    session = await orchestrator.submit(query)
    if session.state is LookupState.AWAITING_SELECTION and pick is not None:
        if not 1 <= pick <= len(session.candidates):
            raise ValueError(f"--pick must be between 1 and {len(session.candidates)}")
        session = await orchestrator.select_candidate(session.candidates[pick - 1])
    return session


def main(argv: Sequence[str] | None = None, settings: config.Settings | None = None) -> int:
    settings = settings or config.settings
    args = build_parser().parse_args(argv)
    setup_logging(level=(args.log_level or settings.log_level).upper())

    orchestrator = LookupOrchestrator.from_settings(settings)

    if args.command == "recent":
        print(render_recent(orchestrator.recent.labels))
        return EXIT_OK

    if args.command == "clear-recent":
        orchestrator.clear_recent()
        print("Recent searches cleared.")
        return EXIT_OK

    units = UnitPreference(args.unit or settings.default_unit)
    try:
        session = asyncio.run(_run_search(orchestrator, " ".join(args.query), args.pick))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    output = render_session(session, units)
    if session.state is LookupState.FAILED:
        print(output, file=sys.stderr)
        return EXIT_FAILED
    print(output)
    if session.state is LookupState.AWAITING_SELECTION:
        print("Re-run with --pick N to choose one.")
        return EXIT_NEEDS_SELECTION
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
