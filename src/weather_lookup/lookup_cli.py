"""Interactive terminal front-end: search a city, pick a match, show weather."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from .config import Settings, load_settings
from .exceptions import ConfigError
from .log_setup import setup_logger
from .orchestrator import WeatherLookupOrchestrator
from .providers.open_meteo import OpenMeteoClient
from .session import LocationSearchSession
from .ui.notice_feed import NoticeFeed
from .ui.weather_view import TerminalWeatherView

QUIT_COMMANDS = {":quit", ":q", ":exit"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse lookup CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Look up current weather for a city via Open-Meteo."
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Initial (partial) city name to search for.",
    )
    parser.add_argument(
        "--pick",
        type=int,
        default=None,
        help="1-based match number to select for QUERY, then exit.",
    )
    parser.add_argument(
        "--visible-rows",
        type=int,
        default=None,
        help="Number of dropdown rows shown at once.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Console log level.",
    )
    return parser.parse_args(argv)


def build_orchestrator(
    settings: Settings,
    client: OpenMeteoClient,
    view: TerminalWeatherView,
    logger: logging.Logger,
    *,
    visible_rows: int | None = None,
) -> WeatherLookupOrchestrator:
    session = LocationSearchSession(
        min_query_length=settings.min_query_length,
        visible_rows=visible_rows or settings.visible_rows,
    )
    return WeatherLookupOrchestrator(
        session=session,
        geocoder=client,
        weather=client,
        display=view,
        notices=view.notices,
        logger=logger,
        result_count=settings.geocoding_result_count,
    )


def dispatch_line(orchestrator: WeatherLookupOrchestrator, line: str) -> bool:
    """Apply one line of input to the session. Returns False to quit.

    ``:down``/``:up``/``:enter`` stand in for the arrow and Enter keys,
    ``:dismiss`` for a click outside the list, ``:show`` for refocusing the
    input, and a bare number for clicking that row (an out-of-range number leaves
    the list alone and raises a notice). Anything else is the new content of
    the search box.
    """
    command = line.strip()
    session = orchestrator.session
    if command in QUIT_COMMANDS:
        return False
    if command == ":down":
        orchestrator.handle_navigate("down")
    elif command == ":up":
        orchestrator.handle_navigate("up")
    elif command == ":enter":
        orchestrator.handle_confirm()
    elif command == ":dismiss":
        orchestrator.handle_dismiss()
    elif command == ":show":
        orchestrator.handle_reveal()
    elif command.isdigit() and session.list_visible:
        index = int(command) - 1
        if 0 <= index < len(session.candidates):
            orchestrator.handle_click(session.candidates[index].id)
        else:
            orchestrator.notices.notify(
                f"No match #{command}; pick 1-{len(session.candidates)}."
            )
    else:
        orchestrator.handle_query_changed(command)
    return True


def run_interactive(
    orchestrator: WeatherLookupOrchestrator,
    view: TerminalWeatherView,
    console: Console,
) -> None:
    view.render_prompt_hint()
    view.render_candidates(orchestrator.session)
    while True:
        try:
            line = console.input("[bold]search>[/bold] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            return
        if not dispatch_line(orchestrator, line):
            return
        view.render_notices()
        if orchestrator.session.refocus_requested:
            orchestrator.session.refocus_requested = False
            view.render_prompt_hint()
        view.render_candidates(orchestrator.session)


def run_once(orchestrator: WeatherLookupOrchestrator, query: str, pick: int) -> int:
    """Search, select match ``pick`` and display it. Returns an exit code."""
    orchestrator.handle_query_changed(query)
    candidates = orchestrator.session.candidates
    if not (1 <= pick <= len(candidates)):
        orchestrator.logger.error(
            "No match #%d for %r (%d matches)", pick, query, len(candidates)
        )
        return 4
    update = orchestrator.handle_click(candidates[pick - 1].id)
    return 0 if update is not None else 4


def main(argv: list[str] | None = None) -> int:
    """Run the weather lookup front-end."""
    args = parse_args(argv)
    logger = setup_logger(level=getattr(logging, args.log_level))
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    if args.visible_rows is not None and args.visible_rows <= 0:
        logger.error("--visible-rows must be > 0 when provided.")
        return 2
    if args.pick is not None and not args.query:
        logger.error("--pick requires a QUERY.")
        return 2

    logger.info("Starting weather lookup: %s", settings.safe_summary())
    view = TerminalWeatherView(console=console, notices=NoticeFeed())
    with OpenMeteoClient(settings=settings, logger=logger) as client:
        orchestrator = build_orchestrator(
            settings, client, view, logger, visible_rows=args.visible_rows
        )
        if args.pick is not None:
            exit_code = run_once(orchestrator, args.query, args.pick)
            view.render_notices()
            return exit_code

        if args.query:
            orchestrator.handle_query_changed(args.query)
            view.render_notices()
        view.attach_logger(logger)
        try:
            run_interactive(orchestrator, view, console)
        finally:
            view.detach_logger()
    return 0


if __name__ == "__main__":
    sys.exit(main())
