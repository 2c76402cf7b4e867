"""Rich-rendered terminal view: weather panel, candidate dropdown, notices."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import DisplayUpdate
from ..redaction import sanitize_text
from ..session import LocationSearchSession
from .models import Severity
from .notice_feed import NoticeFeed


def _severity_from_level(level_no: int) -> Severity:
    if level_no >= logging.ERROR:
        return "ERROR"
    if level_no >= logging.WARNING:
        return "WARN"
    return "INFO"


class _NoticeLogHandler(logging.Handler):
    """Route logger output into the notice feed instead of JSON lines."""

    def __init__(self, feed: NoticeFeed) -> None:
        super().__init__()
        self.feed = feed

    def emit(self, record: logging.LogRecord) -> None:
        try:
            severity = _severity_from_level(record.levelno)
            # Keyed on the message template: lines differing only by query collapse.
            self.feed.add(
                severity=severity,
                message=sanitize_text(record.getMessage()),
                dedupe_key=f"{severity}:{record.name}:{record.msg}",
            )
        except Exception:
            self.handleError(record)


def format_fields(update: DisplayUpdate) -> dict[str, str | None]:
    """Presentation strings for each field of a display update."""
    location = update.city_name
    if update.region:
        location = f"{update.city_name}, {update.region.upper()}"
    return {
        "location": location,
        "temp_c": f"{update.temperature_celsius:.1f}",
        "temp_f": f"{update.temperature_fahrenheit:.1f}",
        "condition": update.condition.description,
        "icon": update.condition.icon_ref,
        "humidity": f"{update.humidity_percent}",
        "wind": f"{update.wind_speed_mps}",
    }


class TerminalWeatherView:
    """Rendering collaborator for the interactive lookup."""

    _SEVERITY_STYLE = {"INFO": "white", "WARN": "yellow", "ERROR": "red"}

    def __init__(self, *, console: Console, notices: NoticeFeed | None = None) -> None:
        self.console = console
        self.notices = notices or NoticeFeed()
        self.current: DisplayUpdate | None = None
        self._logger: logging.Logger | None = None
        self._original_handlers: list[logging.Handler] = []

    def attach_logger(self, logger: logging.Logger) -> None:
        """Replace the JSON console handler with the notice feed."""
        self._logger = logger
        self._original_handlers = list(logger.handlers)
        logger.handlers = [_NoticeLogHandler(self.notices)]

    def detach_logger(self) -> None:
        """Restore original logger handlers."""
        if self._logger is None:
            return
        self._logger.handlers = self._original_handlers
        self._logger = None
        self._original_handlers = []

    # ── DisplaySink ───────────────────────────────────────────────────────────

    def show(self, update: DisplayUpdate) -> None:
        self.current = update
        self.console.print(self.build_weather_panel(update))

    def build_weather_panel(self, update: DisplayUpdate) -> Panel:
        fields = format_fields(update)
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Temperature", f"{fields['temp_c']} °C / {fields['temp_f']} °F")
        table.add_row("Condition", fields["condition"] or "-")
        # Sentinel conditions carry no icon.
        if fields["icon"] is not None:
            table.add_row("Icon", fields["icon"])
        table.add_row("Humidity", f"{fields['humidity']} %")
        table.add_row("Wind", f"{fields['wind']} m/s")
        return Panel(table, title=fields["location"], border_style="cyan")

    # ── dropdown ──────────────────────────────────────────────────────────────

    def render_candidates(self, session: LocationSearchSession) -> None:
        if not session.list_visible:
            return
        self.console.print(self.build_candidates_table(session))

    def build_candidates_table(self, session: LocationSearchSession) -> Table:
        table = Table(show_header=True, header_style="bold", title=f"Matches for {session.query!r}")
        table.add_column("#", justify="right", width=3)
        table.add_column("Location", overflow="fold")
        table.add_column("Lat / Lon", justify="right")
        for offset, candidate in enumerate(session.visible_candidates):
            index = session.scroll_offset + offset
            style = "reverse" if index == session.highlighted_index else None
            table.add_row(
                str(index + 1),
                candidate.label,
                f"{candidate.latitude:.2f}, {candidate.longitude:.2f}",
                style=style,
            )
        hidden = len(session.candidates) - len(session.visible_candidates)
        if hidden > 0:
            table.caption = f"{hidden} more (use :down / :up)"
        return table

    # ── notices ───────────────────────────────────────────────────────────────

    def render_notices(self) -> None:
        """Print notices not shown yet; repeats of a shown one only bump its count."""
        for notice in self.notices.take_unseen():
            style = self._SEVERITY_STYLE[notice.severity]
            text = Text(notice.message, style=style)
            if notice.count > 1:
                text.append(f" (x{notice.count})", style="dim")
            self.console.print(text)

    def render_prompt_hint(self) -> None:
        self.console.print(
            Text(
                "Type a city name, a row number to pick, or one of "
                ":down :up :enter :dismiss :show :quit",
                style="dim",
            )
        )
