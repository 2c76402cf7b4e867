"""Terminal presentation for the interactive lookup."""

from .models import Notice
from .notice_feed import NoticeFeed
from .weather_view import TerminalWeatherView, format_fields

__all__ = ["Notice", "NoticeFeed", "TerminalWeatherView", "format_fields"]
