"""WMO weather code -> description/icon lookup.

Open-Meteo reports current conditions as WMO weather interpretation codes.
The codes are a fixed external enumeration with no arithmetic structure, so
the mapping is a flat table. Icons come from the OpenWeatherMap icon set,
which has a day ("d") and night ("n") variant of every image.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .models import ConditionEntry

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}{variant}@2x.png"

NOT_AVAILABLE = ConditionEntry(description="Not available", icon_ref=None)

# code: (day description, night description, icon id)
_WMO_TABLE: tuple[tuple[int, str, str, str], ...] = (
    (0, "Sunny", "Clear", "01"),
    (1, "Mainly Sunny", "Mainly Clear", "01"),
    (2, "Partly Cloudy", "Partly Cloudy", "02"),
    (3, "Cloudy", "Cloudy", "03"),
    (45, "Foggy", "Foggy", "50"),
    (48, "Rime Fog", "Rime Fog", "50"),
    (51, "Light Drizzle", "Light Drizzle", "09"),
    (53, "Drizzle", "Drizzle", "09"),
    (55, "Heavy Drizzle", "Heavy Drizzle", "09"),
    (56, "Light Freezing Drizzle", "Light Freezing Drizzle", "09"),
    (57, "Freezing Drizzle", "Freezing Drizzle", "09"),
    (61, "Light Rain", "Light Rain", "10"),
    (63, "Rain", "Rain", "10"),
    (65, "Heavy Rain", "Heavy Rain", "10"),
    (66, "Light Freezing Rain", "Light Freezing Rain", "10"),
    (67, "Freezing Rain", "Freezing Rain", "10"),
    (71, "Light Snow", "Light Snow", "13"),
    (73, "Snow", "Snow", "13"),
    (75, "Heavy Snow", "Heavy Snow", "13"),
    (77, "Snow Grains", "Snow Grains", "13"),
    (80, "Light Showers", "Light Showers", "09"),
    (81, "Showers", "Showers", "09"),
    (82, "Heavy Showers", "Heavy Showers", "09"),
    (85, "Light Snow Showers", "Light Snow Showers", "13"),
    (86, "Snow Showers", "Snow Showers", "13"),
    (95, "Thunderstorm", "Thunderstorm", "11"),
    (96, "Light Thunderstorms With Hail", "Light Thunderstorms With Hail", "11"),
    (99, "Thunderstorm With Hail", "Thunderstorm With Hail", "11"),
)


def _build_entries() -> Mapping[tuple[int, bool], ConditionEntry]:
    entries: dict[tuple[int, bool], ConditionEntry] = {}
    for code, day_text, night_text, icon in _WMO_TABLE:
        entries[(code, True)] = ConditionEntry(
            description=day_text,
            icon_ref=ICON_URL_TEMPLATE.format(icon=icon, variant="d"),
        )
        entries[(code, False)] = ConditionEntry(
            description=night_text,
            icon_ref=ICON_URL_TEMPLATE.format(icon=icon, variant="n"),
        )
    return MappingProxyType(entries)


class ConditionCatalog:
    """Immutable (weather_code, is_day) -> ConditionEntry table.

    ``resolve`` is total: codes outside the table, and values that are not
    plain integers, resolve to ``NOT_AVAILABLE`` instead of raising.
    """

    def __init__(self, entries: Mapping[tuple[int, bool], ConditionEntry] | None = None) -> None:
        self._entries = entries if entries is not None else _DEFAULT_ENTRIES

    def resolve(self, weather_code: Any, is_day: bool) -> ConditionEntry:
        if isinstance(weather_code, bool) or not isinstance(weather_code, int):
            return NOT_AVAILABLE
        return self._entries.get((weather_code, bool(is_day)), NOT_AVAILABLE)

    def codes(self) -> frozenset[int]:
        return frozenset(code for code, _ in self._entries)

    def __contains__(self, weather_code: object) -> bool:
        return self.resolve(weather_code, True) is not NOT_AVAILABLE


_DEFAULT_ENTRIES = _build_entries()
DEFAULT_CATALOG = ConditionCatalog()


def resolve_condition(weather_code: Any, is_day: bool) -> ConditionEntry:
    """Resolve against the process-wide catalog."""
    return DEFAULT_CATALOG.resolve(weather_code, is_day)
