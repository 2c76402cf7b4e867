"""Keep process environment from leaking into settings-driven tests."""

from __future__ import annotations

import pytest

WEATHER_ENV_VARS = (
    "GEOCODING_BASE_URL",
    "WEATHER_BASE_URL",
    "GEOCODING_RESULT_COUNT",
    "MIN_QUERY_LENGTH",
    "WIND_SPEED_UNIT",
    "WEATHER_LOOKUP_TIMEOUT_SECONDS",
    "DROPDOWN_VISIBLE_ROWS",
    "OPEN_METEO_API_KEY",
    "WEATHER_LOOKUP_USER_AGENT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in WEATHER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
