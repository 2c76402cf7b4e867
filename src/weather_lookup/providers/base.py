"""Provider-agnostic geocoding and current-weather contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Candidate, WeatherReading


class GeocodingProvider(ABC):
    """Turns a partial city name into ordered location candidates."""

    @abstractmethod
    def search_locations(self, query: str, *, count: int = 10) -> list[Candidate]:
        """Return candidates in provider order; raise NetworkError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""


class CurrentWeatherProvider(ABC):
    """Fetches current conditions for a coordinate pair."""

    @abstractmethod
    def fetch_current(self, *, latitude: float, longitude: float) -> WeatherReading:
        """Return the current reading; raise NetworkError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
