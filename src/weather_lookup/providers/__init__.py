"""Geocoding and weather provider integrations."""

from .base import CurrentWeatherProvider, GeocodingProvider
from .open_meteo import CURRENT_PARAMETERS, OpenMeteoClient

__all__ = [
    "CURRENT_PARAMETERS",
    "CurrentWeatherProvider",
    "GeocodingProvider",
    "OpenMeteoClient",
]
