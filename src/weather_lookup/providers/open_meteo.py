"""Open-Meteo geocoding + current weather provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import NetworkError, PayloadError
from ..models import Candidate, CandidateId, WeatherReading
from ..redaction import sanitize_for_logging, sanitize_text
from .base import CurrentWeatherProvider, GeocodingProvider

CURRENT_PARAMETERS = "temperature_2m,relative_humidity_2m,is_day,weather_code,wind_speed_10m"


class OpenMeteoClient(GeocodingProvider, CurrentWeatherProvider):
    """Fetches and normalizes geocoding matches and current conditions.

    A single failed request is reported, never retried: the user can simply
    type again.
    """

    provider_name = "open-meteo"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.Client(
            timeout=settings.timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.user_agent,
            },
            transport=transport,
        )

    def __enter__(self) -> OpenMeteoClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ── GeocodingProvider ─────────────────────────────────────────────────────

    def search_locations(self, query: str, *, count: int = 10) -> list[Candidate]:
        """Look up candidates for a partial city name, in API order."""
        payload = self._request_json(
            str(self.settings.geocoding_base_url),
            params={"name": query, "count": count},
            context="geocoding search",
        )
        raw_results = payload.get("results")
        if raw_results is None:
            return []
        if not isinstance(raw_results, list):
            raise PayloadError("Geocoding payload 'results' is not a list.")

        candidates: list[Candidate] = []
        for item in raw_results:
            candidate = self._normalize_candidate(item)
            if candidate is None:
                self.logger.debug("Skipping unusable geocoding result: %s", item)
                continue
            candidates.append(candidate)
        return candidates

    # ── CurrentWeatherProvider ────────────────────────────────────────────────

    def fetch_current(self, *, latitude: float, longitude: float) -> WeatherReading:
        """Fetch current conditions for one coordinate pair."""
        payload = self._request_json(
            str(self.settings.weather_base_url),
            params={
                "latitude": latitude,
                "longitude": longitude,
                "current": CURRENT_PARAMETERS,
                "wind_speed_unit": self.settings.wind_speed_unit,
                "timezone": "auto",
            },
            context="weather fetch",
        )
        return self._normalize_current(payload)

    # ── HTTP ──────────────────────────────────────────────────────────────────

    def _request_json(self, url: str, params: dict[str, Any], context: str) -> dict[str, Any]:
        query = dict(params)
        if self.settings.open_meteo_api_key:
            query["apikey"] = self.settings.open_meteo_api_key
        self.logger.info(
            "Open-Meteo %s: %s params=%s",
            context,
            url,
            sanitize_for_logging(query),
            extra=self._log_extra(context),
        )

        try:
            response = self._client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self.logger.warning(
                "Open-Meteo %s failed (HTTP %d)",
                context,
                status,
                extra=self._log_extra(context, status),
            )
            raise NetworkError(
                f"Open-Meteo {context} failed with status {status}: "
                f"{sanitize_text(exc.response.text[:300])}",
                context=context,
                status_code=status,
            ) from exc
        except httpx.TimeoutException as exc:
            self.logger.warning(
                "Open-Meteo %s timed out", context, extra=self._log_extra(context)
            )
            raise NetworkError(
                f"Open-Meteo {context} timed out after {self.settings.timeout_seconds}s.",
                context=context,
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.warning(
                "Open-Meteo %s transport error: %s",
                context,
                exc,
                extra=self._log_extra(context),
            )
            raise NetworkError(
                f"Open-Meteo {context} transport error: {sanitize_text(str(exc))}",
                context=context,
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise PayloadError(f"Open-Meteo {context} returned non-JSON response.") from exc

        if not isinstance(payload, dict):
            raise PayloadError(
                f"Open-Meteo {context} returned unexpected payload type "
                f"{type(payload).__name__}."
            )
        return payload

    def _log_extra(self, context: str, status_code: int | None = None) -> dict[str, Any]:
        return {
            "provider": self.provider_name,
            "context": context,
            "status_code": status_code,
        }

    # ── normalization ─────────────────────────────────────────────────────────

    def _normalize_candidate(self, item: Any) -> Candidate | None:
        if not isinstance(item, dict):
            return None
        name = self._as_str(item.get("name"))
        latitude = self._as_float(item.get("latitude"))
        longitude = self._as_float(item.get("longitude"))
        if name is None or latitude is None or longitude is None:
            return None
        try:
            candidate_id = CandidateId.from_raw(item.get("id"))
        except ValueError:
            return None
        try:
            return Candidate(
                id=candidate_id,
                city_name=name,
                region=self._as_str(item.get("admin1")) or "",
                latitude=latitude,
                longitude=longitude,
            )
        except ValidationError:
            return None

    def _normalize_current(self, payload: dict[str, Any]) -> WeatherReading:
        current = payload.get("current")
        if not isinstance(current, dict):
            raise PayloadError("Weather payload missing 'current' object.")

        temperature = self._as_float(current.get("temperature_2m"))
        humidity = self._as_float(current.get("relative_humidity_2m"))
        wind = self._as_float(current.get("wind_speed_10m"))
        code = self._as_int(current.get("weather_code"))
        is_day = self._as_int(current.get("is_day"))
        missing = [
            key
            for key, value in (
                ("temperature_2m", temperature),
                ("relative_humidity_2m", humidity),
                ("wind_speed_10m", wind),
                ("weather_code", code),
                ("is_day", is_day),
            )
            if value is None
        ]
        if missing:
            raise PayloadError(f"Weather payload 'current' missing fields: {', '.join(missing)}.")

        return WeatherReading(
            temperature_celsius=temperature,
            is_day=bool(is_day),
            weather_code=code,
            humidity_percent=int(humidity),
            wind_speed_mps=wind,
        )

    @staticmethod
    def _as_str(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @staticmethod
    def _as_int(value: Any) -> int | None:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        return None
