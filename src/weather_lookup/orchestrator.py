"""Glue between the search session, Open-Meteo and the display."""

from __future__ import annotations

import logging
from typing import Protocol

from .catalog import DEFAULT_CATALOG, ConditionCatalog
from .exceptions import WeatherLookupError
from .models import Candidate, CandidateId, DisplayUpdate, SelectedLocation, WeatherReading
from .providers.base import CurrentWeatherProvider, GeocodingProvider
from .session import LocationSearchSession, NavigateDirection

LOCATION_ERROR_NOTICE = "Error fetching location data!"
WEATHER_ERROR_NOTICE = "Error fetching weather data!"


class DisplaySink(Protocol):
    def show(self, update: DisplayUpdate) -> None: ...


class NoticeSink(Protocol):
    def notify(self, message: str) -> None: ...


class WeatherLookupOrchestrator:
    """Drives one search session and turns selections into display updates.

    Lookup failures are reported through the notice sink and never reach the
    display sink, so whatever reading is on screen stays there.
    """

    def __init__(
        self,
        *,
        session: LocationSearchSession,
        geocoder: GeocodingProvider,
        weather: CurrentWeatherProvider,
        display: DisplaySink,
        notices: NoticeSink,
        logger: logging.Logger,
        catalog: ConditionCatalog = DEFAULT_CATALOG,
        result_count: int = 10,
    ) -> None:
        self.session = session
        self.geocoder = geocoder
        self.weather = weather
        self.display = display
        self.notices = notices
        self.logger = logger
        self.catalog = catalog
        self.result_count = result_count
        self.last_update: DisplayUpdate | None = None

    # ── lookups ───────────────────────────────────────────────────────────────

    def lookup_candidates(self, partial_city_name: str) -> list[Candidate]:
        return self.geocoder.search_locations(partial_city_name, count=self.result_count)

    def lookup_weather(self, location: Candidate | SelectedLocation) -> WeatherReading:
        return self.weather.fetch_current(
            latitude=location.latitude,
            longitude=location.longitude,
        )

    def compose_update(
        self, location: Candidate | SelectedLocation, reading: WeatherReading
    ) -> DisplayUpdate:
        return DisplayUpdate(
            city_name=location.city_name,
            region=location.region,
            temperature_celsius=reading.temperature_celsius,
            condition=self.catalog.resolve(reading.weather_code, reading.is_day),
            humidity_percent=reading.humidity_percent,
            wind_speed_mps=reading.wind_speed_mps,
        )

    # ── input events ──────────────────────────────────────────────────────────

    def handle_query_changed(self, text: str) -> bool:
        """Feed new input text through the session; True if the list changed.

        The lookup here is synchronous, so the terminal front-end never sees
        a stale generation. Callers that run ``lookup_candidates`` in the
        background should instead keep the ``SearchRequest`` and pass its
        generation to ``session.on_candidates_received`` when the response
        lands; late responses to superseded queries are then dropped.
        """
        request = self.session.on_query_changed(text)
        if request is None:
            return False
        try:
            candidates = self.lookup_candidates(request.query)
        except WeatherLookupError as exc:
            self.logger.warning("Location lookup failed for %r: %s", request.query, exc)
            self.notices.notify(LOCATION_ERROR_NOTICE)
            self.session.on_search_failed(request.generation)
            return False

        applied = self.session.on_candidates_received(request.generation, candidates)
        if not applied:
            self.logger.debug(
                "Discarded stale candidates for %r (generation %d, current %d)",
                request.query,
                request.generation,
                self.session.generation,
            )
        return applied

    def handle_navigate(self, direction: NavigateDirection) -> bool:
        return self.session.on_navigate(direction)

    def handle_confirm(self) -> DisplayUpdate | None:
        selection = self.session.on_confirm()
        if selection is None:
            return None
        return self.show_weather(selection)

    def handle_click(self, candidate_id: CandidateId) -> DisplayUpdate | None:
        selection = self.session.on_click(candidate_id)
        if selection is None:
            self.logger.debug("Click on unknown candidate id %s ignored", candidate_id)
            return None
        return self.show_weather(selection)

    def handle_select(self, candidate: Candidate) -> DisplayUpdate | None:
        return self.show_weather(self.session.on_select(candidate))

    def handle_dismiss(self) -> None:
        self.session.on_dismiss()

    def handle_reveal(self) -> bool:
        return self.session.on_reveal()

    # ── weather ───────────────────────────────────────────────────────────────

    def show_weather(self, location: SelectedLocation) -> DisplayUpdate | None:
        """Fetch, resolve and display weather for a selected location."""
        try:
            reading = self.lookup_weather(location)
        except WeatherLookupError as exc:
            self.logger.warning(
                "Weather lookup failed for %s (%s, %s): %s",
                location.city_name,
                location.latitude,
                location.longitude,
                exc,
            )
            self.notices.notify(WEATHER_ERROR_NOTICE)
            return None

        update = self.compose_update(location, reading)
        self.display.show(update)
        self.last_update = update
        self.logger.info(
            "Displayed weather for %s: code=%d is_day=%s",
            location.city_name,
            reading.weather_code,
            reading.is_day,
        )
        return update
