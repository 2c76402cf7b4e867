"""Typed models shared by the search session, providers and display layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


@dataclass(frozen=True)
class CandidateId:
    """Opaque geocoder identifier with value equality."""

    value: str

    @classmethod
    def from_raw(cls, raw: Any) -> CandidateId:
        """Build from the JSON scalar the geocoder returned (int or str)."""
        if isinstance(raw, bool) or raw is None:
            raise ValueError(f"Unusable candidate id: {raw!r}")
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        text = str(raw).strip()
        if not text:
            raise ValueError("Candidate id must not be empty.")
        return cls(text)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConditionEntry:
    """Human-readable description and icon for a weather code/day-night pair."""

    description: str
    icon_ref: str | None = None

    @property
    def has_icon(self) -> bool:
        return self.icon_ref is not None


class Candidate(BaseModel):
    """One geocoded location match for a partial city query."""

    model_config = ConfigDict(frozen=True)

    id: CandidateId
    city_name: str
    region: str = ""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def label(self) -> str:
        if self.region:
            return f"{self.city_name}, {self.region}"
        return self.city_name


class SelectedLocation(BaseModel):
    """What the search session hands to the orchestrator on selection."""

    model_config = ConfigDict(frozen=True)

    city_name: str
    region: str
    latitude: float
    longitude: float

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> SelectedLocation:
        return cls(
            city_name=candidate.city_name,
            region=candidate.region,
            latitude=candidate.latitude,
            longitude=candidate.longitude,
        )


class WeatherReading(BaseModel):
    """Current conditions for one location, as reported by the weather service."""

    model_config = ConfigDict(frozen=True)

    temperature_celsius: float
    is_day: bool
    weather_code: int
    humidity_percent: int
    wind_speed_mps: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temperature_fahrenheit(self) -> float:
        return celsius_to_fahrenheit(self.temperature_celsius)


class DisplayUpdate(BaseModel):
    """Fully resolved bundle handed to the rendering collaborator.

    Values are passed through unformatted; rounding and capitalization are
    the renderer's job. Fahrenheit is derived from Celsius on every access.
    """

    model_config = ConfigDict(frozen=True)

    city_name: str
    region: str
    temperature_celsius: float
    condition: ConditionEntry
    humidity_percent: int
    wind_speed_mps: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temperature_fahrenheit(self) -> float:
        return celsius_to_fahrenheit(self.temperature_celsius)
