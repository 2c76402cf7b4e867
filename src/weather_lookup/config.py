"""Typed settings loader for the city weather lookup."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AnyHttpUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    geocoding_base_url: AnyHttpUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="GEOCODING_BASE_URL",
    )
    weather_base_url: AnyHttpUrl = Field(
        default="https://api.open-meteo.com/v1/gem",
        alias="WEATHER_BASE_URL",
    )
    geocoding_result_count: int = Field(default=10, alias="GEOCODING_RESULT_COUNT")
    min_query_length: int = Field(default=2, alias="MIN_QUERY_LENGTH")
    wind_speed_unit: Literal["ms", "kmh", "mph", "kn"] = Field(
        default="ms",
        alias="WIND_SPEED_UNIT",
    )
    timeout_seconds: float = Field(default=10.0, alias="WEATHER_LOOKUP_TIMEOUT_SECONDS")
    visible_rows: int = Field(default=5, alias="DROPDOWN_VISIBLE_ROWS")
    open_meteo_api_key: str | None = Field(
        default=None, alias="OPEN_METEO_API_KEY", repr=False
    )
    user_agent: str = Field(
        default="weather-lookup/0.1",
        alias="WEATHER_LOOKUP_USER_AGENT",
    )

    @field_validator("open_meteo_api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env-string key as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Reject values the Open-Meteo endpoints or the dropdown cannot use."""
        if not (1 <= self.geocoding_result_count <= 100):
            raise ValueError("GEOCODING_RESULT_COUNT must be between 1 and 100.")
        if self.min_query_length < 1:
            raise ValueError("MIN_QUERY_LENGTH must be >= 1.")
        if self.timeout_seconds <= 0:
            raise ValueError("WEATHER_LOOKUP_TIMEOUT_SECONDS must be > 0.")
        if self.visible_rows <= 0:
            raise ValueError("DROPDOWN_VISIBLE_ROWS must be > 0.")
        if not self.user_agent.strip():
            raise ValueError("WEATHER_LOOKUP_USER_AGENT must not be empty.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "geocoding_base_url": str(self.geocoding_base_url),
            "weather_base_url": str(self.weather_base_url),
            "geocoding_result_count": self.geocoding_result_count,
            "min_query_length": self.min_query_length,
            "wind_speed_unit": self.wind_speed_unit,
            "timeout_seconds": self.timeout_seconds,
            "visible_rows": self.visible_rows,
            "api_key_configured": self.open_meteo_api_key is not None,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
