"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherLookupError(Exception):
    """Base class for geocoding/weather lookup failures."""


class NetworkError(WeatherLookupError):
    """Raised for non-success HTTP status or transport failures."""

    def __init__(
        self,
        message: str,
        *,
        context: str = "request",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.status_code = status_code


class PayloadError(WeatherLookupError):
    """Raised when a provider response does not have the expected shape."""
