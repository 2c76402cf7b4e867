"""Tests for API key redaction and JSON console logging."""

from __future__ import annotations

import json
import logging

from weather_lookup.log_setup import JsonConsoleFormatter, setup_logger
from weather_lookup.redaction import REDACTED, sanitize_for_logging, sanitize_text


def test_query_string_key_is_redacted_without_eating_other_params() -> None:
    url = "https://customer-api.open-meteo.com/v1/forecast?apikey=abc123&latitude=1.0"
    sanitized = sanitize_text(url)
    assert "abc123" not in sanitized
    assert f"apikey={REDACTED}&latitude=1.0" in sanitized


def test_params_dict_key_is_redacted() -> None:
    params = {"name": "Paris", "count": 10, "apikey": "abc123"}
    assert sanitize_for_logging(params) == {"name": "Paris", "count": 10, "apikey": REDACTED}


def test_plain_text_without_secrets_is_unchanged() -> None:
    assert sanitize_text("Open-Meteo weather fetch failed (HTTP 500)") == (
        "Open-Meteo weather fetch failed (HTTP 500)"
    )


def test_json_formatter_emits_sanitized_record() -> None:
    record = logging.LogRecord(
        name="weather_lookup",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="request failed apikey=%s",
        args=("abc123",),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "WARNING"
    assert event["logger"] == "weather_lookup"
    assert "abc123" not in event["message"]


def test_json_formatter_includes_request_context_only_when_set() -> None:
    record = logging.LogRecord(
        name="weather_lookup",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Open-Meteo %s failed (HTTP %d)",
        args=("weather fetch", 503),
        exc_info=None,
    )
    plain = json.loads(JsonConsoleFormatter().format(record))
    assert "provider" not in plain
    assert "status_code" not in plain

    record.provider = "open-meteo"
    record.context = "weather fetch"
    record.status_code = 503
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["provider"] == "open-meteo"
    assert event["context"] == "weather fetch"
    assert event["status_code"] == 503
    assert event["message"] == "Open-Meteo weather fetch failed (HTTP 503)"


def test_setup_logger_is_idempotent() -> None:
    first = setup_logger("weather_lookup_test_setup")
    second = setup_logger("weather_lookup_test_setup")
    assert first is second
    assert len(second.handlers) == 1
    assert isinstance(second.handlers[0].formatter, JsonConsoleFormatter)
