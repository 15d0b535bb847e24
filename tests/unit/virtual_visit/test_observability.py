"""Tests for structured logging setup in `virtual_visit/observability.py`."""

from collections.abc import Iterator

import pytest
import structlog

from virtual_visit.config import LoggingConfig
from virtual_visit.observability import configure_logging, ensure_logging_configured
from virtual_visit.services.decoder import VisitSummaryDecoder


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def _renderer() -> object:
    return structlog.get_config()["processors"][-1]


def test_json_renderer_by_default() -> None:
    configure_logging()

    assert isinstance(_renderer(), structlog.processors.JSONRenderer)


def test_console_renderer_when_requested() -> None:
    configure_logging(LoggingConfig(format="console", level="DEBUG"))

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)
    assert structlog.get_config()["logger_factory"].__class__ is structlog.stdlib.LoggerFactory


def test_ensure_logging_configured_routes_through_stdlib_levels() -> None:
    structlog.reset_defaults()

    ensure_logging_configured()

    config = structlog.get_config()
    assert structlog.is_configured()
    assert config["processors"][0] is structlog.stdlib.filter_by_level
    assert config["cache_logger_on_first_use"] is False


def test_ensure_logging_configured_keeps_host_configuration() -> None:
    configure_logging(LoggingConfig(format="console"))

    ensure_logging_configured()

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)


def test_decoding_is_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    structlog.reset_defaults()
    ensure_logging_configured()
    decoder = VisitSummaryDecoder()

    result = decoder.decode(
        {
            "visitId": "v1",
            "userId": "u1",
            "status": "invisit",
            "tokBoxVisit": "garbage",
            "modality": 3,
            "integrations": {"tytoCare": {"enabled": True}},
        }
    )

    assert result.is_ok()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
