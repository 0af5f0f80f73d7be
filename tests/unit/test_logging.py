"""Tests for logging configuration."""

import logging

import structlog

from boxconfig import configure_logging
from boxconfig.utils.logging import get_logger, redact


def test_configure_logging_filters_below_level(capsys) -> None:
    configure_logging("WARNING")
    log = get_logger("test")
    log.info("hidden_event")
    log.warning("shown_event", field="email_port")
    err = capsys.readouterr().err
    assert "hidden_event" not in err
    assert "shown_event" in err


def test_configure_logging_json_output(capsys) -> None:
    configure_logging("DEBUG", json_output=True)
    get_logger("test").debug("json_event", fields=3)
    err = capsys.readouterr().err
    assert '"event": "json_event"' in err
    assert '"fields": 3' in err


def test_configure_logging_unknown_level_defaults_to_warning() -> None:
    configure_logging("LOUD")
    wrapper = structlog.get_config()["wrapper_class"]
    assert wrapper is structlog.make_filtering_bound_logger(logging.WARNING)


def test_redact() -> None:
    assert redact("hunter2-secret") == "***cret"
    assert redact("abc") == "***"
    assert redact("") == ""
