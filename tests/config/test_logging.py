# topmark:header:start
#
#   project      : GMLStream
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE level, env level resolution and the colored formatter."""

from __future__ import annotations

import logging

import pytest

from gmlstream.config.logging import (
    LOG_FORMAT,
    TRACE_LEVEL,
    ChalkFormatter,
    GmlstreamLogger,
    get_logger,
    resolve_env_log_level,
)
from gmlstream.constants import LOG_LEVEL_ENV_VAR
from tests.conftest import parametrize


@parametrize(
    "raw, level",
    [
        ("trace", TRACE_LEVEL),
        (" Debug ", logging.DEBUG),
        ("WARN", logging.WARNING),
        ("40", 40),
        ("loud", None),
        ("", None),
    ],
)
def test_env_log_level(monkeypatch: pytest.MonkeyPatch, raw: str, level: int | None) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, raw)

    assert resolve_env_log_level() == level


def test_env_log_level_unset() -> None:
    assert resolve_env_log_level() is None


def test_trace_level_is_named_and_below_debug() -> None:
    assert TRACE_LEVEL < logging.DEBUG
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_get_logger_returns_trace_capable_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("gmlstream.tests.trace_probe")
    assert isinstance(logger, GmlstreamLogger)

    with caplog.at_level(TRACE_LEVEL, logger="gmlstream.tests.trace_probe"):
        logger.trace("visited %s", "A")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(TRACE_LEVEL, "visited A")]


def test_formatter_keeps_message_text() -> None:
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "kind %s unhandled", ("x",), None)

    assert "[WARNING] kind x unhandled" in ChalkFormatter(LOG_FORMAT).format(record)
