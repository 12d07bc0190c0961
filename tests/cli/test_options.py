# topmark:header:start
#
#   project      : GMLStream
#   file         : test_options.py
#   file_relpath : tests/cli/test_options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for verbosity and color resolution."""

from __future__ import annotations

import logging

import pytest

from gmlstream.cli.cli_types import ColorMode
from gmlstream.cli.errors import GmlstreamUsageError
from gmlstream.cli.options import resolve_color_mode, resolve_verbosity
from gmlstream.config.logging import TRACE_LEVEL
from tests.conftest import parametrize


@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (5, 0, TRACE_LEVEL),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    assert resolve_verbosity(verbose, quiet) == level


def test_verbose_and_quiet_conflict() -> None:
    with pytest.raises(GmlstreamUsageError):
        resolve_verbosity(1, 1)


def test_explicit_color_mode_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")

    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, stdout_isatty=False)
    assert not resolve_color_mode(cli_mode=ColorMode.NEVER, stdout_isatty=True)


def test_auto_color_mode_honors_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    assert not resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=True)

    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=False)

    monkeypatch.delenv("FORCE_COLOR")
    monkeypatch.delenv("NO_COLOR")
    assert resolve_color_mode(cli_mode=None, stdout_isatty=True)


def test_color_mode_aliases() -> None:
    assert ColorMode.parse("off") is ColorMode.NEVER
    assert ColorMode.parse("Always") is ColorMode.ALWAYS
