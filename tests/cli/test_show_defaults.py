# topmark:header:start
#
#   project      : GMLStream
#   file         : test_show_defaults.py
#   file_relpath : tests/cli/test_show_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `show-defaults` and the group itself."""

from __future__ import annotations

from typing import Any

import tomlkit

from gmlstream.config.io import load_defaults_dict
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_show_defaults_is_valid_toml() -> None:
    result = run_cli(["--no-color", "show-defaults"])

    assert_SUCCESS(result)
    parsed: Any = tomlkit.parse(result.output)
    assert parsed.unwrap() == load_defaults_dict()


@mark_cli
def test_show_defaults_for_pyproject() -> None:
    result = run_cli(["--no-color", "show-defaults", "--pyproject"])

    assert_SUCCESS(result)
    parsed: Any = tomlkit.parse(result.output)
    assert parsed.unwrap()["tool"]["gmlstream"] == load_defaults_dict()


@mark_cli
def test_show_defaults_verbose_banner() -> None:
    result = run_cli(["--no-color", "-v", "show-defaults"])

    assert_SUCCESS(result)
    assert "# === BEGIN ===" in result.output
    assert "# === END ===" in result.output


@mark_cli
def test_group_without_command_prints_hint_and_help() -> None:
    result = run_cli(["--no-color"])

    assert_SUCCESS(result)
    assert "gmlstream encode INPUT" in result.output
    assert "show-defaults" in result.output


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])

    assert_USAGE_ERROR(result)
