# topmark:header:start
#
#   project      : GMLStream
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output."""

from __future__ import annotations

import json

from gmlstream.constants import GMLSTREAM_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli, parametrize


@mark_cli
def test_version_outputs_version() -> None:
    """It should output the installed version string (exact match)."""
    result = run_cli(["--no-color", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == GMLSTREAM_VERSION


@mark_cli
@parametrize("fmt", ["json", "JSON"])
def test_version_json_format(fmt: str) -> None:
    """`version --format json` returns parseable JSON with the version value."""
    result = run_cli(["--no-color", "version", "--format", fmt])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": GMLSTREAM_VERSION}


@mark_cli
def test_version_plain_alias() -> None:
    result = run_cli(["version", "--format", "plain"])

    assert_SUCCESS(result)
    assert result.output.strip() == GMLSTREAM_VERSION


@mark_cli
def test_version_rejects_unknown_format() -> None:
    result = run_cli(["version", "--format", "yaml"])

    assert result.exit_code != 0
