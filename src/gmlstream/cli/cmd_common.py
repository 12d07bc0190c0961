# topmark:header:start
#
#   project      : GMLStream
#   file         : cmd_common.py
#   file_relpath : src/gmlstream/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
reading the shared context state and reporting diagnostics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gmlstream.config.logging import get_logger
from gmlstream.diagnostic import DiagnosticLevel

if TYPE_CHECKING:
    from collections.abc import Iterable

    import click

    from gmlstream.cli_shared.console_api import ConsoleLike
    from gmlstream.diagnostic import Diagnostic

logger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (``-v`` count minus ``-q`` count)."""
    obj = ctx.find_root().obj
    if not isinstance(obj, dict):
        return 0
    return int(obj.get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the root context by the `cli` group."""
    console: ConsoleLike = ctx.find_root().obj["console"]
    return console


def report_diagnostics(
    console: ConsoleLike,
    diagnostics: Iterable[Diagnostic],
    *,
    verbosity: int = 0,
) -> int:
    """Print diagnostics to stderr and return how many were printed.

    Warnings and errors are always shown unless ``verbosity`` is negative
    (``-q``); info entries only with ``-v``.
    """
    if verbosity < 0:
        return 0
    shown = 0
    for diag in diagnostics:
        if diag.level is DiagnosticLevel.INFO and verbosity < 1:
            continue
        console.diagnostic(diag)
        shown += 1
    return shown
