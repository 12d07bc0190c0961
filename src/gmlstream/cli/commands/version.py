# topmark:header:start
#
#   project      : GMLStream
#   file         : version.py
#   file_relpath : src/gmlstream/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream `version` command.

Prints the current GMLStream version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from gmlstream.cli.cli_types import EnumChoiceParam, OutputFormat
from gmlstream.cli.cmd_common import get_console
from gmlstream.constants import GMLSTREAM_VERSION

if TYPE_CHECKING:
    from gmlstream.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of GMLStream.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of GMLStream.

    Args:
        output_format (OutputFormat | None): Plain text (default) or JSON.
    """
    console: ConsoleLike = get_console(click.get_current_context())

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt is OutputFormat.JSON:
        console.print(json.dumps({"version": GMLSTREAM_VERSION}))
        return
    console.print(GMLSTREAM_VERSION)
