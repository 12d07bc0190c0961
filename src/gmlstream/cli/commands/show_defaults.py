# topmark:header:start
#
#   project      : GMLStream
#   file         : show_defaults.py
#   file_relpath : src/gmlstream/cli/commands/show_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream `show-defaults` command.

Displays the built-in default configuration as TOML. Intended as a reference
for users writing their own ``gmlstream.toml`` or ``[tool.gmlstream]`` table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gmlstream.cli.cmd_common import get_console, get_effective_verbosity
from gmlstream.config.io import render_runtime_defaults_toml_text

if TYPE_CHECKING:
    from gmlstream.cli_shared.console_api import ConsoleLike


@click.command(
    name="show-defaults",
    help="Display the built-in default GMLStream configuration.",
)
@click.option(
    "--pyproject",
    "for_pyproject",
    is_flag=True,
    default=False,
    help="Nest the output under [tool.gmlstream] for use in pyproject.toml.",
)
def show_defaults_command(*, for_pyproject: bool = False) -> None:
    """Display the built-in default configuration."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    if vlevel > 0:
        console.print(
            console.styled(
                "Default GMLStream Configuration (TOML):",
                bold=True,
                underline=True,
            )
        )
        console.print(console.styled("# === BEGIN ===", fg="cyan", dim=True))

    console.print(
        console.styled(
            render_runtime_defaults_toml_text(for_pyproject=for_pyproject).rstrip("\n"),
            fg="cyan",
        )
    )

    if vlevel > 0:
        console.print(console.styled("# === END ===", fg="cyan", dim=True))
