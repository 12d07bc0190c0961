# topmark:header:start
#
#   project      : GMLStream
#   file         : console.py
#   file_relpath : src/gmlstream/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed console for GMLStream program output.

Documents and command results go to stdout; errors and diagnostics go to
stderr so that ``gmlstream encode doc.json > out.gml`` yields clean XML.
Logging stays separate and is configured by the `cli` group.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

from gmlstream.cli_shared.console_api import ConsoleLike

if TYPE_CHECKING:
    from gmlstream.diagnostic import Diagnostic


class ClickConsole(ConsoleLike):
    """Console writing through `click.echo`.

    Args:
        enable_color (bool): Emit ANSI styling; plain text otherwise.
        out (TextIO | None): Stream for program output, `sys.stdout` by default.
        err (TextIO | None): Stream for errors and diagnostics, `sys.stderr` by default.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        # Resolved now so CliRunner's swapped streams are captured.
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        styled: str = self.styled(text, fg="bright_red")
        click.echo(styled, nl=nl, file=self.err, color=self.enable_color)

    def diagnostic(self, diag: Diagnostic) -> None:
        """Write ``[level] message`` to stderr, the tag colored by severity."""
        tag: str = f"[{diag.level.value}]"
        if self.enable_color:
            tag = diag.level.color(tag)
        click.echo(f"{tag} {diag.message}", file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged when color is off."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
