# topmark:header:start
#
#   project      : GMLStream
#   file         : console_api.py
#   file_relpath : src/gmlstream/cli_shared/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console protocol shared by the CLI commands.

Commands write program output, errors and diagnostics through this surface
and never to `sys.stdout` directly (the encoded document is the exception: it
is streamed by the XML writer).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gmlstream.diagnostic import Diagnostic


class ConsoleLike(Protocol):
    """Output surface used by CLI commands."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write program output to stdout."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        ...

    def diagnostic(self, diag: Diagnostic) -> None:
        """Report one config or encode-pass diagnostic on stderr."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return a styled string (no-op if styling is disabled)."""
        ...
