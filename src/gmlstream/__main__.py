# topmark:header:start
#
#   project      : GMLStream
#   file         : __main__.py
#   file_relpath : src/gmlstream/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running GMLStream via ``python -m gmlstream``.

Delegates to :func:`gmlstream.cli.main.cli`, so the module interface and the
``gmlstream`` console script share a single entry point.

Examples:
    Encode a feature document using the module interface::

        python -m gmlstream encode features.json
"""

from __future__ import annotations

from gmlstream.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
