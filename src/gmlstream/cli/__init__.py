# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream CLI package.

This package groups all Click command definitions and supporting utilities
for the GMLStream command-line interface.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        gmlstream = "gmlstream.cli.main:cli"
"""
