# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream package.

GMLStream is a streaming GML feature encoder. It serializes graphs of typed,
possibly cyclic feature records into a single XML document, writing each
identified object once and replacing later encounters with ``xlink:href``
back-references. It exposes both a CLI and a small typed API.
"""

from __future__ import annotations
