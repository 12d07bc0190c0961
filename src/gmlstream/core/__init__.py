# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across GMLStream.

Included modules:

- ``enum_mixins``
  Typing-friendly Enum utilities (keyed string enums with labels and aliases)
  that remain independent of CLI or UI rendering.
"""

from __future__ import annotations
