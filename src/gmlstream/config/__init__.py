# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for GMLStream.

Sub-modules:
    - `gmlstream.config.model`: `EncoderConfig` snapshot and `MutableEncoderConfig` builder.
    - `gmlstream.config.keys`: canonical TOML section and key names.
    - `gmlstream.config.io`: TOML loading, checked getters and rendering.
    - `gmlstream.config.logging`: TRACE-aware logging setup.

This package module stays import-light: `gmlstream.config.logging` is imported
by almost every other module, so re-exporting the model here would create
import cycles.
"""

from __future__ import annotations
