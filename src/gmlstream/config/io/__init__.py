# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for GMLStream configuration.

Sub-modules:
    - `types`: shared TOML type aliases.
    - `guards`: type guards and sub-table extraction.
    - `getters`: checked value getters recording diagnostics.
    - `loaders`: runtime defaults and file loading.
    - `render`: TOML serialization.
"""

from __future__ import annotations

from gmlstream.config.io.getters import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_checked,
    get_string_value_or_none_checked,
)
from gmlstream.config.io.guards import (
    get_table_value,
    get_table_value_checked,
    is_any_list,
    is_toml_table,
    warn_unknown_keys,
)
from gmlstream.config.io.loaders import (
    TomlLoadError,
    load_defaults_dict,
    load_toml_dict,
    render_runtime_defaults_toml_text,
)
from gmlstream.config.io.render import to_toml
from gmlstream.config.io.types import TomlTable

__all__ = [
    "TomlLoadError",
    "TomlTable",
    "get_bool_value_or_none_checked",
    "get_int_value_or_none_checked",
    "get_string_list_value_checked",
    "get_string_value_or_none_checked",
    "get_table_value",
    "get_table_value_checked",
    "is_any_list",
    "is_toml_table",
    "load_defaults_dict",
    "load_toml_dict",
    "render_runtime_defaults_toml_text",
    "to_toml",
    "warn_unknown_keys",
]
