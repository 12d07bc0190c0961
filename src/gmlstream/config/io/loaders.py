# topmark:header:start
#
#   project      : GMLStream
#   file         : loaders.py
#   file_relpath : src/gmlstream/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides the runtime defaults (defined in code) and I/O helpers for
reading GMLStream configuration from on-disk TOML files
(``gmlstream.toml`` / ``pyproject.toml``).

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from gmlstream.config.io.render import to_toml
from gmlstream.config.keys import Toml
from gmlstream.config.logging import get_logger
from gmlstream.constants import DEFAULT_ENCODING, DEFAULT_FEATURE_PREFIX, PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from pathlib import Path

    from gmlstream.config.logging import GmlstreamLogger

    from .types import TomlTable

logger: GmlstreamLogger = get_logger(__name__)


class TomlLoadError(OSError):
    """A config file could not be read or is not valid TOML."""


def load_defaults_dict() -> TomlTable:
    """Return GMLStream's **runtime defaults** as a Python dict.

    This function performs no I/O. Optional keys without a default
    (``reference_template``, ``traverse_xlink_expiry``) are left out.

    Returns:
        A TOML-table-compatible dict containing the runtime defaults.

    Notes:
        The returned value is a new dict so callers can mutate it safely.
    """
    return {
        Toml.SECTION_ENCODER: {
            Toml.KEY_TRAVERSE_XLINK_DEPTH: -1,
            Toml.KEY_REQUESTED_PROPERTIES: [],
        },
        Toml.SECTION_OUTPUT: {
            Toml.KEY_FEATURE_PREFIX: DEFAULT_FEATURE_PREFIX,
            Toml.KEY_XML_DECLARATION: True,
            Toml.KEY_ENCODING: DEFAULT_ENCODING,
        },
    }


def render_runtime_defaults_toml_text(
    *,
    for_pyproject: bool,
) -> str:
    """Render GMLStream runtime defaults as TOML text.

    Args:
        for_pyproject: If True, nest the output under ``[tool.gmlstream]``.

    Returns:
        TOML document text.
    """
    defaults: TomlTable = load_defaults_dict()
    if for_pyproject:
        return to_toml({"tool": {PYPROJECT_TOOL_SECTION: defaults}})
    return to_toml(defaults)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``gmlstream.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        TomlLoadError: If the file cannot be read or parsed. Explicitly named
            config files are never silently ignored.

    Notes:
        Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise TomlLoadError(f"Cannot read config file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise TomlLoadError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
