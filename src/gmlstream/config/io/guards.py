# topmark:header:start
#
#   project      : GMLStream
#   file         : guards.py
#   file_relpath : src/gmlstream/config/io/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards and normalization helpers for TOML parsing.

This module provides `TypeGuard`-based predicates that help Pyright narrow runtime
values coming from TOML parsing (including `tomlkit` objects), plus the
sub-table extraction used by the config builder.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

from gmlstream.config.logging import get_logger

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.diagnostic import DiagnosticLog

    from .types import TomlTable


logger: GmlstreamLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict[str, Any]``.
    """
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value.

    Checks only that the value is a ``list``; does not validate item types.
    """
    return isinstance(obj, list)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_table_value_checked(
    table: TomlTable,
    key: str,
    *,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> TomlTable:
    """Extract a sub-table, recording a warning when the key holds a non-table value."""
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if is_toml_table(value):
        return value
    logger.warning("Expected table [%s], got %s: %r", key, type(value).__name__, value)
    diagnostics.add_warning(f"Expected table [{key}], got {type(value).__name__}: {value!r}")
    return {}


def warn_unknown_keys(
    table: TomlTable,
    allowed: frozenset[str],
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> None:
    """Record a warning for every key of ``table`` that is not in ``allowed``.

    Args:
        table (TomlTable): Table to inspect.
        allowed (frozenset[str]): Known keys for this location.
        where (str): TOML location prefix used in messages (e.g. ``"[encoder]"``).
        diagnostics (DiagnosticLog): Log receiving the warnings.
        logger (GmlstreamLogger): Logger for emitting warnings.
    """
    for key in table:
        if key not in allowed:
            logger.warning("Unknown key %r in %s", key, where)
            diagnostics.add_warning(f"Unknown key {key!r} in {where}")
