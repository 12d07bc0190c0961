# topmark:header:start
#
#   project      : GMLStream
#   file         : getters.py
#   file_relpath : src/gmlstream/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed value getters for ``[encoder]`` and ``[output]`` TOML tables.

A getter returns None for a missing key, so merging can tell "unset" from a
real value. A value of the wrong type is also treated as unset: the getter
logs a warning and records it in the config's `DiagnosticLog`, so a typo in
``gmlstream.toml`` never aborts an encode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .guards import is_any_list

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.diagnostic import DiagnosticLog

    from .types import TomlTable

_T = TypeVar("_T", str, bool, int)


def _warn(diagnostics: DiagnosticLog, logger: GmlstreamLogger, message: str) -> None:
    logger.warning("%s", message)
    diagnostics.add_warning(message)


def _scalar_checked(
    table: TomlTable,
    key: str,
    expected: type[_T],
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> _T | None:
    value: Any | None = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; `depth = true` must not read as 1.
    if isinstance(value, expected) and (expected is bool or not isinstance(value, bool)):
        return value
    _warn(
        diagnostics,
        logger,
        f"Expected {expected.__name__} in {where}.{key}, got {type(value).__name__}: {value!r}",
    )
    return None


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> str | None:
    """Return ``table[key]`` if it is a string, else None (warning when mistyped)."""
    return _scalar_checked(table, key, str, where=where, diagnostics=diagnostics, logger=logger)


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> bool | None:
    """Return ``table[key]`` if it is a boolean, else None (warning when mistyped)."""
    return _scalar_checked(table, key, bool, where=where, diagnostics=diagnostics, logger=logger)


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> int | None:
    """Return ``table[key]`` if it is an integer (booleans rejected), else None."""
    return _scalar_checked(table, key, int, where=where, diagnostics=diagnostics, logger=logger)


def get_string_list_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: GmlstreamLogger,
) -> list[str] | None:
    """Return the string entries of a TOML array such as ``requested_properties``.

    Args:
        table (TomlTable): TOML table to query.
        key (str): Key to extract.
        where (str): Table location for messages (e.g. ``"[encoder]"``).
        diagnostics (DiagnosticLog): Receives one warning per problem.
        logger (GmlstreamLogger): Logger for the same warnings.

    Returns:
        list[str] | None: None when the key is missing; ``[]`` when the value is
        not an array; otherwise the string entries, non-strings dropped.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    loc: str = f"{where}.{key}"
    if not is_any_list(value):
        _warn(diagnostics, logger, f"Expected list in {loc}, got {type(value).__name__}: {value!r}")
        return []

    out: list[str] = []
    for entry in value:
        if isinstance(entry, str):
            out.append(entry)
        else:
            _warn(diagnostics, logger, f"Ignoring non-string entry in {loc}: {entry!r}")
    return out
