# topmark:header:start
#
#   project      : GMLStream
#   file         : values.py
#   file_relpath : src/gmlstream/model/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed property values: codes, measures, and string-or-reference."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CodeType:
    """A code value with an optional code space (e.g. ``EPSG`` / ``4326``)."""

    code: str
    code_space: str | None = None


@dataclass(frozen=True)
class Measure:
    """A numeric value with a unit of measure URI or symbol."""

    value: float
    uom: str


@dataclass(frozen=True)
class Length(Measure):
    """A `Measure` restricted to lengths (``gml:LengthType``)."""


@dataclass(frozen=True, slots=True)
class StringOrRef:
    """Text content, a remote reference, or both (``gml:StringOrRefType``)."""

    string: str | None = None
    ref: str | None = None


def format_number(value: float) -> str:
    """Render a numeric value as XML character data.

    Integral floats keep a trailing ``.0`` the way ``repr`` renders them, so
    output does not depend on whether the source delivered ``7`` or ``7.0``.
    """
    if isinstance(value, bool):
        raise TypeError("Boolean is not a numeric measure value")
    return repr(float(value))
