# topmark:header:start
#
#   project      : GMLStream
#   file         : geometry.py
#   file_relpath : src/gmlstream/model/geometry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Geometry values handed to the geometry sub-encoder.

Geometries carry an optional ``id`` and follow the same "emit once, reference
thereafter" rule as features. Coordinates are stored as tuples of floats in
axis order of the declared ``srs_name``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

Position = tuple[float, ...]
Ring = tuple[Position, ...]


@dataclass(eq=False, kw_only=True)
class Geometry:
    """Base class for identified geometry values.

    Attributes:
        id (str | None): Optional ``gml:id``.
        srs_name (str | None): Optional spatial reference system name.
    """

    id: str | None = None
    srs_name: str | None = None


@dataclass(eq=False)
class Point(Geometry):
    """A single position."""

    coordinates: Position


@dataclass(eq=False)
class LineString(Geometry):
    """An ordered sequence of positions."""

    coordinates: tuple[Position, ...]


@dataclass(eq=False)
class Polygon(Geometry):
    """A planar surface with one exterior ring and optional interior rings."""

    exterior: Ring
    interiors: tuple[Ring, ...] = field(default=())


@dataclass(eq=False)
class Envelope(Geometry):
    """Axis-aligned bounding region given by its lower and upper corners."""

    lower: Position
    upper: Position
