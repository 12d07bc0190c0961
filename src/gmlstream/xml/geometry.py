# topmark:header:start
#
#   project      : GMLStream
#   file         : geometry.py
#   file_relpath : src/gmlstream/xml/geometry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Geometry sub-encoder.

The feature encoder hands geometry values to a `GeometryEncoder` through two
calls: `export` for a geometry inside its owning property element, and
`export_envelope` for a bounding envelope written without an owning element.

`Gml311GeometryEncoder` writes GML 3.1.1 ``Point``, ``LineString``,
``Polygon`` and ``Envelope`` elements. It shares the identity registry of the
pass: the id of every geometry it writes is marked emitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from gmlstream.config.logging import get_logger
from gmlstream.errors import GeometryEncodingError
from gmlstream.model.geometry import Envelope, LineString, Point, Polygon
from gmlstream.model.qname import QName
from gmlstream.model.values import format_number
from gmlstream.xml.namespaces import ATTR_SRS_NAME, GML_ID, GML_PREFIX, GMLNS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.encoder.registry import IdentityRegistry
    from gmlstream.model.geometry import Geometry, Position, Ring
    from gmlstream.xml.writer import DocumentWriter

logger: GmlstreamLogger = get_logger(__name__)


class GeometryEncoder(Protocol):
    """Narrow interface between the feature encoder and geometry encoding."""

    def export(self, geometry: Geometry) -> None:
        """Write the full representation of ``geometry``."""
        ...

    def export_envelope(self, envelope: Envelope) -> None:
        """Write ``envelope`` as a standalone element."""
        ...


def _gml(local_name: str) -> QName:
    return QName(GMLNS, local_name)


class Gml311GeometryEncoder:
    """Write geometries as GML 3.1.1 through a `DocumentWriter`.

    Args:
        writer (DocumentWriter): Destination writer shared with the feature encoder.
        registry (IdentityRegistry): Identity registry of the current pass.
    """

    def __init__(self, writer: DocumentWriter, registry: IdentityRegistry) -> None:
        self._writer: DocumentWriter = writer
        self._registry: IdentityRegistry = registry

    def export(self, geometry: Geometry) -> None:
        """Write ``geometry``.

        Raises:
            GeometryEncodingError: If the geometry type is unsupported or its
                coordinates are malformed.
        """
        if isinstance(geometry, Point):
            self._export_point(geometry)
        elif isinstance(geometry, LineString):
            self._export_line_string(geometry)
        elif isinstance(geometry, Polygon):
            self._export_polygon(geometry)
        elif isinstance(geometry, Envelope):
            self.export_envelope(geometry)
        else:
            raise GeometryEncodingError(
                f"Unsupported geometry type: {type(geometry).__name__}"
            )

    def export_envelope(self, envelope: Envelope) -> None:
        """Write ``gml:Envelope`` with its lower and upper corners."""
        if len(envelope.lower) != len(envelope.upper):
            raise GeometryEncodingError(
                f"Envelope corners differ in dimension: {envelope.lower} / {envelope.upper}"
            )
        self._open("Envelope", envelope)
        self._text_element("lowerCorner", self._position_text(envelope.lower))
        self._text_element("upperCorner", self._position_text(envelope.upper))
        self._writer.end_element()

    # --- geometry types ---

    def _export_point(self, point: Point) -> None:
        self._open("Point", point)
        self._text_element("pos", self._position_text(point.coordinates))
        self._writer.end_element()

    def _export_line_string(self, line: LineString) -> None:
        if len(line.coordinates) < 2:
            raise GeometryEncodingError(
                f"LineString needs at least 2 positions, got {len(line.coordinates)}"
            )
        self._open("LineString", line)
        self._text_element("posList", self._pos_list_text(line.coordinates))
        self._writer.end_element()

    def _export_polygon(self, polygon: Polygon) -> None:
        self._open("Polygon", polygon)
        self._ring("exterior", polygon.exterior)
        for ring in polygon.interiors:
            self._ring("interior", ring)
        self._writer.end_element()

    def _ring(self, boundary: str, ring: Ring) -> None:
        if len(ring) < 4:
            raise GeometryEncodingError(f"LinearRing needs at least 4 positions, got {len(ring)}")
        if tuple(ring[0]) != tuple(ring[-1]):
            raise GeometryEncodingError("LinearRing is not closed")
        self._writer.start_element(_gml(boundary))
        self._writer.start_element(_gml("LinearRing"))
        self._text_element("posList", self._pos_list_text(ring))
        self._writer.end_element()
        self._writer.end_element()

    # --- helpers ---

    def _open(self, local_name: str, geometry: Geometry) -> None:
        self._writer.set_prefix(GML_PREFIX, GMLNS)
        self._writer.start_element(_gml(local_name))
        if geometry.id is not None:
            self._registry.mark_emitted(geometry.id)
            self._writer.attribute(GML_ID, geometry.id)
        if geometry.srs_name is not None:
            self._writer.attribute(ATTR_SRS_NAME, geometry.srs_name)
        logger.trace("Geometry %s id=%s", local_name, geometry.id)

    def _text_element(self, local_name: str, text: str) -> None:
        self._writer.start_element(_gml(local_name))
        self._writer.characters(text)
        self._writer.end_element()

    @staticmethod
    def _position_text(position: Position) -> str:
        if not position:
            raise GeometryEncodingError("Empty position")
        try:
            return " ".join(format_number(c) for c in position)
        except (TypeError, ValueError) as exc:
            raise GeometryEncodingError(f"Invalid coordinate in {position!r}: {exc}") from exc

    @classmethod
    def _pos_list_text(cls, positions: Sequence[Position]) -> str:
        dims: set[int] = {len(p) for p in positions}
        if len(dims) > 1:
            raise GeometryEncodingError(f"Mixed coordinate dimensions: {sorted(dims)}")
        return " ".join(cls._position_text(p) for p in positions)
