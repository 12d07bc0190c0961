# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/xml/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""XML output collaborators: the document writer and the geometry sub-encoder."""

from __future__ import annotations

from gmlstream.xml.geometry import GeometryEncoder, Gml311GeometryEncoder
from gmlstream.xml.namespaces import GMLNS, XLNNS
from gmlstream.xml.writer import DocumentWriter, XmlStreamWriter

__all__ = [
    "GMLNS",
    "XLNNS",
    "DocumentWriter",
    "GeometryEncoder",
    "Gml311GeometryEncoder",
    "XmlStreamWriter",
]
