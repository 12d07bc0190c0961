# topmark:header:start
#
#   project      : GMLStream
#   file         : namespaces.py
#   file_relpath : src/gmlstream/xml/namespaces.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""XML namespace URIs and well-known qualified names used in GML 3.1.1 output."""

from __future__ import annotations

from typing import Final

from gmlstream.model.qname import QName

GMLNS: Final[str] = "http://www.opengis.net/gml"
XLNNS: Final[str] = "http://www.w3.org/1999/xlink"

GML_PREFIX: Final[str] = "gml"
XLINK_PREFIX: Final[str] = "xlink"

GML_ID: Final[QName] = QName(GMLNS, "id")
GML_DESCRIPTION: Final[QName] = QName(GMLNS, "description")
GML_NAME: Final[QName] = QName(GMLNS, "name")
GML_FEATURE_MEMBER: Final[QName] = QName(GMLNS, "featureMember")
GML_FEATURE_COLLECTION: Final[QName] = QName(GMLNS, "FeatureCollection")

XLINK_HREF: Final[QName] = QName(XLNNS, "href")

ATTR_CODE_SPACE: Final[str] = "codeSpace"
ATTR_UOM: Final[str] = "uom"
ATTR_SRS_NAME: Final[str] = "srsName"
