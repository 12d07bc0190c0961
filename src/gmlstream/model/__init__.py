# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Feature graph data model: features, properties, values and geometries."""

from __future__ import annotations

from gmlstream.model.feature import (
    Feature,
    FeatureCollection,
    FeatureReference,
    FeatureValue,
    Property,
    PropertyKind,
    PropertyType,
    StandardProps,
    expected_value_types,
)
from gmlstream.model.geometry import Envelope, Geometry, LineString, Point, Polygon
from gmlstream.model.qname import QName
from gmlstream.model.values import CodeType, Length, Measure, StringOrRef

__all__ = [
    "CodeType",
    "Envelope",
    "Feature",
    "FeatureCollection",
    "FeatureReference",
    "FeatureValue",
    "Geometry",
    "Length",
    "LineString",
    "Measure",
    "Point",
    "Polygon",
    "Property",
    "PropertyKind",
    "PropertyType",
    "QName",
    "StandardProps",
    "StringOrRef",
    "expected_value_types",
]
