# topmark:header:start
#
#   project      : GMLStream
#   file         : test_loader.py
#   file_relpath : tests/source/test_loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for loading JSON feature documents into feature graphs."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from gmlstream.errors import FeatureSourceError
from gmlstream.model import (
    CodeType,
    Envelope,
    Feature,
    FeatureCollection,
    FeatureReference,
    Length,
    LineString,
    Point,
    Polygon,
    PropertyKind,
)
from gmlstream.source import build_feature_document, load_feature_document
from gmlstream.xml.namespaces import GML_FEATURE_COLLECTION
from tests.conftest import APP_NS, app, parametrize

if TYPE_CHECKING:
    from pathlib import Path

NAMESPACES: dict[str, str] = {"app": APP_NS}


def _doc(features: list[dict[str, Any]], **selector: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"namespaces": NAMESPACES, "features": features}
    data.update(selector or {"root": features[0]["id"]})
    return data


def test_cyclic_handles_resolve_to_shared_objects() -> None:
    doc = build_feature_document(
        _doc(
            [
                {
                    "id": "A",
                    "type": "app:Road",
                    "properties": [{"name": "app:next", "kind": "feature", "value": {"ref": "B"}}],
                },
                {
                    "id": "B",
                    "type": "app:Road",
                    "properties": [{"name": "app:next", "kind": "feature", "value": {"ref": "A"}}],
                },
            ]
        )
    )

    a, b = doc.features["A"], doc.features["B"]
    assert doc.root is a
    assert a.properties[0].value is b
    assert b.properties[0].value is a
    assert a.name == app("Road")
    assert not doc.is_collection


def test_value_kinds() -> None:
    doc = build_feature_document(
        _doc(
            [
                {
                    "id": "A",
                    "type": "app:Road",
                    "description": {"string": "Main", "ref": "http://d"},
                    "names": [{"code": "A1", "codeSpace": "roads"}, "Main"],
                    "properties": [
                        {"name": "app:label", "value": "x"},
                        {
                            "name": "app:crs",
                            "kind": "code",
                            "value": {"code": "4326", "codeSpace": "EPSG"},
                        },
                        {"name": "app:width", "kind": "length", "value": {"value": 7, "uom": "m"}},
                        {
                            "name": "app:pos",
                            "kind": "geometry",
                            "value": {"type": "Point", "coordinates": [1, 2], "id": "p1"},
                        },
                        {
                            "name": "app:axis",
                            "kind": "geom",
                            "value": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
                        },
                        {
                            "name": "app:area",
                            "kind": "geometry",
                            "value": {
                                "type": "Polygon",
                                "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]],
                            },
                        },
                        {
                            "name": "app:bbox",
                            "kind": "envelope",
                            "value": {"lower": [0, 0], "upper": [1, 1]},
                        },
                        {
                            "name": "app:owner",
                            "kind": "feature",
                            "value": {"href": "http://x/y#o1"},
                        },
                        {
                            "name": "app:note",
                            "minOccurs": 0,
                            "maxOccurs": "unbounded",
                            "value": 1.5,
                        },
                    ],
                }
            ]
        )
    )

    a = doc.features["A"]
    values = [p.value for p in a.properties]
    assert values[0] == "x"
    assert a.properties[0].kind is PropertyKind.SIMPLE
    assert values[1] == CodeType("4326", "EPSG")
    assert isinstance(values[2], Length) and values[2].uom == "m"
    assert isinstance(values[3], Point) and values[3].id == "p1"
    assert isinstance(values[4], LineString)
    assert isinstance(values[5], Polygon) and values[5].interiors == ()
    assert isinstance(values[6], Envelope)
    assert isinstance(values[7], FeatureReference) and not values[7].is_local
    note_type = a.properties[8].type
    assert note_type.is_optional and note_type.max_occurs is None

    assert a.standard_props is not None
    assert a.standard_props.description is not None
    assert a.standard_props.description.ref == "http://d"
    assert a.standard_props.names == (CodeType("A1", "roads"), CodeType("Main"))


def test_local_href_resolves_against_arena() -> None:
    doc = build_feature_document(
        _doc(
            [
                {
                    "id": "A",
                    "type": "app:Road",
                    "properties": [
                        {"name": "app:ref", "kind": "feature", "value": {"href": "#B"}},
                        {"name": "app:ref", "kind": "feature", "value": {"href": "#Z"}},
                    ],
                },
                {"id": "B", "type": "app:Node"},
            ]
        )
    )

    resolved, dangling = (p.value for p in doc.features["A"].properties)
    assert isinstance(resolved, FeatureReference) and resolved.referent is doc.features["B"]
    assert isinstance(dangling, FeatureReference) and dangling.referent is None


def test_inline_feature_record() -> None:
    doc = build_feature_document(
        _doc(
            [
                {
                    "id": "A",
                    "type": "app:Road",
                    "properties": [
                        {
                            "name": "app:part",
                            "kind": "feature",
                            "value": {
                                "type": "app:Segment",
                                "properties": [{"name": "app:n", "value": 1}],
                            },
                        }
                    ],
                }
            ]
        )
    )

    part = doc.features["A"].properties[0].value
    assert isinstance(part, Feature)
    assert part.id is None
    assert part.name == app("Segment")
    assert "Segment" not in doc.features


def test_collection_selector_and_structural_collection() -> None:
    doc = build_feature_document(
        _doc(
            [
                {"id": "A", "type": "app:Road"},
                {"id": "FC", "members": ["A"]},
            ],
            collection={"name": "app:Roads", "members": ["A", "FC"]},
        )
    )

    assert doc.is_collection
    assert doc.collection_name == app("Roads")
    assert [m.id for m in doc.members] == ["A", "FC"]
    fc = doc.features["FC"]
    assert isinstance(fc, FeatureCollection)
    assert fc.name == GML_FEATURE_COLLECTION
    assert fc.members == [doc.features["A"]]


def test_load_from_path_and_from_text(tmp_path: Path) -> None:
    data = _doc([{"id": "A", "type": "{urn:x}Thing"}])
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    from_file = load_feature_document(path)
    from_text = load_feature_document(json.dumps(data))

    assert from_file.root is not None and from_text.root is not None
    assert from_file.root.name == from_text.root.name


def _single(*props: dict[str, Any]) -> dict[str, Any]:
    """Return a document whose root ``A`` carries ``props``."""
    return {"features": [{"id": "A", "type": "x", "properties": list(props)}], "root": "A"}


@parametrize(
    ("data", "fragment"),
    [
        ([], "expected an object"),
        ({"features": [{"id": "A", "type": "x"}]}, "exactly one of"),
        (
            {"features": [{"id": "A", "type": "x"}], "root": "A", "collection": {}},
            "exactly one of",
        ),
        ({"features": [{"id": "A", "type": "x"}], "root": "B"}, "unknown feature id"),
        (
            {"features": [{"id": "A", "type": "x"}, {"id": "A", "type": "x"}], "root": "A"},
            "duplicate feature id",
        ),
        ({"features": [{"id": "A", "type": "zz:x"}], "root": "A"}, "Unknown namespace prefix"),
        ({"features": [{"id": "A"}], "root": "A"}, "features[0].type"),
        (_single({"name": "p", "kind": "blob", "value": 1}), "unknown property kind"),
        (_single({"name": "p", "kind": "code"}), "missing 'value'"),
        (_single({"name": "p", "value": [1]}), "missing 'kind'"),
        (
            _single({"name": "p", "kind": "geometry", "value": {"type": "Circle"}}),
            "unsupported geometry type",
        ),
        (
            _single({"name": "p", "kind": "feature", "value": {"ref": "Q"}}),
            "unknown feature id",
        ),
        (
            _single({"name": "p", "kind": "length", "value": {"value": True, "uom": "m"}}),
            "expected a number",
        ),
        (
            _single({"name": "p", "minOccurs": 2, "maxOccurs": 1, "value": "v"}),
            "max_occurs",
        ),
    ],
)
def test_malformed_documents(data: object, fragment: str) -> None:
    with pytest.raises(FeatureSourceError) as excinfo:
        build_feature_document(data)

    assert fragment in str(excinfo.value)


def test_invalid_json_text() -> None:
    with pytest.raises(FeatureSourceError, match="Invalid JSON"):
        load_feature_document("{not json")
