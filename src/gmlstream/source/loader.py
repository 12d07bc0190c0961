# topmark:header:start
#
#   project      : GMLStream
#   file         : loader.py
#   file_relpath : src/gmlstream/source/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load a feature graph from a JSON feature document.

The document describes an *arena* of features keyed by id; properties point at
other features with ``{"ref": "<id>"}`` handles, so shared and cyclic graphs are
representable. Loading runs in two phases: every arena record first becomes an
empty `Feature`, then properties are filled in, resolving handles to the
shared objects.

Document shape:

```json
{
  "namespaces": {"app": "http://www.example.com/app"},
  "features": [
    {
      "id": "A",
      "type": "app:Road",
      "description": "Main road",
      "names": [{"code": "A1", "codeSpace": "roads"}],
      "properties": [
        {"name": "app:label", "kind": "simple", "value": "Main street"},
        {"name": "app:next", "kind": "feature", "value": {"ref": "B"}},
        {"name": "app:owner", "kind": "feature", "value": {"href": "http://x/y#o1"}},
        {"name": "app:crs", "kind": "code", "value": {"code": "4326", "codeSpace": "EPSG"}},
        {"name": "app:width", "kind": "length", "value": {"value": 7.5, "uom": "m"}},
        {"name": "app:axis", "kind": "geometry",
         "value": {"type": "LineString", "coordinates": [[0, 0], [1, 1]], "id": "g1"}},
        {"name": "app:note", "kind": "simple", "minOccurs": 0, "value": "optional"}
      ]
    },
    {"id": "B", "type": "app:Road", "properties": []},
    {"id": "FC", "members": ["A", "B"]}
  ],
  "root": "A"
}
```

Either ``root`` (an arena id) or ``collection`` (``{"name": ..., "members":
[...]}``) selects what is encoded. A record with ``members`` is a structural
`FeatureCollection`. A property value may also be an inline feature record
(an object with ``type``). Names are Clark notation, ``prefix:local`` (expanded
through ``namespaces``) or unqualified.

Malformed input raises `FeatureSourceError` naming the offending location.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gmlstream.config.logging import get_logger
from gmlstream.errors import FeatureSourceError
from gmlstream.model.feature import (
    Feature,
    FeatureCollection,
    FeatureReference,
    PropertyKind,
    PropertyType,
    StandardProps,
)
from gmlstream.model.geometry import Envelope, Geometry, LineString, Point, Polygon
from gmlstream.model.qname import QName
from gmlstream.model.values import CodeType, Length, Measure, StringOrRef
from gmlstream.xml.namespaces import GML_FEATURE_COLLECTION

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger

logger: GmlstreamLogger = get_logger(__name__)


@dataclass
class FeatureDocument:
    """A loaded feature graph and what to encode from it.

    Attributes:
        features (dict[str, Feature]): Arena of identified features by id.
        root (Feature | None): Feature to encode with `FeatureEncoder.export`.
        collection_name (QName | None): Element name of a named top-level collection.
        members (list[Feature]): Members of the named top-level collection.
    """

    features: dict[str, Feature] = field(default_factory=lambda: {})
    root: Feature | None = None
    collection_name: QName | None = None
    members: list[Feature] = field(default_factory=lambda: [])

    @property
    def is_collection(self) -> bool:
        """Return True if the document selects a named collection instead of a root."""
        return self.collection_name is not None


def load_feature_document(source: Path | str) -> FeatureDocument:
    """Load a JSON feature document from a file or from text.

    Args:
        source (Path | str): A `Path` is read as a UTF-8 file; a `str` is the
            JSON text itself.

    Raises:
        OSError: If the file cannot be read.
        FeatureSourceError: If the content is not a valid feature document.
    """
    if isinstance(source, Path):
        logger.debug("Loading feature document %s", source)
        return parse_feature_document(source.read_text(encoding="utf-8"))
    return parse_feature_document(source)


def parse_feature_document(text: str) -> FeatureDocument:
    """Parse a JSON feature document.

    Raises:
        FeatureSourceError: If the text is not JSON or not a valid feature document.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FeatureSourceError(f"Invalid JSON: {exc}") from exc
    return build_feature_document(data)


def build_feature_document(data: object) -> FeatureDocument:
    """Build a `FeatureDocument` from already decoded JSON data.

    Raises:
        FeatureSourceError: If the data is not a valid feature document.
    """
    return _DocumentBuilder(data).build()


class _DocumentBuilder:
    """Two-phase builder: create arena features, then fill in their content."""

    def __init__(self, data: object) -> None:
        self._data: dict[str, Any] = _expect_object(data, "document")
        self._namespaces: dict[str, str] = {}
        self._arena: dict[str, Feature] = {}

    def build(self) -> FeatureDocument:
        raw_ns: dict[str, Any] = _expect_object(self._data.get("namespaces", {}), "namespaces")
        for prefix, uri in raw_ns.items():
            self._namespaces[prefix] = _expect_str(uri, f"namespaces.{prefix}")

        records: list[Any] = _expect_list(self._data.get("features", []), "features")

        # Phase 1: one empty feature per arena record.
        for idx, raw in enumerate(records):
            where: str = f"features[{idx}]"
            record: dict[str, Any] = _expect_object(raw, where)
            feature_id: str = _expect_str(record.get("id"), f"{where}.id")
            if feature_id in self._arena:
                raise FeatureSourceError(f"{where}: duplicate feature id {feature_id!r}")
            self._arena[feature_id] = self._new_feature(record, where)

        # Phase 2: content, with handles resolved against the complete arena.
        for idx, raw in enumerate(records):
            self._fill(self._arena[raw["id"]], raw, f"features[{idx}]")

        doc = FeatureDocument(features=dict(self._arena))
        has_root: bool = "root" in self._data
        has_collection: bool = "collection" in self._data
        if has_root == has_collection:
            raise FeatureSourceError("document: exactly one of 'root' or 'collection' is required")
        if has_root:
            doc.root = self._lookup(_expect_str(self._data["root"], "root"), "root")
        else:
            coll: dict[str, Any] = _expect_object(self._data["collection"], "collection")
            doc.collection_name = self._qname(coll.get("name"), "collection.name")
            doc.members = self._members(coll.get("members", []), "collection.members")

        logger.debug(
            "Loaded %d feature(s); %s",
            len(self._arena),
            f"collection {doc.collection_name}" if doc.is_collection else f"root {doc.root}",
        )
        return doc

    # --- features ---

    def _new_feature(self, record: dict[str, Any], where: str) -> Feature:
        feature_id: str | None = record.get("id")
        if feature_id is not None:
            feature_id = _expect_str(feature_id, f"{where}.id")
        if "members" in record:
            name: QName = (
                self._qname(record["type"], f"{where}.type")
                if "type" in record
                else GML_FEATURE_COLLECTION
            )
            return FeatureCollection(name=name, id=feature_id)
        return Feature(name=self._qname(record.get("type"), f"{where}.type"), id=feature_id)

    def _fill(self, feature: Feature, record: dict[str, Any], where: str) -> None:
        if isinstance(feature, FeatureCollection):
            feature.members = self._members(record["members"], f"{where}.members")
            return
        feature.standard_props = self._standard_props(record, where)
        props: list[Any] = _expect_list(record.get("properties", []), f"{where}.properties")
        for idx, raw in enumerate(props):
            p_where: str = f"{where}.properties[{idx}]"
            prop_record: dict[str, Any] = _expect_object(raw, p_where)
            prop_type: PropertyType = self._property_type(prop_record, p_where)
            if "value" not in prop_record:
                raise FeatureSourceError(f"{p_where}: missing 'value'")
            value: object = self._value(prop_type.kind, prop_record["value"], f"{p_where}.value")
            feature.add_property(prop_type, value)

    def _members(self, raw: object, where: str) -> list[Feature]:
        ids: list[Any] = _expect_list(raw, where)
        return [
            self._lookup(_expect_str(m, f"{where}[{i}]"), f"{where}[{i}]")
            for i, m in enumerate(ids)
        ]

    def _lookup(self, feature_id: str, where: str) -> Feature:
        feature: Feature | None = self._arena.get(feature_id)
        if feature is None:
            raise FeatureSourceError(f"{where}: unknown feature id {feature_id!r}")
        return feature

    def _standard_props(self, record: dict[str, Any], where: str) -> StandardProps | None:
        raw_desc: Any = record.get("description")
        raw_names: Any = record.get("names")
        if raw_desc is None and raw_names is None:
            return None

        description: StringOrRef | None = None
        if isinstance(raw_desc, str):
            description = StringOrRef(string=raw_desc)
        elif raw_desc is not None:
            desc: dict[str, Any] = _expect_object(raw_desc, f"{where}.description")
            description = StringOrRef(
                string=_opt_str(desc.get("string"), f"{where}.description.string"),
                ref=_opt_str(desc.get("ref"), f"{where}.description.ref"),
            )

        names: list[CodeType] = []
        for idx, raw in enumerate(_expect_list(raw_names or [], f"{where}.names")):
            names.append(self._code(raw, f"{where}.names[{idx}]"))
        return StandardProps(description=description, names=tuple(names))

    # --- properties ---

    def _property_type(self, record: dict[str, Any], where: str) -> PropertyType:
        name: QName = self._qname(record.get("name"), f"{where}.name")
        raw_kind: Any = record.get("kind")
        if raw_kind is None:
            if isinstance(record.get("value"), (str, int, float, bool)):
                kind: PropertyKind | None = PropertyKind.SIMPLE
            else:
                raise FeatureSourceError(f"{where}: missing 'kind'")
        else:
            kind = PropertyKind.parse(_expect_str(raw_kind, f"{where}.kind"))
            if kind is None:
                allowed: str = ", ".join(PropertyKind.keys())
                raise FeatureSourceError(
                    f"{where}.kind: unknown property kind {raw_kind!r} (allowed: {allowed})"
                )
        min_occurs: int = _expect_int(record.get("minOccurs", 1), f"{where}.minOccurs")
        raw_max: Any = record.get("maxOccurs", 1)
        max_occurs: int | None = (
            None if raw_max == "unbounded" else _expect_int(raw_max, f"{where}.maxOccurs")
        )
        try:
            return PropertyType(name, kind, min_occurs=min_occurs, max_occurs=max_occurs)
        except ValueError as exc:
            raise FeatureSourceError(f"{where}: {exc}") from exc

    def _value(self, kind: PropertyKind, raw: Any, where: str) -> object:
        if kind is PropertyKind.SIMPLE:
            if not isinstance(raw, (str, int, float, bool)):
                raise FeatureSourceError(f"{where}: expected a scalar, got {type(raw).__name__}")
            return raw
        if kind is PropertyKind.CODE:
            return self._code(raw, where)
        if kind in (PropertyKind.LENGTH, PropertyKind.MEASURE):
            obj: dict[str, Any] = _expect_object(raw, where)
            number: float = _expect_number(obj.get("value"), f"{where}.value")
            uom: str = _expect_str(obj.get("uom"), f"{where}.uom")
            return Length(number, uom) if kind is PropertyKind.LENGTH else Measure(number, uom)
        if kind is PropertyKind.GEOMETRY:
            return self._geometry(raw, where)
        if kind is PropertyKind.ENVELOPE:
            return self._envelope(_expect_object(raw, where), where)
        return self._feature_value(raw, where)

    def _feature_value(self, raw: Any, where: str) -> Feature | FeatureReference:
        obj: dict[str, Any] = _expect_object(raw, where)
        if "ref" in obj:
            return self._lookup(_expect_str(obj["ref"], f"{where}.ref"), f"{where}.ref")
        if "href" in obj:
            href: str = _expect_str(obj["href"], f"{where}.href")
            referent: Feature | None = self._arena.get(href[1:]) if href.startswith("#") else None
            return FeatureReference(href, referent)
        if "type" in obj or "members" in obj:
            # Inline record; ids are optional and stay out of the arena.
            inline: Feature = self._new_feature(obj, where)
            self._fill(inline, obj, where)
            return inline
        raise FeatureSourceError(f"{where}: expected 'ref', 'href' or an inline feature record")

    def _code(self, raw: Any, where: str) -> CodeType:
        if isinstance(raw, str):
            return CodeType(raw)
        obj: dict[str, Any] = _expect_object(raw, where)
        return CodeType(
            _expect_str(obj.get("code"), f"{where}.code"),
            _opt_str(obj.get("codeSpace"), f"{where}.codeSpace"),
        )

    # --- geometries ---

    def _geometry(self, raw: Any, where: str) -> Geometry:
        obj: dict[str, Any] = _expect_object(raw, where)
        geom_type: str = _expect_str(obj.get("type"), f"{where}.type")
        gid: str | None = _opt_str(obj.get("id"), f"{where}.id")
        srs: str | None = _opt_str(obj.get("srsName"), f"{where}.srsName")
        coords: Any = obj.get("coordinates")
        c_where: str = f"{where}.coordinates"
        if geom_type == "Point":
            return Point(_position(coords, c_where), id=gid, srs_name=srs)
        if geom_type == "LineString":
            return LineString(_positions(coords, c_where), id=gid, srs_name=srs)
        if geom_type == "Polygon":
            rings: list[Any] = _expect_list(coords, c_where)
            if not rings:
                raise FeatureSourceError(f"{c_where}: a polygon needs an exterior ring")
            parsed = [_positions(r, f"{c_where}[{i}]") for i, r in enumerate(rings)]
            return Polygon(parsed[0], tuple(parsed[1:]), id=gid, srs_name=srs)
        if geom_type == "Envelope":
            return self._envelope(obj, where)
        raise FeatureSourceError(f"{where}.type: unsupported geometry type {geom_type!r}")

    def _envelope(self, obj: dict[str, Any], where: str) -> Envelope:
        return Envelope(
            _position(obj.get("lower"), f"{where}.lower"),
            _position(obj.get("upper"), f"{where}.upper"),
            id=_opt_str(obj.get("id"), f"{where}.id"),
            srs_name=_opt_str(obj.get("srsName"), f"{where}.srsName"),
        )

    # --- names ---

    def _qname(self, raw: Any, where: str) -> QName:
        text: str = _expect_str(raw, where)
        try:
            return QName.parse(text, self._namespaces)
        except ValueError as exc:
            raise FeatureSourceError(f"{where}: {exc}") from exc


# --- shape checks ---


def _expect_object(value: object, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FeatureSourceError(f"{where}: expected an object, got {type(value).__name__}")
    return value  # type: ignore[return-value]


def _expect_list(value: object, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise FeatureSourceError(f"{where}: expected a list, got {type(value).__name__}")
    return value  # type: ignore[return-value]


def _expect_str(value: object, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise FeatureSourceError(f"{where}: expected a non-empty string, got {value!r}")
    return value


def _opt_str(value: object, where: str) -> str | None:
    return None if value is None else _expect_str(value, where)


def _expect_int(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise FeatureSourceError(f"{where}: expected an integer, got {value!r}")
    return value


def _expect_number(value: object, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FeatureSourceError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _position(value: object, where: str) -> tuple[float, ...]:
    coords: list[Any] = _expect_list(value, where)
    if not coords:
        raise FeatureSourceError(f"{where}: empty position")
    return tuple(_expect_number(c, f"{where}[{i}]") for i, c in enumerate(coords))


def _positions(value: object, where: str) -> tuple[tuple[float, ...], ...]:
    items: list[Any] = _expect_list(value, where)
    return tuple(_position(p, f"{where}[{i}]") for i, p in enumerate(items))
