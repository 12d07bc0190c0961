# topmark:header:start
#
#   project      : GMLStream
#   file         : feature.py
#   file_relpath : src/gmlstream/model/feature.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Feature graph model.

A `Feature` is an identified, named record with an ordered list of typed
`Property` values. Feature-typed properties point at other features (or at
`FeatureReference` handles), so the graph may be shared and cyclic.

Identity:
    Features compare by object identity (``eq=False``) and exclude their
    properties/members from ``repr``; structural equality or a recursive repr
    would never terminate on a cyclic graph. The encoder tracks "already
    written" state through the string ``id`` only.

Property kinds:
    `PropertyKind` is the closed set of encodings the property dispatcher
    knows about. Each `PropertyType` declares one kind, and the runtime type of
    the value must match it (see `expected_value_types`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Union

from gmlstream.core.enum_mixins import KeyedStrEnum
from gmlstream.model.geometry import Envelope, Geometry
from gmlstream.model.values import CodeType, Length, Measure, StringOrRef

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gmlstream.model.qname import QName


class PropertyKind(KeyedStrEnum):
    """Declared encoding of a property value."""

    SIMPLE = ("simple", "Simple value", ("string", "text"))
    CODE = ("code", "Coded value", ("coded", "code_type"))
    GEOMETRY = ("geometry", "Geometry", ("geom",))
    FEATURE = ("feature", "Feature reference", ("feature_ref", "reference"))
    LENGTH = ("length", "Length measure")
    MEASURE = ("measure", "Measure")
    ENVELOPE = ("envelope", "Bounding envelope", ("bbox", "bounded_by"))


@dataclass(frozen=True, slots=True)
class PropertyType:
    """Declaration of a property: qualified name, kind and occurrence bounds.

    Attributes:
        name (QName): Qualified element name of the property.
        kind (PropertyKind): Declared value encoding.
        min_occurs (int): Minimum occurrence; ``0`` marks the property optional.
        max_occurs (int | None): Maximum occurrence; ``None`` means unbounded.
    """

    name: QName
    kind: PropertyKind
    min_occurs: int = 1
    max_occurs: int | None = 1

    def __post_init__(self) -> None:
        if self.min_occurs < 0:
            raise ValueError(f"min_occurs must be >= 0 for {self.name}")
        if self.max_occurs is not None and self.max_occurs < max(self.min_occurs, 1):
            raise ValueError(f"max_occurs must be >= max(min_occurs, 1) for {self.name}")

    @property
    def is_optional(self) -> bool:
        """Return True if the property may be omitted (``min_occurs == 0``)."""
        return self.min_occurs == 0


@dataclass(eq=False, slots=True)
class Property:
    """A typed value owned by a feature."""

    type: PropertyType
    value: object

    @property
    def name(self) -> QName:
        """Qualified name of the property (from its type)."""
        return self.type.name

    @property
    def kind(self) -> PropertyKind:
        """Declared kind of the property (from its type)."""
        return self.type.kind


@dataclass(frozen=True)
class StandardProps:
    """Standard GML object metadata: ``gml:description`` and ``gml:name`` entries."""

    description: StringOrRef | None = None
    names: tuple[CodeType, ...] = ()


@dataclass(eq=False)
class Feature:
    """An identified, named entity with structured properties.

    Attributes:
        name (QName): Qualified element name of the feature type.
        id (str | None): Optional identifier, unique within the document scope.
        properties (list[Property]): Ordered property values.
        standard_props (StandardProps | None): Optional description and names.
    """

    name: QName
    id: str | None = None
    properties: list[Property] = field(default_factory=lambda: [], repr=False)
    standard_props: StandardProps | None = None

    def add_property(self, prop_type: PropertyType, value: object) -> Property:
        """Append a property value and return it."""
        prop = Property(prop_type, value)
        self.properties.append(prop)
        return prop


@dataclass(eq=False)
class FeatureCollection(Feature):
    """A feature whose only content is an ordered sequence of member features."""

    members: list[Feature] = field(default_factory=lambda: [], repr=False)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(eq=False)
class FeatureReference:
    """Handle to a feature addressed by ``xlink:href``.

    A reference is *local* when its href is a same-document fragment
    (``#id``); local references may carry the resolved `referent`. Any other
    href is *remote*: an opaque external address that is never inlined.

    Attributes:
        href (str): The reference target.
        referent (Feature | None): The resolved feature for local references.
    """

    href: str
    referent: Feature | None = field(default=None, repr=False)

    @property
    def is_local(self) -> bool:
        """Return True if the href addresses an object in the same document."""
        return self.href.startswith("#")

    @property
    def id(self) -> str | None:
        """Identifier of the target in the local id space, or None for remote references."""
        if not self.is_local:
            return None
        if self.referent is not None and self.referent.id is not None:
            return self.referent.id
        return self.href[1:] or None


FeatureValue = Union[Feature, FeatureReference]


def expected_value_types(kind: PropertyKind) -> tuple[type, ...]:
    """Return the runtime types accepted for a property of the given kind.

    Args:
        kind (PropertyKind): Declared property kind.

    Returns:
        tuple[type, ...]: Types suitable for ``isinstance`` checks.
    """
    return _VALUE_TYPES[kind]


_VALUE_TYPES: dict[PropertyKind, tuple[type, ...]] = {
    PropertyKind.SIMPLE: (str, int, float, bool, Decimal, date, datetime, time),
    PropertyKind.CODE: (CodeType,),
    PropertyKind.GEOMETRY: (Geometry,),
    PropertyKind.FEATURE: (Feature, FeatureReference),
    PropertyKind.LENGTH: (Length,),
    PropertyKind.MEASURE: (Measure,),
    PropertyKind.ENVELOPE: (Envelope,),
}
