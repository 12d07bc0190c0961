# topmark:header:start
#
#   project      : GMLStream
#   file         : dispatch.py
#   file_relpath : src/gmlstream/encoder/dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property dispatcher: one encoding routine per `PropertyKind`.

For each property of a feature written in full, in declared order:

- an optional property (``min_occurs == 0``) missing from a non-empty allow-list
  is skipped without output;
- the value's runtime type is checked against its declared kind
  (`PropertyValueTypeError` on mismatch, nothing is coerced);
- the handler registered for the kind writes the property.

A kind without a registered handler writes nothing; the dispatcher logs a
warning and records it on the pass diagnostics.
"""

from __future__ import annotations

from datetime import date, time
from typing import TYPE_CHECKING, Callable

from gmlstream.config.logging import get_logger
from gmlstream.errors import PropertyValueTypeError
from gmlstream.model.feature import PropertyKind, expected_value_types
from gmlstream.model.values import format_number
from gmlstream.xml.namespaces import ATTR_CODE_SPACE, ATTR_UOM, XLINK_HREF

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.encoder.context import EncodingContext
    from gmlstream.encoder.policy import ReferenceDecision, ReferencePolicy
    from gmlstream.model.feature import Feature, FeatureValue, Property
    from gmlstream.model.geometry import Envelope, Geometry
    from gmlstream.model.qname import QName
    from gmlstream.model.values import CodeType, Measure
    from gmlstream.xml.geometry import GeometryEncoder
    from gmlstream.xml.writer import DocumentWriter

logger: GmlstreamLogger = get_logger(__name__)

# (property, depth, context) -> None
PropertyHandler = Callable[["Property", int, "EncodingContext"], None]

# Schedules a feature to be written in full by the driver: (feature, depth, context) -> None
FeatureExpander = Callable[["Feature", int, "EncodingContext"], None]

# Queues a writer step to run once everything scheduled after it has run.
DeferredWrite = Callable[[Callable[[], None]], None]


def simple_text(value: object) -> str:
    """Return the character data for a simple property value.

    Booleans become ``true``/``false`` and floats use the shortest round-trip
    form. Dates, times and datetimes use ISO 8601 (``xs:date``, ``xs:time``,
    ``xs:dateTime``); decimals keep their exact digits.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


class PropertyDispatcher:
    """Write properties through the handler registered for their kind.

    Args:
        writer (DocumentWriter): Destination writer.
        geometry_encoder (GeometryEncoder): Sub-encoder for geometry and envelope values.
        policy (ReferencePolicy): Decides how feature-typed values are written.
        expand (FeatureExpander): Callback that schedules a feature to be written in
            full (the driver).
        defer (DeferredWrite): Callback that queues a writer step behind the
            scheduled expansion.
        handlers (Mapping[PropertyKind, PropertyHandler] | None): Handler table; the
            built-in table covering every `PropertyKind` when None.
    """

    def __init__(
        self,
        writer: DocumentWriter,
        geometry_encoder: GeometryEncoder,
        policy: ReferencePolicy,
        expand: FeatureExpander,
        defer: DeferredWrite,
        handlers: Mapping[PropertyKind, PropertyHandler] | None = None,
    ) -> None:
        self._writer: DocumentWriter = writer
        self._geometry: GeometryEncoder = geometry_encoder
        self._policy: ReferencePolicy = policy
        self._expand: FeatureExpander = expand
        self._defer: DeferredWrite = defer
        self._handlers: dict[PropertyKind, PropertyHandler] = (
            dict(handlers) if handlers is not None else self.default_handlers()
        )

    def default_handlers(self) -> dict[PropertyKind, PropertyHandler]:
        """Return the built-in handler table (one routine per kind)."""
        return {
            PropertyKind.SIMPLE: self._write_simple,
            PropertyKind.CODE: self._write_code,
            PropertyKind.GEOMETRY: self._write_geometry,
            PropertyKind.FEATURE: self._write_feature,
            PropertyKind.LENGTH: self._write_measure,
            PropertyKind.MEASURE: self._write_measure,
            PropertyKind.ENVELOPE: self._write_envelope,
        }

    def register(self, kind: PropertyKind, handler: PropertyHandler) -> None:
        """Install (or replace) the handler for ``kind``."""
        self._handlers[kind] = handler

    def unregister(self, kind: PropertyKind) -> None:
        """Remove the handler for ``kind``; its properties are then skipped with a warning."""
        self._handlers.pop(kind, None)

    def dispatch(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        """Write one property of a feature being written at inline ``depth``.

        Raises:
            PropertyValueTypeError: If the value does not match the declared kind.
        """
        if prop.type.is_optional and not ctx.config.is_property_requested(prop.name):
            logger.debug("Skipping optional property %s (not requested)", prop.name)
            return

        kind: PropertyKind = prop.kind
        handler: PropertyHandler | None = self._handlers.get(kind)
        if handler is None:
            logger.warning("No encoder registered for property kind %r (%s)", kind.key, prop.name)
            ctx.diagnostics.add_warning(
                f"No encoder registered for property kind {kind.key!r}; skipped {prop.name}"
            )
            return

        if not isinstance(prop.value, expected_value_types(kind)):
            raise PropertyValueTypeError(prop.name, kind, prop.value)

        handler(prop, depth, ctx)

    # --- handlers ---

    def _write_simple(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        self._writer.start_element(prop.name)
        self._writer.characters(simple_text(prop.value))
        self._writer.end_element()

    def _write_code(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        code: CodeType = prop.value  # type: ignore[assignment]
        self._writer.start_element(prop.name)
        if code.code_space:
            self._writer.attribute(ATTR_CODE_SPACE, code.code_space)
        self._writer.characters(code.code)
        self._writer.end_element()

    def _write_measure(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        measure: Measure = prop.value  # type: ignore[assignment]
        self._writer.start_element(prop.name)
        self._writer.attribute(ATTR_UOM, measure.uom)
        self._writer.characters(format_number(measure.value))
        self._writer.end_element()

    def _write_envelope(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        # No owning property element.
        envelope: Envelope = prop.value  # type: ignore[assignment]
        self._geometry.export_envelope(envelope)

    def _write_geometry(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        geometry: Geometry = prop.value  # type: ignore[assignment]
        if ctx.registry.has_been_emitted(geometry.id):
            self._write_link(prop.name, f"#{geometry.id}")
            return
        ctx.registry.mark_emitted(geometry.id)
        self._writer.start_element(prop.name)
        self._geometry.export(geometry)
        self._writer.end_element()

    def _write_feature(self, prop: Property, depth: int, ctx: EncodingContext) -> None:
        value: FeatureValue = prop.value  # type: ignore[assignment]
        decision: ReferenceDecision = self._policy.decide(value, depth, ctx.registry)
        if decision.target is not None and decision.is_inline:
            ctx.registry.mark_emitted(value.id)
            self._writer.start_element(prop.name)
            # Closes after the expansion, which is scheduled on top of it.
            self._defer(self._writer.end_element)
            self._expand(decision.target, depth + 1, ctx)
            return
        self._write_link(prop.name, decision.href or "")

    def _write_link(self, name: QName, href: str) -> None:
        self._writer.empty_element(name)
        self._writer.attribute(XLINK_HREF, href)
