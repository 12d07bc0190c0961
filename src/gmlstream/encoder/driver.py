# topmark:header:start
#
#   project      : GMLStream
#   file         : driver.py
#   file_relpath : src/gmlstream/encoder/driver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Traversal driver: depth-first walk over a feature graph.

`FeatureEncoder` is the entry point of the encoder. Each top-level call
(`FeatureEncoder.export` or `FeatureEncoder.export_collection`) is one encode
pass with its own `EncodingContext`, unless the caller passes a registry to
share "already written" state across passes (and therefore documents).

Inline depth starts at 0 for the root feature and for every member of a named
collection. It grows by one for each inline expansion of a feature-typed
property and for each level of a structural `FeatureCollection`.

The walk keeps its own stack of pending writer steps instead of recursing, so
the nesting depth of the output is bounded by memory, not by the interpreter
recursion limit. Steps run in document order: an inline feature is written in
full before the next sibling property of its owner.

The encoder is not thread-safe: the writer and the per-pass dispatcher belong
to one pass at a time.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable

from gmlstream.config.logging import get_logger
from gmlstream.config.model import EncoderConfig
from gmlstream.encoder.context import EncodingContext
from gmlstream.encoder.dispatch import PropertyDispatcher
from gmlstream.encoder.policy import ReferencePolicy, build_external_link
from gmlstream.encoder.registry import IdentityRegistry
from gmlstream.model.feature import FeatureCollection
from gmlstream.xml.geometry import Gml311GeometryEncoder
from gmlstream.xml.namespaces import (
    ATTR_CODE_SPACE,
    GML_DESCRIPTION,
    GML_FEATURE_COLLECTION,
    GML_FEATURE_MEMBER,
    GML_ID,
    GML_NAME,
    GML_PREFIX,
    GMLNS,
    XLINK_HREF,
    XLINK_PREFIX,
    XLNNS,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.encoder.dispatch import PropertyHandler
    from gmlstream.encoder.policy import LinkBuilder
    from gmlstream.model.feature import Feature, PropertyKind, StandardProps
    from gmlstream.model.qname import QName
    from gmlstream.xml.geometry import GeometryEncoder
    from gmlstream.xml.writer import DocumentWriter

logger: GmlstreamLogger = get_logger(__name__)

GeometryEncoderFactory = Callable[["DocumentWriter", IdentityRegistry], "GeometryEncoder"]

# One deferred writer step of the traversal.
PendingWrite = Callable[[], None]


class FeatureEncoder:
    """Encode features and feature collections as GML 3.1.1.

    Args:
        writer (DocumentWriter): Destination writer. The encoder writes elements only;
            `gmlstream.api.write_document` wraps a pass in start/end document calls.
        config (EncoderConfig | None): Frozen options; runtime defaults when None.
        geometry_encoder_factory (GeometryEncoderFactory): Builds the geometry
            sub-encoder of a pass from the writer and the pass registry.
        link_builder (LinkBuilder): Builds external links from the reference template.
        handler_overrides (Mapping[PropertyKind, PropertyHandler | None] | None):
            Per-kind replacements for the built-in property handlers; ``None`` as a
            value removes the handler for that kind.
    """

    def __init__(
        self,
        writer: DocumentWriter,
        config: EncoderConfig | None = None,
        *,
        geometry_encoder_factory: GeometryEncoderFactory = Gml311GeometryEncoder,
        link_builder: LinkBuilder = build_external_link,
        handler_overrides: Mapping[PropertyKind, PropertyHandler | None] | None = None,
    ) -> None:
        self._writer: DocumentWriter = writer
        self._config: EncoderConfig = config if config is not None else EncoderConfig()
        self._geometry_encoder_factory: GeometryEncoderFactory = geometry_encoder_factory
        self._policy: ReferencePolicy = ReferencePolicy(self._config, link_builder)
        self._handler_overrides: dict[PropertyKind, PropertyHandler | None] = dict(
            handler_overrides or {}
        )
        self._dispatcher: PropertyDispatcher | None = None
        self._pending: list[PendingWrite] = []
        self._last_context: EncodingContext | None = None

    @property
    def config(self) -> EncoderConfig:
        """Frozen options used for every pass of this encoder."""
        return self._config

    @property
    def last_context(self) -> EncodingContext | None:
        """Context of the most recent pass, or None before the first one."""
        return self._last_context

    # --- entry points ---

    def export(
        self,
        feature: Feature,
        registry: IdentityRegistry | None = None,
    ) -> EncodingContext:
        """Write ``feature`` in full at depth 0.

        Args:
            feature (Feature): Root feature (a `FeatureCollection` gets the generic
                ``gml:FeatureCollection`` wrapper).
            registry (IdentityRegistry | None): Registry to share with other passes; a
                fresh one when None.

        Returns:
            EncodingContext: Registry and diagnostics of this pass.
        """
        ctx: EncodingContext = self._begin_pass(registry)
        logger.debug("Exporting feature %s with id %s", feature.name, feature.id)
        self._schedule_feature(feature, 0, ctx)
        self._drain()
        return ctx

    def export_collection(
        self,
        members: Iterable[Feature],
        name: QName,
        registry: IdentityRegistry | None = None,
    ) -> EncodingContext:
        """Write a named collection element with one ``gml:featureMember`` per member.

        Each member starts at depth 0. A member whose id was already written is
        referenced with ``xlink:href="#<id>"`` on its ``gml:featureMember``.

        Returns:
            EncodingContext: Registry and diagnostics of this pass.
        """
        ctx: EncodingContext = self._begin_pass(registry)
        logger.debug("Exporting feature collection %s", name)
        if name.has_namespace:
            self._writer.set_prefix(self._config.feature_prefix, name.namespace)
        self._write_members(name, members, 0, ctx)
        self._drain()
        return ctx

    def is_exported(self, object_id: str) -> bool:
        """Return True if ``object_id`` was written in full during the most recent pass."""
        return self._last_context is not None and self._last_context.registry.has_been_emitted(
            object_id
        )

    # --- traversal ---

    def _begin_pass(self, registry: IdentityRegistry | None) -> EncodingContext:
        ctx = EncodingContext(
            self._config, registry if registry is not None else IdentityRegistry()
        )
        self._pending = []
        dispatcher = PropertyDispatcher(
            self._writer,
            self._geometry_encoder_factory(self._writer, ctx.registry),
            self._policy,
            self._schedule_feature,
            self._pending.append,
        )
        for kind, handler in self._handler_overrides.items():
            if handler is None:
                dispatcher.unregister(kind)
            else:
                dispatcher.register(kind, handler)
        self._dispatcher = dispatcher
        self._last_context = ctx
        self._writer.set_prefix(GML_PREFIX, GMLNS)
        self._writer.set_prefix(XLINK_PREFIX, XLNNS)
        return ctx

    def _drain(self) -> None:
        """Run pending writes, last scheduled first, until the pass is complete."""
        pending: list[PendingWrite] = self._pending
        while pending:
            pending.pop()()

    def _schedule_feature(self, feature: Feature, depth: int, ctx: EncodingContext) -> None:
        """Queue ``feature`` to be written in full; the expansion callback of the dispatcher.

        The write runs before anything scheduled earlier, so an inline feature is
        complete before the next sibling property of its owner.
        """
        self._pending.append(partial(self._export_feature, feature, depth, ctx))

    def _export_feature(self, feature: Feature, depth: int, ctx: EncodingContext) -> None:
        ctx.registry.mark_emitted(feature.id)

        if isinstance(feature, FeatureCollection):
            logger.debug("Exporting generic feature collection at depth %d", depth)
            self._write_members(
                GML_FEATURE_COLLECTION, feature.members, depth + 1, ctx, object_id=feature.id
            )
            return

        logger.trace("Feature %s id=%s depth=%d", feature.name, feature.id, depth)
        if feature.name.has_namespace:
            self._writer.set_prefix(self._config.feature_prefix, feature.name.namespace)
        self._writer.start_element(feature.name)
        if feature.id is not None:
            self._writer.attribute(GML_ID, feature.id)
        if feature.standard_props is not None:
            self._write_standard_props(feature.standard_props)

        dispatcher: PropertyDispatcher | None = self._dispatcher
        assert dispatcher is not None, "_begin_pass() sets up the dispatcher"
        self._pending.append(self._writer.end_element)
        for prop in reversed(feature.properties):
            self._pending.append(partial(dispatcher.dispatch, prop, depth, ctx))

    def _write_members(
        self,
        name: QName,
        members: Iterable[Feature],
        depth: int,
        ctx: EncodingContext,
        *,
        object_id: str | None = None,
    ) -> None:
        self._writer.start_element(name)
        if object_id is not None:
            self._writer.attribute(GML_ID, object_id)
        self._pending.append(partial(self._next_member, iter(members), depth, ctx))

    def _next_member(self, members: Iterator[Feature], depth: int, ctx: EncodingContext) -> None:
        # Members are pulled one at a time; the enclosing element closes when they run out.
        member: Feature | None = next(members, None)
        if member is None:
            self._writer.end_element()
            return
        self._pending.append(partial(self._next_member, members, depth, ctx))
        if ctx.registry.has_been_emitted(member.id):
            self._writer.empty_element(GML_FEATURE_MEMBER)
            self._writer.attribute(XLINK_HREF, f"#{member.id}")
            return
        self._writer.start_element(GML_FEATURE_MEMBER)
        self._pending.append(self._writer.end_element)
        self._schedule_feature(member, depth, ctx)

    def _write_standard_props(self, props: StandardProps) -> None:
        description = props.description
        if description is not None and self._config.is_property_requested(GML_DESCRIPTION):
            self._writer.start_element(GML_DESCRIPTION)
            if description.ref is not None:
                self._writer.attribute(XLINK_HREF, description.ref)
            if description.string is not None:
                self._writer.characters(description.string)
            self._writer.end_element()

        if self._config.is_property_requested(GML_NAME):
            for code in props.names:
                self._writer.start_element(GML_NAME)
                if code.code_space:
                    self._writer.attribute(ATTR_CODE_SPACE, code.code_space)
                self._writer.characters(code.code)
                self._writer.end_element()
