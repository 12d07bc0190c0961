# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public GMLStream API (stable surface).

This module exposes a **small, typed API** for integrations that want to
encode feature graphs programmatically without going through the CLI.

Versioning policy
-----------------
- The **signatures** in this module follow semver.
- Adding optional parameters with defaults is allowed in minor releases.
- Removing/renaming anything here is a breaking change (major release).

Configuration contract
----------------------
- Public functions accept either a plain **mapping** (mirroring the TOML shape) or a frozen
  `gmlstream.config.model.EncoderConfig`. Mappings are layered on top of the runtime
  defaults and frozen before encoding; no project discovery happens here.
- The `MutableEncoderConfig` builder is **not part of the public API**.

```python
import io

from gmlstream import api

out = io.StringIO()
api.encode(
    feature,
    out,
    config={"encoder": {"reference_template": "#{}", "traverse_xlink_depth": 0}},
)
```
"""

from __future__ import annotations

import io
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterable, TextIO

from gmlstream.config.logging import get_logger
from gmlstream.config.model import EncoderConfig, MutableEncoderConfig
from gmlstream.constants import GMLSTREAM_VERSION
from gmlstream.encoder import EncodingContext, FeatureEncoder, IdentityRegistry
from gmlstream.xml.writer import XmlStreamWriter

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.model.feature import Feature
    from gmlstream.model.qname import QName
    from gmlstream.source.loader import FeatureDocument
    from gmlstream.xml.writer import DocumentWriter

logger: GmlstreamLogger = get_logger(__name__)

ConfigLike = Mapping[str, Any] | EncoderConfig | None

__all__: list[str] = [
    "ConfigLike",
    "encode",
    "encode_collection",
    "encode_document",
    "encode_to_string",
    "ensure_encoder_config",
    "version",
    "write_collection_document",
    "write_document",
]


def ensure_encoder_config(value: ConfigLike) -> EncoderConfig:
    """Return a frozen `EncoderConfig` from a mapping or a frozen config.

    Args:
        value (ConfigLike): A TOML-shaped mapping (``{"encoder": {...}, "output": {...}}``),
            a frozen `EncoderConfig`, or None for the runtime defaults.

    Returns:
        EncoderConfig: The frozen configuration.

    Raises:
        ReferenceTemplateError: If the resulting reference template is invalid.
    """
    if isinstance(value, EncoderConfig):
        return value
    draft: MutableEncoderConfig = MutableEncoderConfig.from_defaults()
    if value is not None:
        draft = draft.merge_with(MutableEncoderConfig.from_toml_dict(dict(value)))
    return draft.freeze()


def write_document(
    writer: DocumentWriter,
    encoder: FeatureEncoder,
    feature: Feature,
    *,
    registry: IdentityRegistry | None = None,
) -> EncodingContext:
    """Write a complete document containing ``feature``.

    Wraps `FeatureEncoder.export` in `start_document` / `end_document`.

    Returns:
        EncodingContext: Registry and diagnostics of the pass.
    """
    writer.start_document()
    ctx: EncodingContext = encoder.export(feature, registry)
    writer.end_document()
    return ctx


def write_collection_document(
    writer: DocumentWriter,
    encoder: FeatureEncoder,
    members: Iterable[Feature],
    name: QName,
    *,
    registry: IdentityRegistry | None = None,
) -> EncodingContext:
    """Write a complete document holding the named collection ``name``."""
    writer.start_document()
    ctx: EncodingContext = encoder.export_collection(members, name, registry)
    writer.end_document()
    return ctx


def _make_encoder(stream: TextIO, config: ConfigLike) -> tuple[XmlStreamWriter, FeatureEncoder]:
    cfg: EncoderConfig = ensure_encoder_config(config)
    writer = XmlStreamWriter(stream, encoding=cfg.encoding, xml_declaration=cfg.xml_declaration)
    return writer, FeatureEncoder(writer, cfg)


def encode(
    feature: Feature,
    stream: TextIO,
    *,
    config: ConfigLike = None,
    registry: IdentityRegistry | None = None,
) -> EncodingContext:
    """Encode ``feature`` as a GML document on ``stream``.

    Args:
        feature (Feature): Root feature.
        stream (TextIO): Destination text stream (left open).
        config (ConfigLike): Mapping or frozen config; runtime defaults when None.
        registry (IdentityRegistry | None): Registry shared with other passes.

    Returns:
        EncodingContext: Registry and diagnostics of the pass.

    Raises:
        EncodingContractError: On a value/kind mismatch or an invalid template.
        GeometryEncodingError: If a geometry cannot be encoded.
        OSError: If the stream fails; partial output is left as written.
    """
    writer, encoder = _make_encoder(stream, config)
    return write_document(writer, encoder, feature, registry=registry)


def encode_collection(
    members: Iterable[Feature],
    name: QName,
    stream: TextIO,
    *,
    config: ConfigLike = None,
    registry: IdentityRegistry | None = None,
) -> EncodingContext:
    """Encode ``members`` as the named collection ``name`` on ``stream``."""
    writer, encoder = _make_encoder(stream, config)
    return write_collection_document(writer, encoder, members, name, registry=registry)


def encode_document(
    doc: FeatureDocument,
    stream: TextIO,
    *,
    config: ConfigLike = None,
) -> EncodingContext:
    """Encode whatever a loaded `FeatureDocument` selects (its root or its collection)."""
    if doc.collection_name is not None:
        return encode_collection(doc.members, doc.collection_name, stream, config=config)
    assert doc.root is not None, "a document selects a root or a collection"
    return encode(doc.root, stream, config=config)


def encode_to_string(feature: Feature, *, config: ConfigLike = None) -> str:
    """Return ``feature`` encoded as a GML document string."""
    buffer = io.StringIO()
    encode(feature, buffer, config=config)
    return buffer.getvalue()


def version() -> str:
    """Return the installed GMLStream version."""
    return GMLSTREAM_VERSION
