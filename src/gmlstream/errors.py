# topmark:header:start
#
#   project      : GMLStream
#   file         : errors.py
#   file_relpath : src/gmlstream/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error taxonomy for GMLStream.

All library errors derive from `GmlstreamError`. Contract violations are
additionally instances of the matching builtin (`TypeError`, `ValueError`) so
callers that only know Python's builtins still catch them.

Writer I/O failures are not wrapped: an `OSError` raised by the output stream
propagates unchanged and aborts the pass. Partial output is not rolled back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gmlstream.model.feature import PropertyKind
    from gmlstream.model.qname import QName


class GmlstreamError(Exception):
    """Base class for all GMLStream errors."""


class EncodingContractError(GmlstreamError):
    """The caller handed the encoder something that violates its contract."""


class PropertyValueTypeError(EncodingContractError, TypeError):
    """A property value does not match the runtime type its declared kind requires."""

    def __init__(self, name: QName, kind: PropertyKind, value: object) -> None:
        self.name: QName = name
        self.kind: PropertyKind = kind
        self.value: object = value
        super().__init__(
            f"Property {name} is declared as {kind.key!r} "
            f"but holds a {type(value).__name__} value: {value!r}"
        )


class ReferenceTemplateError(EncodingContractError, ValueError):
    """An external reference template does not contain exactly one ``{}`` placeholder."""

    def __init__(self, template: str, placeholder_count: int) -> None:
        self.template: str = template
        self.placeholder_count: int = placeholder_count
        super().__init__(
            f"Reference template must contain exactly one '{{}}' placeholder, "
            f"found {placeholder_count}: {template!r}"
        )


class GeometryEncodingError(GmlstreamError):
    """The geometry sub-encoder cannot write a geometry value."""


class XmlWriterStateError(GmlstreamError):
    """A document writer call is not valid in the writer's current state."""


class FeatureSourceError(GmlstreamError):
    """A feature document handed to the source loader is malformed."""
