# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/encoder/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Feature graph encoder.

Components, leaf-first:
    - `IdentityRegistry`: ids written in full during one pass.
    - `ReferencePolicy`: inline / back-reference / remote / external-link decision.
    - `PropertyDispatcher`: one encoding routine per `PropertyKind`.
    - `FeatureEncoder`: depth-first traversal driver and public entry point.
"""

from __future__ import annotations

from gmlstream.encoder.context import EncodingContext
from gmlstream.encoder.dispatch import PropertyDispatcher
from gmlstream.encoder.driver import FeatureEncoder
from gmlstream.encoder.policy import (
    ReferenceDecision,
    ReferenceOutcome,
    ReferencePolicy,
    build_external_link,
)
from gmlstream.encoder.registry import IdentityRegistry

__all__ = [
    "EncodingContext",
    "FeatureEncoder",
    "IdentityRegistry",
    "PropertyDispatcher",
    "ReferenceDecision",
    "ReferenceOutcome",
    "ReferencePolicy",
    "build_external_link",
]
