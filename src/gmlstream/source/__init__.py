# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/source/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Feature sources: build in-memory feature graphs from documents."""

from __future__ import annotations

from gmlstream.source.loader import (
    FeatureDocument,
    build_feature_document,
    load_feature_document,
    parse_feature_document,
)

__all__ = [
    "FeatureDocument",
    "build_feature_document",
    "load_feature_document",
    "parse_feature_document",
]
