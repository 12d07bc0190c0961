# topmark:header:start
#
#   project      : GMLStream
#   file         : registry.py
#   file_relpath : src/gmlstream/encoder/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity registry for one encode pass.

The registry is the single source of truth for "already written" state. It
holds the ids of every feature and geometry written in full so far. Ids are
added immediately *before* the full element is opened, so a cycle that leads
back to an ancestor under construction resolves to a back-reference instead of
recursing.

The set only grows during a pass. One registry is created per top-level export
call unless a caller explicitly passes a shared one to deduplicate across
documents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gmlstream.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gmlstream.config.logging import GmlstreamLogger

logger: GmlstreamLogger = get_logger(__name__)


class IdentityRegistry:
    """Set of identifiers written in full during the current pass."""

    __slots__ = ("_emitted",)

    def __init__(self) -> None:
        self._emitted: set[str] = set()

    def has_been_emitted(self, object_id: str | None) -> bool:
        """Return True if ``object_id`` was already written in full.

        ``None`` is never considered emitted.
        """
        return object_id is not None and object_id in self._emitted

    def mark_emitted(self, object_id: str | None) -> None:
        """Record ``object_id`` as written; idempotent, and a no-op for ``None``."""
        if object_id is None or object_id in self._emitted:
            return
        self._emitted.add(object_id)
        logger.trace("Marked emitted: %s", object_id)

    def snapshot(self) -> frozenset[str]:
        """Return an immutable copy of the emitted ids."""
        return frozenset(self._emitted)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._emitted

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._emitted))

    def __len__(self) -> int:
        return len(self._emitted)

    def __repr__(self) -> str:
        return f"IdentityRegistry({len(self._emitted)} emitted)"
