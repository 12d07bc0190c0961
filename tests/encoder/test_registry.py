# topmark:header:start
#
#   project      : GMLStream
#   file         : test_registry.py
#   file_relpath : tests/encoder/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `IdentityRegistry` and `EncodingContext`."""

from __future__ import annotations

from gmlstream.encoder import EncodingContext, IdentityRegistry
from tests.conftest import make_config


def test_none_is_never_emitted() -> None:
    registry = IdentityRegistry()

    registry.mark_emitted(None)

    assert not registry.has_been_emitted(None)
    assert len(registry) == 0


def test_mark_is_idempotent() -> None:
    registry = IdentityRegistry()

    registry.mark_emitted("A")
    registry.mark_emitted("A")

    assert registry.has_been_emitted("A")
    assert "A" in registry
    assert len(registry) == 1


def test_snapshot_is_detached() -> None:
    registry = IdentityRegistry()
    registry.mark_emitted("A")

    snapshot = registry.snapshot()
    registry.mark_emitted("B")

    assert snapshot == frozenset({"A"})
    assert list(registry) == ["A", "B"]


def test_context_creates_fresh_state() -> None:
    cfg = make_config()
    first = EncodingContext(cfg)
    second = EncodingContext(cfg)

    first.registry.mark_emitted("A")

    assert first.emitted_ids == frozenset({"A"})
    assert second.emitted_ids == frozenset()
    assert len(second.diagnostics) == 0
