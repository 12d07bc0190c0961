# topmark:header:start
#
#   project      : GMLStream
#   file         : test_policy.py
#   file_relpath : tests/encoder/test_policy.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `ReferencePolicy` decisions."""

from __future__ import annotations

import pytest

from gmlstream.encoder import (
    IdentityRegistry,
    ReferenceOutcome,
    ReferencePolicy,
    build_external_link,
)
from gmlstream.errors import ReferenceTemplateError
from gmlstream.model import Feature, FeatureReference
from tests.conftest import app, make_config, parametrize


def _policy(**overrides: object) -> ReferencePolicy:
    return ReferencePolicy(make_config(**overrides))


def test_back_reference_wins_over_everything() -> None:
    registry = IdentityRegistry()
    registry.mark_emitted("B")
    policy = _policy(reference_template="urn:x:{}", traverse_xlink_depth=0)

    decision = policy.decide(Feature(app("Node"), id="B"), 0, registry)

    assert decision.outcome is ReferenceOutcome.BACK_REFERENCE
    assert decision.href == "#B"
    assert decision.target is None


def test_remote_reference_is_never_inlined() -> None:
    decision = _policy().decide(FeatureReference("http://x/y#o1"), 0, IdentityRegistry())

    assert decision.outcome is ReferenceOutcome.REMOTE
    assert decision.href == "http://x/y#o1"


@parametrize(
    ("template", "budget", "depth", "expected"),
    [
        (None, 0, 0, ReferenceOutcome.INLINE),
        (None, 2, 9, ReferenceOutcome.INLINE),
        ("urn:x:{}", -1, 50, ReferenceOutcome.INLINE),
        ("urn:x:{}", 0, 0, ReferenceOutcome.EXTERNAL_LINK),
        ("urn:x:{}", 1, 0, ReferenceOutcome.INLINE),
        ("urn:x:{}", 1, 1, ReferenceOutcome.EXTERNAL_LINK),
        ("urn:x:{}", 3, 2, ReferenceOutcome.INLINE),
        ("urn:x:{}", 3, 3, ReferenceOutcome.EXTERNAL_LINK),
    ],
)
def test_depth_budget_table(
    template: str | None, budget: int, depth: int, expected: ReferenceOutcome
) -> None:
    policy = _policy(reference_template=template, traverse_xlink_depth=budget)

    decision = policy.decide(Feature(app("Node"), id="N"), depth, IdentityRegistry())

    assert decision.outcome is expected
    if expected is ReferenceOutcome.EXTERNAL_LINK:
        assert decision.href == "urn:x:N"
    else:
        assert decision.target is not None


def test_feature_without_id_is_always_inlined() -> None:
    policy = _policy(reference_template="urn:x:{}", traverse_xlink_depth=0)
    anonymous = Feature(app("Node"))

    decision = policy.decide(anonymous, 7, IdentityRegistry())

    assert decision.is_inline
    assert decision.target is anonymous


def test_resolved_local_reference_expands_its_referent() -> None:
    target = Feature(app("Node"), id="B")

    decision = _policy().decide(FeatureReference("#B", target), 0, IdentityRegistry())

    assert decision.is_inline
    assert decision.target is target


def test_resolved_local_reference_can_link_out() -> None:
    target = Feature(app("Node"), id="B")
    policy = _policy(reference_template="http://h/{}", traverse_xlink_depth=0)

    decision = policy.decide(FeatureReference("#B", target), 0, IdentityRegistry())

    assert decision.outcome is ReferenceOutcome.EXTERNAL_LINK
    assert decision.href == "http://h/B"


def test_unresolved_local_reference_keeps_its_fragment() -> None:
    decision = _policy().decide(FeatureReference("#Z"), 0, IdentityRegistry())

    assert decision.outcome is ReferenceOutcome.BACK_REFERENCE
    assert decision.href == "#Z"


def test_decide_does_not_touch_the_registry() -> None:
    registry = IdentityRegistry()

    _policy().decide(Feature(app("Node"), id="N"), 0, registry)

    assert len(registry) == 0


def test_link_builder_gets_template_id_and_expiry() -> None:
    calls: list[tuple[str, str, int | None]] = []

    def _builder(template: str, object_id: str, expiry: int | None) -> str:
        calls.append((template, object_id, expiry))
        return "built"

    cfg = make_config(
        reference_template="urn:x:{}", traverse_xlink_depth=0, traverse_xlink_expiry=5
    )
    decision = ReferencePolicy(cfg, _builder).decide(
        Feature(app("Node"), id="N"), 0, IdentityRegistry()
    )

    assert decision.href == "built"
    assert calls == [("urn:x:{}", "N", 5)]


def test_default_link_builder_substitutes_the_id() -> None:
    assert build_external_link("http://h/wfs?id={}&x=1", "F7", 60) == "http://h/wfs?id=F7&x=1"


@parametrize("template", ["http://h/static", "urn:{}:{}"])
def test_templates_need_exactly_one_placeholder(template: str) -> None:
    with pytest.raises(ReferenceTemplateError) as excinfo:
        make_config(reference_template=template)

    assert excinfo.value.template == template
    assert isinstance(excinfo.value, ValueError)
