# topmark:header:start
#
#   project      : GMLStream
#   file         : strategies_gmlstream.py
#   file_relpath : tests/strategies_gmlstream.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating shared and cyclic feature graphs.

Identified nodes may link to any node (including themselves), so generated
graphs freely contain shared targets and cycles. Anonymous features only occur
as leaves: without an id nothing can break a cycle through them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hypothesis import strategies as st

from gmlstream.model import Feature, PropertyKind, PropertyType, QName
from tests.conftest import APP_NS

Draw = Callable[[st.SearchStrategy[Any]], Any]

LINK = PropertyType(QName(APP_NS, "link"), PropertyKind.FEATURE)
LABEL = PropertyType(QName(APP_NS, "label"), PropertyKind.SIMPLE)
PART = PropertyType(QName(APP_NS, "part"), PropertyKind.FEATURE)


@dataclass(frozen=True)
class GraphSample:
    """A generated graph: its root, every identified node, and encoder options."""

    root: Feature
    nodes: tuple[Feature, ...]
    reference_template: str | None
    traverse_xlink_depth: int


def reachable_ids(root: Feature) -> set[str]:
    """Return the ids of identified features reachable from ``root`` (root included)."""
    seen: set[str] = set()
    stack: list[Feature] = [root]
    while stack:
        feature: Feature = stack.pop()
        if feature.id is not None:
            if feature.id in seen:
                continue
            seen.add(feature.id)
        for prop in feature.properties:
            if isinstance(prop.value, Feature):
                stack.append(prop.value)
    return seen


@st.composite
def s_feature_graph(draw: Draw, *, max_nodes: int = 8) -> tuple[Feature, tuple[Feature, ...]]:
    """Draw a graph of identified nodes plus anonymous leaves; returns (root, nodes)."""
    n: int = draw(st.integers(min_value=1, max_value=max_nodes))
    nodes: tuple[Feature, ...] = tuple(
        Feature(QName(APP_NS, "Node"), id=f"N{i}") for i in range(n)
    )
    idx = st.integers(min_value=0, max_value=n - 1)

    edges: list[tuple[int, int]] = draw(st.lists(st.tuples(idx, idx), max_size=3 * n))
    for source, target in edges:
        nodes[source].add_property(LINK, nodes[target])

    owners: list[int] = draw(st.lists(idx, max_size=n))
    for k, owner in enumerate(owners):
        leaf = Feature(QName(APP_NS, "Leaf"))
        leaf.add_property(LABEL, f"leaf-{k}")
        nodes[owner].add_property(PART, leaf)

    return nodes[0], nodes


@st.composite
def s_graph_sample(draw: Draw) -> GraphSample:
    """Draw a feature graph together with a template and a depth budget."""
    root, nodes = draw(s_feature_graph())
    template: str | None = draw(st.sampled_from([None, "urn:x:{}", "http://h/wfs?id={}"]))
    depth: int = draw(st.integers(min_value=-1, max_value=4))
    return GraphSample(root, nodes, template, depth)
