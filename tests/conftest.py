"""Shared fixtures: small graphs used across the engine and gateway tests."""

import pytest

from src.engine.graph_store import GraphStore
from src.shared.models import Edge, Graph, Node


def _build_graph(keys: list[str], pairs: list[tuple[str, str]]) -> Graph:
    return Graph(
        nodes=tuple(Node(key=k, label=f"Node {k}") for k in keys),
        edges=tuple(Edge(s, t) for s, t in pairs),
    )


@pytest.fixture
def make_graph():
    """Factory fixture: ``make_graph(keys, pairs)`` labels each node ``Node <key>``."""
    return _build_graph


@pytest.fixture
def abc_graph() -> Graph:
    """A-B, A-C: A is the hub, B and C are leaves."""
    return _build_graph(["A", "B", "C"], [("A", "B"), ("A", "C")])


@pytest.fixture
def abc_store(abc_graph) -> GraphStore:
    return GraphStore(abc_graph)


ABC_DOCUMENT = """\
nodes:
  - key: A
    label: Alpha
    description: The hub
    color: "#123456"
    size: 12
  - key: B
    label: Beta
    description: First leaf
  - key: C
    label: Gamma
    description: Second leaf
edges:
  - source: A
    target: B
  - source: A
    target: C
"""


@pytest.fixture
def abc_document() -> str:
    return ABC_DOCUMENT
