"""
Star Subgraph Builder — one-hop view around a focus node.

The star is the focus node plus every node sharing an edge with it, and
only the edges that connect the focus to those neighbors.  Edges between
two neighbors are left out even when both endpoints are in view.

Layout is radial: the center sits at the origin and the i-th neighbor
(in discovery order) at angle ``i * 2π / max(1, n)`` on a circle of
fixed radius.
"""

import logging
import math
from dataclasses import dataclass

from src.engine.graph_store import GraphStore
from src.shared.exceptions import InvalidFocusError
from src.shared.models import Edge, Graph, Node

logger = logging.getLogger("engine.star_builder")

DEFAULT_RADIUS = 250.0


@dataclass(frozen=True)
class StarSubgraph:
    """A positioned star: center at (0, 0), neighbors on the circle."""

    center: Node
    neighbors: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @property
    def nodes(self) -> tuple[Node, ...]:
        return (self.center, *self.neighbors)

    def keys(self) -> list[str]:
        return [n.key for n in self.nodes]

    def __contains__(self, key: object) -> bool:
        return any(n.key == key for n in self.nodes)

    def to_graph(self) -> Graph:
        return Graph(nodes=self.nodes, edges=self.edges)


def radial_positions(count: int, radius: float) -> list[tuple[float, float]]:
    """Positions for ``count`` nodes evenly spaced on a circle, starting at angle 0."""
    step = 2 * math.pi / max(1, count)
    return [(radius * math.cos(i * step), radius * math.sin(i * step)) for i in range(count)]


class StarSubgraphBuilder:
    """Builds star subgraphs from a GraphStore."""

    def __init__(self, store: GraphStore, radius: float = DEFAULT_RADIUS) -> None:
        self._store = store
        self._radius = radius

    def build(self, focus_key: str) -> StarSubgraph:
        """Build the positioned star around ``focus_key``.

        Multi-edges between the center and the same neighbor collapse to
        the first one encountered; self-loops contribute nothing.

        Raises:
            InvalidFocusError: If the key is not in the store.
        """
        center = self._store.node_by_key(focus_key)
        if center is None:
            raise InvalidFocusError(focus_key)

        neighbors: list[Node] = []
        edges: list[Edge] = []
        seen: set[str] = set()
        for node, edge in self._store.neighbors_of(focus_key):
            if node.key == focus_key or node.key in seen:
                continue
            seen.add(node.key)
            neighbors.append(node)
            edges.append(edge)

        positions = radial_positions(len(neighbors), self._radius)
        star = StarSubgraph(
            center=center.at(0.0, 0.0),
            neighbors=tuple(n.at(x, y) for n, (x, y) in zip(neighbors, positions)),
            edges=tuple(edges),
        )
        logger.debug("Star built around %r: %d neighbors", focus_key, len(neighbors))
        return star
