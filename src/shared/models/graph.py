"""
Graph Models

Data classes for the in-memory node/edge model shared by the codec,
the graph store and the navigation engine.
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Position:
    """Layout coordinates in graph space."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Node:
    """An entity in the graph. ``position`` is assigned by layout only."""

    key: str
    label: str = ""
    description: str = ""
    color: str | None = None
    size: float | None = None
    position: Position | None = None

    def at(self, x: float, y: float) -> "Node":
        """Return a copy of this node placed at (x, y)."""
        return replace(self, position=Position(x, y))


@dataclass(frozen=True)
class Edge:
    """An undirected relation between two node keys."""

    source: str
    target: str

    def touches(self, key: str) -> bool:
        return self.source == key or self.target == key

    def other(self, key: str) -> str:
        """The endpoint opposite ``key``."""
        return self.target if self.source == key else self.source


@dataclass(frozen=True)
class Graph:
    """Ordered nodes plus ordered edges, as read from a graph document."""

    nodes: tuple[Node, ...] = field(default_factory=tuple)
    edges: tuple[Edge, ...] = field(default_factory=tuple)

    def keys(self) -> list[str]:
        return [n.key for n in self.nodes]

    def edge_pairs(self) -> list[tuple[str, str]]:
        return [(e.source, e.target) for e in self.edges]
