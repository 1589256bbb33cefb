"""
Graph Store — in-memory node/edge dataset for the navigation engine.

Holds the full graph behind a key index and an adjacency index, both
built once per ``load``.  A load never mutates the live indexes: the new
ones are assembled first and swapped in together, so readers only ever
see the old graph or the new one.

Load policy:
  - Duplicate node keys: last write wins.  The node keeps the iteration
    position of its first occurrence; a warning is recorded.
  - Edges with an unknown endpoint are dropped; a warning is recorded.
"""

import logging
from dataclasses import dataclass, field

from src.shared.models import Edge, Graph, Node

logger = logging.getLogger("engine.graph_store")


@dataclass(frozen=True)
class LoadReport:
    """What a ``GraphStore.load`` call accepted and what it had to fix."""

    node_count: int = 0
    edge_count: int = 0
    duplicate_keys: tuple[str, ...] = ()
    dropped_edges: tuple[Edge, ...] = ()

    @property
    def warnings(self) -> list[str]:
        messages = [f"Duplicate node key {k!r}: last definition wins" for k in self.duplicate_keys]
        messages.extend(
            f"Dropped edge {e.source!r} -> {e.target!r}: unknown endpoint"
            for e in self.dropped_edges
        )
        return messages


@dataclass
class _Indexes:
    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    adjacency: dict[str, list[Edge]] = field(default_factory=dict)


class GraphStore:
    """Key-indexed graph with O(1) node lookup and neighbor enumeration."""

    def __init__(self, graph: Graph | None = None) -> None:
        self._idx = _Indexes()
        if graph is not None:
            self.load(graph)

    # ─── Loading ──────────────────────────────────────────

    def load(self, graph: Graph) -> LoadReport:
        """Replace the whole dataset with ``graph``.

        Args:
            graph: Parsed graph document.

        Returns:
            LoadReport listing duplicate keys and dropped edges.
        """
        nodes: dict[str, Node] = {}
        duplicates: list[str] = []
        for node in graph.nodes:
            if node.key in nodes:
                duplicates.append(node.key)
            # dict assignment keeps the first insertion position
            nodes[node.key] = node

        edges: list[Edge] = []
        dropped: list[Edge] = []
        adjacency: dict[str, list[Edge]] = {key: [] for key in nodes}
        for edge in graph.edges:
            if edge.source not in nodes or edge.target not in nodes:
                dropped.append(edge)
                continue
            edges.append(edge)
            adjacency[edge.source].append(edge)
            if edge.target != edge.source:
                adjacency[edge.target].append(edge)

        self._idx = _Indexes(nodes=nodes, edges=edges, adjacency=adjacency)

        report = LoadReport(
            node_count=len(nodes),
            edge_count=len(edges),
            duplicate_keys=tuple(duplicates),
            dropped_edges=tuple(dropped),
        )
        for warning in report.warnings:
            logger.warning(warning)
        logger.info(
            "Graph loaded: %d nodes, %d edges (%d warnings)",
            report.node_count, report.edge_count, len(report.warnings),
        )
        return report

    # ─── Queries ──────────────────────────────────────────

    @property
    def nodes(self) -> list[Node]:
        """Nodes in document order."""
        return list(self._idx.nodes.values())

    @property
    def edges(self) -> list[Edge]:
        """Valid edges in document order."""
        return list(self._idx.edges)

    def node_by_key(self, key: str) -> Node | None:
        return self._idx.nodes.get(key)

    def neighbors_of(self, key: str) -> list[tuple[Node, Edge]]:
        """Every (other endpoint, edge) pair for edges touching ``key``.

        Self-loops are reported with the node itself as the other endpoint.
        Unknown keys yield an empty list.
        """
        return [
            (self._idx.nodes[edge.other(key)], edge)
            for edge in self._idx.adjacency.get(key, [])
        ]

    def first_node(self) -> Node | None:
        """Default focus: the first node in document order."""
        return next(iter(self._idx.nodes.values()), None)

    def to_graph(self) -> Graph:
        """The currently loaded dataset as a plain ``Graph`` (for export)."""
        return Graph(nodes=tuple(self._idx.nodes.values()), edges=tuple(self._idx.edges))

    def __len__(self) -> int:
        return len(self._idx.nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._idx.nodes
