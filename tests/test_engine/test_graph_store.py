"""
Unit tests for GraphStore load policy and lookups.
"""

import logging

from src.engine.graph_store import GraphStore, LoadReport
from src.shared.models import Edge, Graph, Node


# ─── Loading ─────────────────────────────────────────────────


class TestLoad:
    def test_empty_store(self):
        store = GraphStore()
        assert len(store) == 0
        assert store.nodes == []
        assert store.edges == []
        assert store.first_node() is None

    def test_load_reports_counts(self, abc_graph):
        report = GraphStore().load(abc_graph)
        assert report == LoadReport(node_count=3, edge_count=2)
        assert report.warnings == []

    def test_nodes_keep_document_order(self, abc_store):
        assert [n.key for n in abc_store.nodes] == ["A", "B", "C"]
        assert abc_store.first_node().key == "A"

    def test_duplicate_key_last_write_wins_first_position(self):
        graph = Graph(
            nodes=(
                Node("A", label="first"),
                Node("B"),
                Node("A", label="second"),
            ),
        )
        store = GraphStore()
        report = store.load(graph)

        assert [n.key for n in store.nodes] == ["A", "B"]
        assert store.node_by_key("A").label == "second"
        assert report.duplicate_keys == ("A",)
        assert "Duplicate node key 'A'" in report.warnings[0]

    def test_dangling_edges_are_dropped(self, caplog):
        graph = Graph(
            nodes=(Node("A"), Node("B")),
            edges=(Edge("A", "B"), Edge("A", "ghost"), Edge("nobody", "B")),
        )
        store = GraphStore()
        with caplog.at_level(logging.WARNING, logger="engine.graph_store"):
            report = store.load(graph)

        assert store.edges == [Edge("A", "B")]
        assert report.edge_count == 1
        assert report.dropped_edges == (Edge("A", "ghost"), Edge("nobody", "B"))
        assert len(report.warnings) == 2
        assert "ghost" in caplog.text

    def test_reload_replaces_everything(self, abc_store):
        abc_store.load(Graph(nodes=(Node("X"),)))
        assert [n.key for n in abc_store.nodes] == ["X"]
        assert "A" not in abc_store
        assert abc_store.neighbors_of("A") == []


# ─── Lookups ─────────────────────────────────────────────────


class TestLookups:
    def test_node_by_key(self, abc_store):
        assert abc_store.node_by_key("B").label == "Node B"
        assert abc_store.node_by_key("missing") is None

    def test_contains_is_case_sensitive(self, abc_store):
        assert "A" in abc_store
        assert "a" not in abc_store

    def test_neighbors_are_undirected(self, abc_store):
        hub = [(n.key, e) for n, e in abc_store.neighbors_of("A")]
        assert hub == [("B", Edge("A", "B")), ("C", Edge("A", "C"))]

        leaf = [(n.key, e) for n, e in abc_store.neighbors_of("C")]
        assert leaf == [("A", Edge("A", "C"))]

    def test_self_loop_listed_once(self):
        store = GraphStore(Graph(nodes=(Node("A"),), edges=(Edge("A", "A"),)))
        pairs = store.neighbors_of("A")
        assert len(pairs) == 1
        assert pairs[0][0].key == "A"

    def test_unknown_key_has_no_neighbors(self, abc_store):
        assert abc_store.neighbors_of("Z") == []

    def test_to_graph_round_trips(self, abc_graph, abc_store):
        assert abc_store.to_graph() == abc_graph
