"""
Unit tests for the YAML graph document codec.
"""

import pytest
import yaml

from src.shared.codec import dump_document, parse_document
from src.shared.exceptions import DocumentParseError, GraphLoadError
from src.shared.models import Edge, Graph, Node


# ─── Parsing ─────────────────────────────────────────────────


class TestParse:
    def test_parse_document(self, abc_document):
        graph = parse_document(abc_document)
        assert graph.nodes[0] == Node(
            key="A", label="Alpha", description="The hub", color="#123456", size=12.0,
        )
        assert graph.nodes[1].color is None
        assert graph.nodes[1].size is None
        assert graph.edges == (Edge("A", "B"), Edge("A", "C"))

    @pytest.mark.parametrize("text", ["", "nodes:\n", "nodes: []\nedges:\n", "{}"])
    def test_missing_lists_default_empty(self, text):
        assert parse_document(text) == Graph()

    def test_numeric_keys_become_strings(self):
        graph = parse_document("nodes:\n  - key: 2024\n    label: 7\nedges:\n  - {source: 2024, target: 2024}\n")
        assert graph.nodes[0].key == "2024"
        assert graph.nodes[0].label == "7"
        assert graph.edges[0] == Edge("2024", "2024")

    def test_null_text_fields(self):
        graph = parse_document("nodes:\n  - key: a\n    label: null\n    description: ~\n")
        assert graph.nodes[0] == Node("a")

    @pytest.mark.parametrize("text", [
        "nodes: [",
        "- a\n- b\n",
        "just a string",
        "nodes:\n  - label: no key\n",
        "nodes:\n  - key: ''\n",
        "edges:\n  - source: a\n",
        "nodes:\n  - key: a\n    size: huge\n",
    ])
    def test_invalid_documents(self, text):
        with pytest.raises(DocumentParseError):
            parse_document(text)

    def test_parse_error_is_load_error(self):
        with pytest.raises(GraphLoadError):
            parse_document("[1, 2]")

    def test_duplicates_and_dangling_edges_pass_through(self):
        graph = parse_document(
            "nodes:\n  - key: a\n  - key: a\nedges:\n  - {source: a, target: ghost}\n"
        )
        assert graph.keys() == ["a", "a"]
        assert graph.edge_pairs() == [("a", "ghost")]


# ─── Dumping ─────────────────────────────────────────────────


class TestDump:
    def test_dump_schema(self):
        graph = Graph(
            nodes=(Node("a", label="A", color="#fff", size=3.0), Node("b", size=2.5)),
            edges=(Edge("a", "b"),),
        )
        data = yaml.safe_load(dump_document(graph))
        assert data == {
            "nodes": [
                {"key": "a", "label": "A", "description": "", "color": "#fff", "size": 3},
                {"key": "b", "label": "", "description": "", "size": 2.5},
            ],
            "edges": [{"source": "a", "target": "b"}],
        }

    def test_positions_not_written(self):
        text = dump_document(Graph(nodes=(Node("a").at(10, 20),)))
        assert "position" not in text
        assert parse_document(text) == Graph(nodes=(Node("a"),))

    def test_round_trip(self, abc_document):
        graph = parse_document(abc_document)
        assert parse_document(dump_document(graph)) == graph

    def test_unicode_labels(self):
        graph = Graph(nodes=(Node("k", label="Zürich"),))
        text = dump_document(graph)
        assert "Zürich" in text
        assert parse_document(text) == graph
