"""
Graph Document Codec — YAML <-> Graph.

The persisted document is a mapping with two top-level lists::

    nodes:
      - key: crm
        label: CRM
        description: Customer relationship management
        color: "#1976d2"   # optional
        size: 12           # optional
    edges:
      - source: crm
        target: erp

Parsing validates the raw mapping against pydantic schemas and converts
it into the frozen ``Graph`` model.  Duplicate keys and dangling edges
are *not* rejected here; the graph store applies that policy on load.
"""

from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from src.shared.exceptions import DocumentParseError
from src.shared.models import Edge, Graph, Node


def _scalar_to_str(value: Any) -> Any:
    # YAML happily turns `key: 2024` into an int
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class NodeRecord(BaseModel):
    """Schema of a single entry in the ``nodes`` list."""

    key: str = Field(..., min_length=1, description="Unique node identifier")
    label: str = Field("", description="Display label")
    description: str = Field("", description="Free-text description")
    color: str | None = Field(None, description="Optional node color")
    size: float | None = Field(None, description="Optional numeric weight")

    @field_validator("key", "label", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return _scalar_to_str(value)


class EdgeRecord(BaseModel):
    """Schema of a single entry in the ``edges`` list."""

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)

    @field_validator("source", "target", mode="before")
    @classmethod
    def _endpoint(cls, value: Any) -> Any:
        return _scalar_to_str(value)


class GraphDocument(BaseModel):
    """Schema of the whole document."""

    nodes: list[NodeRecord] = Field(default_factory=list)
    edges: list[EdgeRecord] = Field(default_factory=list)

    @field_validator("nodes", "edges", mode="before")
    @classmethod
    def _missing_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_graph(self) -> Graph:
        return Graph(
            nodes=tuple(
                Node(
                    key=n.key,
                    label=n.label,
                    description=n.description,
                    color=n.color,
                    size=n.size,
                )
                for n in self.nodes
            ),
            edges=tuple(Edge(source=e.source, target=e.target) for e in self.edges),
        )


def parse_document(text: str) -> Graph:
    """Parse a YAML graph document.

    Args:
        text: Raw document text.

    Returns:
        The parsed graph, in document order.

    Raises:
        DocumentParseError: If the text is not YAML, is not a mapping, or
            a node/edge entry is missing a required field.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Graph document must be a mapping, got {type(data).__name__}"
        )

    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as exc:
        raise DocumentParseError(f"Invalid graph document: {exc}") from exc

    return document.to_graph()


def _node_to_dict(node: Node) -> dict[str, Any]:
    d: dict[str, Any] = {
        "key": node.key,
        "label": node.label,
        "description": node.description,
    }
    if node.color is not None:
        d["color"] = node.color
    if node.size is not None:
        d["size"] = int(node.size) if float(node.size).is_integer() else node.size
    return d


def dump_document(graph: Graph) -> str:
    """Serialize a graph back to the YAML document schema (positions dropped)."""
    data = {
        "nodes": [_node_to_dict(n) for n in graph.nodes],
        "edges": [{"source": e.source, "target": e.target} for e in graph.edges],
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
