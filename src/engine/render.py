"""
Render adapter — snapshot -> plain payloads.

``snapshot_to_payload`` produces the JSON-ready dict served by the
gateway.  ``to_sigma_graph`` maps the neutral style records onto the node
and edge attribute names a sigma.js renderer reads.
"""

from typing import Any

from src.engine.navigation import RenderSnapshot
from src.shared.models import Node


def _node_info(node: Node | None) -> dict[str, Any] | None:
    if node is None:
        return None
    return {"key": node.key, "label": node.label, "description": node.description}


def snapshot_to_payload(snapshot: RenderSnapshot) -> dict[str, Any]:
    """Serialize a RenderSnapshot for JSON output."""
    return {
        "revision": snapshot.revision,
        "focus_key": snapshot.focus_key,
        "selection_key": snapshot.selection_key,
        "query": {"key": snapshot.key_query, "label": snapshot.label_query},
        "match_status": snapshot.match_status.value,
        "match_count": snapshot.match_count,
        "no_match": snapshot.no_match,
        "nodes": [
            {
                "key": rn.node.key,
                "label": rn.node.label,
                "x": rn.node.position.x if rn.node.position else 0.0,
                "y": rn.node.position.y if rn.node.position else 0.0,
                "style": {
                    "emphasis": rn.style.emphasis.value,
                    "color": rn.style.color,
                    "size": rn.style.size,
                    "label_weight": rn.style.label_weight,
                    "label_size": rn.style.label_size,
                    "border_size": rn.style.border_size,
                    "z_index": rn.style.z_index,
                },
            }
            for rn in snapshot.nodes
        ],
        "edges": [
            {
                "source": rendered.edge.source,
                "target": rendered.edge.target,
                "style": {
                    "emphasized": rendered.style.emphasized,
                    "color": rendered.style.color,
                    "width": rendered.style.width,
                    "z_index": rendered.style.z_index,
                },
            }
            for rendered in snapshot.edges
        ],
        "camera": {
            "x": snapshot.camera.x,
            "y": snapshot.camera.y,
            "ratio": snapshot.camera.ratio,
        },
        "info": _node_info(snapshot.info),
        "load_status": snapshot.load_status.value,
        "load_error": snapshot.load_error,
    }


def to_sigma_graph(snapshot: RenderSnapshot) -> dict[str, Any]:
    """Node/edge attribute dicts in sigma.js naming (camera state included)."""
    nodes = []
    for rn in snapshot.nodes:
        style = rn.style
        nodes.append({
            "key": rn.node.key,
            "attributes": {
                "label": rn.node.label,
                "x": rn.node.position.x if rn.node.position else 0.0,
                "y": rn.node.position.y if rn.node.position else 0.0,
                "color": style.color,
                "size": style.size,
                "labelFont": f"{'bold ' if style.label_weight == 'bold' else ''}{style.label_size}px sans-serif",
                "labelColor": "#fff",
                "labelBackground": "#222",
                "borderColor": "#fff",
                "borderSize": style.border_size,
                "zIndex": style.z_index,
                "highlighted": style.emphasis.value == "focus",
            },
        })

    edges = [
        {
            "key": f"e{i}",
            "source": rendered.edge.source,
            "target": rendered.edge.target,
            "attributes": {
                "color": rendered.style.color,
                "size": rendered.style.width,
                "zIndex": rendered.style.z_index,
            },
        }
        for i, rendered in enumerate(snapshot.edges)
    ]
    camera = snapshot.camera
    return {
        "nodes": nodes,
        "edges": edges,
        "camera": {"x": camera.x, "y": camera.y, "ratio": camera.ratio},
    }
