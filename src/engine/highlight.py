"""
Highlight State Machine — selection/search emphasis for the star view.

States:
  IDLE                                  nothing selected
  SELECTED(key)                         a node picked by pointer
  SEARCHING(key_query, label_query, m)  a text search, ``m`` the match or None

Transitions are pure functions returning a new ``HighlightState``.  Style
derivation is a pure, total function of (state, subgraph) that returns
neutral style records; mapping them onto a particular renderer is the
job of ``src.engine.render``.
"""

from dataclasses import dataclass, field
from enum import Enum

from src.engine.star_builder import StarSubgraph
from src.shared.models import Node


class HighlightMode(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    SEARCHING = "searching"


@dataclass(frozen=True)
class HighlightState:
    mode: HighlightMode = HighlightMode.IDLE
    selected_key: str | None = None
    key_query: str | None = None
    label_query: str | None = None
    match_key: str | None = None

    @property
    def highlight_key(self) -> str | None:
        """The node this state asks to emphasize, if any."""
        if self.mode is HighlightMode.SELECTED:
            return self.selected_key
        if self.mode is HighlightMode.SEARCHING:
            return self.match_key
        return None


IDLE = HighlightState()


# ─── Transitions ─────────────────────────────────────────


def on_query_changed(
    state: HighlightState,
    key_query: str | None,
    label_query: str | None,
    match_key: str | None,
) -> HighlightState:
    return HighlightState(
        mode=HighlightMode.SEARCHING,
        key_query=key_query,
        label_query=label_query,
        match_key=match_key,
    )


def on_node_clicked(state: HighlightState, key: str) -> HighlightState:
    return HighlightState(mode=HighlightMode.SELECTED, selected_key=key)


def on_node_double_clicked(state: HighlightState, key: str) -> HighlightState:
    # Same emphasis as a click; re-rooting and query clearing are
    # navigation concerns.
    return HighlightState(mode=HighlightMode.SELECTED, selected_key=key)


def on_stage_clicked(state: HighlightState) -> HighlightState:
    if state.mode is HighlightMode.SEARCHING:
        return state
    return IDLE


def on_reset(state: HighlightState) -> HighlightState:
    return IDLE


# ─── Style records ───────────────────────────────────────


class Emphasis(str, Enum):
    FOCUS = "focus"
    NEIGHBOR = "neighbor"
    BASELINE = "baseline"


@dataclass(frozen=True)
class NodeStyle:
    emphasis: Emphasis
    color: str
    size: float
    label_weight: str
    label_size: int
    border_size: float
    z_index: int


@dataclass(frozen=True)
class EdgeStyle:
    emphasized: bool
    color: str
    width: float
    z_index: int


@dataclass(frozen=True)
class StyleSheet:
    """Styles for every node and edge of one subgraph."""

    target_key: str | None = None
    nodes: dict[str, NodeStyle] = field(default_factory=dict)
    edges: tuple[EdgeStyle, ...] = ()


FOCUS_COLOR = "#ffeb3b"
NEIGHBOR_COLOR = "#1976d2"
DEFAULT_NODE_COLOR = "#888"
DEFAULT_NODE_SIZE = 8.0
EDGE_HIGHLIGHT_COLOR = "#ff9800"
EDGE_COLOR = "#bbb"


def _focus_style() -> NodeStyle:
    return NodeStyle(Emphasis.FOCUS, FOCUS_COLOR, 28.0, "bold", 24, 4.0, 10)


def _neighbor_style() -> NodeStyle:
    return NodeStyle(Emphasis.NEIGHBOR, NEIGHBOR_COLOR, 18.0, "bold", 18, 2.0, 5)


def _baseline_style(node: Node) -> NodeStyle:
    return NodeStyle(
        Emphasis.BASELINE,
        node.color or DEFAULT_NODE_COLOR,
        node.size if node.size is not None else DEFAULT_NODE_SIZE,
        "normal",
        14,
        1.0,
        1,
    )


def derive_styles(state: HighlightState, subgraph: StarSubgraph | None) -> StyleSheet:
    """Compute node and edge styles for ``subgraph`` under ``state``.

    The emphasized target is the state's highlight key when that node is
    in view, otherwise the subgraph center.  Nodes sharing a subgraph
    edge with the target get the secondary style.
    """
    if subgraph is None:
        return StyleSheet()

    target = state.highlight_key
    if target is None or target not in subgraph:
        target = subgraph.center.key

    adjacent = {e.other(target) for e in subgraph.edges if e.touches(target)}
    adjacent.discard(target)

    nodes: dict[str, NodeStyle] = {}
    for node in subgraph.nodes:
        if node.key == target:
            nodes[node.key] = _focus_style()
        elif node.key in adjacent:
            nodes[node.key] = _neighbor_style()
        else:
            nodes[node.key] = _baseline_style(node)

    edges = tuple(
        EdgeStyle(True, EDGE_HIGHLIGHT_COLOR, 4.5, 10)
        if edge.touches(target)
        else EdgeStyle(False, EDGE_COLOR, 1.5, 1)
        for edge in subgraph.edges
    )
    return StyleSheet(target_key=target, nodes=nodes, edges=edges)
