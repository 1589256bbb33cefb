"""
Navigation Controller — event -> state -> renderable snapshot.

Every user action is an event object.  ``reduce`` turns (state, event,
store) into the next ``NavigationState`` without side effects; the
controller then runs the view pipeline in a fixed order:

  1. match / focus resolution   (inside ``reduce``)
  2. star subgraph + layout     (only when focus or graph changed)
  3. camera fit, then clamp     (clamp always runs after the new layout)
  4. style derivation           (every event)

Zoom and pan only touch the camera.  A search that finds nothing yields
an explicit empty snapshot with ``no_match`` set and leaves the camera
where it was.

Graph loads go through ``begin_load`` / ``complete_load`` / ``fail_load``.
Each ``begin_load`` issues a higher sequence number, and only the most
recently issued ticket may install a graph; older results are discarded
whenever they arrive.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol, Union

from src.engine.camera import Camera, CameraController, Viewport
from src.engine.graph_store import GraphStore, LoadReport
from src.engine.highlight import (
    IDLE,
    EdgeStyle,
    HighlightMode,
    HighlightState,
    NodeStyle,
    derive_styles,
    on_node_clicked,
    on_node_double_clicked,
    on_query_changed,
    on_reset,
    on_stage_clicked,
)
from src.engine.matcher import Matcher, MatchStatus, normalize_query
from src.engine.star_builder import StarSubgraph, StarSubgraphBuilder
from src.shared.codec import dump_document
from src.shared.config import BaseNavigatorSettings
from src.shared.exceptions import GraphLoadError, InvalidFocusError
from src.shared.models import Edge, Graph, Node

logger = logging.getLogger("engine.navigation")


# ─── Events ──────────────────────────────────────────────


@dataclass(frozen=True)
class QueryChanged:
    key_query: str | None = None
    label_query: str | None = None


@dataclass(frozen=True)
class NodeClicked:
    key: str


@dataclass(frozen=True)
class NodeDoubleClicked:
    key: str


@dataclass(frozen=True)
class StageClicked:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Zoom:
    factor: float


@dataclass(frozen=True)
class Pan:
    dx: float
    dy: float


@dataclass(frozen=True)
class GraphReloaded:
    pass


NavigationEvent = Union[
    QueryChanged, NodeClicked, NodeDoubleClicked, StageClicked, Reset, Zoom, Pan, GraphReloaded
]


# ─── State ───────────────────────────────────────────────


@dataclass(frozen=True)
class NavigationState:
    key_query: str | None = None
    label_query: str | None = None
    focus_key: str | None = None
    highlight: HighlightState = IDLE
    match_status: MatchStatus = MatchStatus.EMPTY

    @property
    def selection(self) -> str | None:
        return self.highlight.highlight_key


def _default_focus(current: str | None, store: GraphStore) -> str | None:
    """Keep the current focus while it exists, else fall back to the first node."""
    if current is not None and current in store:
        return current
    first = store.first_node()
    return first.key if first else None


def _apply_query(
    state: NavigationState, key_query: str | None, label_query: str | None, store: GraphStore
) -> NavigationState:
    result = Matcher(store).match(key_query, label_query)
    if result.status is MatchStatus.EMPTY:
        return NavigationState(
            key_query=key_query,
            label_query=label_query,
            focus_key=_default_focus(state.focus_key, store),
            highlight=IDLE,
            match_status=MatchStatus.EMPTY,
        )
    if result.status is MatchStatus.NOT_FOUND:
        return replace(
            state,
            key_query=key_query,
            label_query=label_query,
            highlight=on_query_changed(state.highlight, key_query, label_query, None),
            match_status=MatchStatus.NOT_FOUND,
        )
    return NavigationState(
        key_query=key_query,
        label_query=label_query,
        focus_key=result.node.key,
        highlight=on_query_changed(state.highlight, key_query, label_query, result.node.key),
        match_status=MatchStatus.FOUND,
    )


def reduce(state: NavigationState, event: NavigationEvent, store: GraphStore) -> NavigationState:
    """Compute the next navigation state. Pure: no store or camera mutation."""
    if isinstance(event, QueryChanged):
        return _apply_query(state, event.key_query, event.label_query, store)

    if isinstance(event, NodeClicked):
        if event.key not in store:
            return state
        return replace(
            state,
            focus_key=event.key,
            highlight=on_node_clicked(state.highlight, event.key),
            match_status=MatchStatus.FOUND,
        )

    if isinstance(event, NodeDoubleClicked):
        if event.key not in store:
            return state
        return NavigationState(
            focus_key=event.key,
            highlight=on_node_double_clicked(state.highlight, event.key),
            match_status=MatchStatus.EMPTY,
        )

    if isinstance(event, StageClicked):
        return replace(state, highlight=on_stage_clicked(state.highlight))

    if isinstance(event, Reset):
        first = store.first_node()
        return NavigationState(
            focus_key=first.key if first else None,
            highlight=on_reset(state.highlight),
        )

    if isinstance(event, GraphReloaded):
        if normalize_query(state.key_query) or normalize_query(state.label_query):
            return _apply_query(state, state.key_query, state.label_query, store)
        highlight = state.highlight
        if highlight.mode is HighlightMode.SELECTED and highlight.selected_key not in store:
            highlight = IDLE
        return replace(
            state,
            focus_key=_default_focus(state.focus_key, store),
            highlight=highlight,
            match_status=MatchStatus.EMPTY,
        )

    # Zoom / Pan: camera only
    return state


# ─── Snapshot ────────────────────────────────────────────


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadTicket:
    sequence: int


@dataclass(frozen=True)
class RenderNode:
    node: Node
    style: NodeStyle


@dataclass(frozen=True)
class RenderEdge:
    edge: Edge
    style: EdgeStyle


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a renderer needs for one frame."""

    revision: int
    focus_key: str | None
    selection_key: str | None
    key_query: str | None
    label_query: str | None
    match_status: MatchStatus
    match_count: int
    nodes: tuple[RenderNode, ...]
    edges: tuple[RenderEdge, ...]
    camera: Camera
    info: Node | None
    load_status: LoadStatus
    load_error: str | None = None

    @property
    def no_match(self) -> bool:
        return self.match_status is MatchStatus.NOT_FOUND

    @property
    def is_empty(self) -> bool:
        return not self.nodes


class DocumentLoader(Protocol):
    async def load(self) -> Graph: ...


# ─── Controller ──────────────────────────────────────────


class NavigationController:
    """Owns the graph store, camera and navigation state.

    All mutation happens through ``dispatch`` and the load entry points.
    """

    def __init__(self, settings: BaseNavigatorSettings | None = None) -> None:
        settings = settings or BaseNavigatorSettings()
        self._radius = settings.star_radius
        self._store = GraphStore()
        self._camera = CameraController(
            viewport=Viewport(
                width=settings.viewport_width,
                height=settings.viewport_height,
                margin=settings.viewport_margin,
            ),
            min_ratio=settings.min_ratio,
            max_ratio=settings.max_ratio,
        )
        self._state = NavigationState()
        self._subgraph: StarSubgraph | None = None
        self._revision = 0
        self._load_sequence = 0
        self._load_status = LoadStatus.IDLE
        self._load_error: str | None = None
        self._load_report: LoadReport | None = None
        self._snapshot = self._emit()

    # ─── Read access ──────────────────────────────────────

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def camera(self) -> Camera:
        return self._camera.camera

    @property
    def subgraph(self) -> StarSubgraph | None:
        return self._subgraph

    @property
    def load_status(self) -> LoadStatus:
        return self._load_status

    @property
    def load_error(self) -> str | None:
        return self._load_error

    @property
    def load_report(self) -> LoadReport | None:
        return self._load_report

    @property
    def node_count(self) -> int:
        return len(self._store)

    @property
    def edge_count(self) -> int:
        return len(self._store.edges)

    def node(self, key: str) -> Node | None:
        return self._store.node_by_key(key)

    def snapshot(self) -> RenderSnapshot:
        return self._snapshot

    # ─── Events ───────────────────────────────────────────

    def dispatch(self, event: NavigationEvent) -> RenderSnapshot:
        """Apply one event and return the resulting snapshot."""
        previous = self._state
        self._state = reduce(previous, event, self._store)

        if isinstance(event, Zoom):
            self._camera.zoom(event.factor)
        elif isinstance(event, Pan):
            self._camera.pan(event.dx, event.dy)
        elif (
            self._state.focus_key != previous.focus_key
            or self._state.match_status != previous.match_status
            or isinstance(event, GraphReloaded)
        ):
            self._rebuild_view()

        logger.debug("Dispatched %s -> focus=%r status=%s",
                     type(event).__name__, self._state.focus_key, self._state.match_status.value)
        self._snapshot = self._emit()
        return self._snapshot

    def set_key_query(self, text: str | None) -> RenderSnapshot:
        return self.dispatch(QueryChanged(text, self._state.label_query))

    def set_label_query(self, text: str | None) -> RenderSnapshot:
        return self.dispatch(QueryChanged(self._state.key_query, text))

    def _rebuild_view(self) -> None:
        state = self._state
        if state.match_status is MatchStatus.NOT_FOUND or state.focus_key is None:
            self._subgraph = None
            return

        try:
            star = StarSubgraphBuilder(self._store, self._radius).build(state.focus_key)
        except InvalidFocusError as exc:
            logger.warning("Falling back to no-match: %s", exc)
            self._subgraph = None
            self._state = replace(state, match_status=MatchStatus.NOT_FOUND)
            return

        self._subgraph = star
        self._camera.fit_to_viewport(star.nodes)
        # runs against the layout just produced
        self._camera.clamp()

    def _emit(self) -> RenderSnapshot:
        state = self._state
        star = self._subgraph
        styles = derive_styles(state.highlight, star)

        if star is None:
            nodes: tuple[RenderNode, ...] = ()
            edges: tuple[RenderEdge, ...] = ()
        else:
            nodes = tuple(RenderNode(n, styles.nodes[n.key]) for n in star.nodes)
            edges = tuple(RenderEdge(e, s) for e, s in zip(star.edges, styles.edges))

        selection = state.selection
        info_key = selection if selection is not None else (star.center.key if star else None)

        self._revision += 1
        return RenderSnapshot(
            revision=self._revision,
            focus_key=state.focus_key,
            selection_key=selection,
            key_query=state.key_query,
            label_query=state.label_query,
            match_status=state.match_status,
            match_count=len(Matcher(self._store).find_all(state.key_query, state.label_query)),
            nodes=nodes,
            edges=edges,
            camera=self._camera.camera,
            info=self._store.node_by_key(info_key) if info_key else None,
            load_status=self._load_status,
            load_error=self._load_error,
        )

    # ─── Loading ──────────────────────────────────────────

    def begin_load(self) -> LoadTicket:
        """Issue a ticket for a new load; supersedes every earlier ticket."""
        self._load_sequence += 1
        self._load_status = LoadStatus.LOADING
        logger.info("Load #%d started", self._load_sequence)
        self._snapshot = self._emit()
        return LoadTicket(self._load_sequence)

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket.sequence == self._load_sequence

    def complete_load(self, ticket: LoadTicket, graph: Graph) -> bool:
        """Install ``graph`` if ``ticket`` is still the latest one.

        Returns:
            True if the graph was installed, False if the ticket was stale.
        """
        if not self.is_current(ticket):
            logger.info("Discarding stale load #%d (latest is #%d)",
                        ticket.sequence, self._load_sequence)
            return False

        store = GraphStore()
        self._load_report = store.load(graph)
        self._store = store
        self._load_status = LoadStatus.LOADED
        self._load_error = None
        self.dispatch(GraphReloaded())
        return True

    def fail_load(self, ticket: LoadTicket, error: Exception | str) -> bool:
        """Record a failed load; the current graph stays in place."""
        if not self.is_current(ticket):
            logger.info("Ignoring failure of stale load #%d", ticket.sequence)
            return False
        self._load_status = LoadStatus.FAILED
        self._load_error = str(error)
        logger.error("Load #%d failed: %s", ticket.sequence, error)
        self._snapshot = self._emit()
        return True

    async def reload(self, loader: DocumentLoader) -> RenderSnapshot:
        """Fetch a document through ``loader`` and install it if still current."""
        ticket = self.begin_load()
        try:
            graph = await loader.load()
        except GraphLoadError as exc:
            self.fail_load(ticket, exc)
        else:
            self.complete_load(ticket, graph)
        return self._snapshot

    # ─── Export ───────────────────────────────────────────

    def export_document(self, scope: str = "full") -> str:
        """Serialize the loaded graph ("full") or the visible star ("view")."""
        if scope == "full":
            return dump_document(self._store.to_graph())
        if scope == "view":
            graph = self._subgraph.to_graph() if self._subgraph else Graph()
            return dump_document(graph)
        raise ValueError(f"Unknown export scope: {scope!r}")
