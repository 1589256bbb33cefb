"""Star navigation engine — graph store, matching, star layout, camera and highlight state."""

from src.engine.camera import BoundingBox, Camera, CameraController, Viewport
from src.engine.graph_store import GraphStore, LoadReport
from src.engine.highlight import HighlightMode, HighlightState, derive_styles
from src.engine.loader import GraphDocumentLoader
from src.engine.matcher import Matcher, MatchResult, MatchStatus
from src.engine.navigation import (
    LoadStatus,
    LoadTicket,
    NavigationController,
    NavigationState,
    NodeClicked,
    NodeDoubleClicked,
    Pan,
    QueryChanged,
    RenderSnapshot,
    Reset,
    StageClicked,
    Zoom,
    reduce,
)
from src.engine.star_builder import StarSubgraph, StarSubgraphBuilder

__all__ = [
    "BoundingBox",
    "Camera",
    "CameraController",
    "Viewport",
    "GraphStore",
    "LoadReport",
    "HighlightMode",
    "HighlightState",
    "derive_styles",
    "GraphDocumentLoader",
    "Matcher",
    "MatchResult",
    "MatchStatus",
    "LoadStatus",
    "LoadTicket",
    "NavigationController",
    "NavigationState",
    "NodeClicked",
    "NodeDoubleClicked",
    "Pan",
    "QueryChanged",
    "RenderSnapshot",
    "Reset",
    "StageClicked",
    "Zoom",
    "reduce",
    "StarSubgraph",
    "StarSubgraphBuilder",
]
