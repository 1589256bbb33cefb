"""
Navigation routes — GET /api/navigation and POST /api/navigation/<event>.

Each POST turns its body into one navigation event, dispatches it under
the controller lock and returns the resulting snapshot.
"""

from typing import Any, Callable

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from src.engine.navigation import (
    NavigationController,
    NavigationEvent,
    NavigationState,
    NodeClicked,
    NodeDoubleClicked,
    Pan,
    QueryChanged,
    Reset,
    StageClicked,
    Zoom,
)
from src.engine.render import snapshot_to_payload, to_sigma_graph
from src.shared.logging import setup_logging

logger = setup_logging("gateway.routes.navigation", level="INFO")

router = APIRouter()


# ─── Request Models ─────────────────────────────────────────


class QueryRequest(BaseModel):
    """Request model for POST /api/navigation/query.

    Omitted fields keep their current value; an explicit null or blank
    string clears that query.
    """

    key_query: str | None = Field(None, description="Key search text, '*' is a wildcard")
    label_query: str | None = Field(None, description="Label search text, '*' is a wildcard")


class NodeRequest(BaseModel):
    """Request model for click and double-click events."""

    key: str = Field(..., description="Key of the node that was clicked")


class ZoomRequest(BaseModel):
    """Request model for POST /api/navigation/zoom."""

    factor: float = Field(..., gt=0, description="Ratio multiplier; >1 zooms out, <1 zooms in")


class PanRequest(BaseModel):
    """Request model for POST /api/navigation/pan."""

    dx: float = Field(0.0, description="Horizontal camera shift in graph units")
    dy: float = Field(0.0, description="Vertical camera shift in graph units")


# ─── Helper Functions ───────────────────────────────────────


def _controller(request: Request) -> NavigationController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Navigation controller not initialized")
    return controller


EventFactory = Callable[[NavigationState], NavigationEvent]


async def _dispatch(request: Request, event: NavigationEvent | EventFactory) -> dict[str, Any]:
    """Dispatch under the controller lock.

    ``event`` may be a factory; it is called with the state current once
    the lock is held.
    """
    controller = _controller(request)
    try:
        async with request.app.state.lock:
            if callable(event):
                event = event(controller.state)
            snapshot = controller.dispatch(event)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to dispatch %s", type(event).__name__)
        raise HTTPException(status_code=500, detail=f"Navigation error: {str(e)}")
    return snapshot_to_payload(snapshot)


# ─── GET /api/navigation ────────────────────────────────────


@router.get("/navigation")
async def get_navigation(
    request: Request,
    response_format: str = Query("snapshot", alias="format", description="Response shape: snapshot or sigma"),
) -> dict[str, Any]:
    """Return the current render snapshot.

    ``format=sigma`` returns node/edge attribute dictionaries ready for a
    sigma.js renderer instead of the plain snapshot.
    """
    snapshot = _controller(request).snapshot()
    if response_format == "sigma":
        return to_sigma_graph(snapshot)
    if response_format != "snapshot":
        raise HTTPException(status_code=400, detail=f"Unknown format: {response_format!r}")
    return snapshot_to_payload(snapshot)


# ─── POST /api/navigation/<event> ───────────────────────────


@router.post("/navigation/query")
async def set_query(body: QueryRequest, request: Request) -> dict[str, Any]:
    """Update the key and/or label query and re-run the search."""
    fields = body.model_fields_set

    def merge(state: NavigationState) -> QueryChanged:
        key_query = body.key_query if "key_query" in fields else state.key_query
        label_query = body.label_query if "label_query" in fields else state.label_query
        logger.info("Query key=%r label=%r", key_query, label_query)
        return QueryChanged(key_query, label_query)

    return await _dispatch(request, merge)


@router.post("/navigation/click")
async def click_node(body: NodeRequest, request: Request) -> dict[str, Any]:
    """Select a node and center the star on it."""
    return await _dispatch(request, NodeClicked(body.key))


@router.post("/navigation/double-click")
async def double_click_node(body: NodeRequest, request: Request) -> dict[str, Any]:
    """Clear the queries and recenter on the node."""
    return await _dispatch(request, NodeDoubleClicked(body.key))


@router.post("/navigation/stage-click")
async def click_stage(request: Request) -> dict[str, Any]:
    return await _dispatch(request, StageClicked())


@router.post("/navigation/reset")
async def reset_view(request: Request) -> dict[str, Any]:
    return await _dispatch(request, Reset())


@router.post("/navigation/zoom")
async def zoom(body: ZoomRequest, request: Request) -> dict[str, Any]:
    return await _dispatch(request, Zoom(body.factor))


@router.post("/navigation/pan")
async def pan(body: PanRequest, request: Request) -> dict[str, Any]:
    return await _dispatch(request, Pan(body.dx, body.dy))
