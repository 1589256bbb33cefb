"""
Health route — GET /api/health.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from src.engine.navigation import LoadStatus

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for GET /api/health."""

    status: str = Field(..., description="healthy, degraded or starting")
    load_status: str = Field(..., description="State of the most recent graph load")
    load_error: str | None = Field(None, description="Error from the last failed load")
    node_count: int = Field(0, description="Nodes in the loaded graph")
    edge_count: int = Field(0, description="Edges in the loaded graph")


@router.get("/health", response_model=HealthResponse)
async def get_health(request: Request) -> HealthResponse:
    """Report whether a graph is loaded.

    - healthy: last load succeeded
    - degraded: last load failed (a previous graph may still be served)
    - starting: no load has finished yet
    """
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        return HealthResponse(status="starting", load_status=LoadStatus.IDLE.value)

    if controller.load_status is LoadStatus.LOADED:
        status = "healthy"
    elif controller.load_status is LoadStatus.FAILED:
        status = "degraded"
    else:
        status = "starting"

    return HealthResponse(
        status=status,
        load_status=controller.load_status.value,
        load_error=controller.load_error,
        node_count=controller.node_count,
        edge_count=controller.edge_count,
    )
