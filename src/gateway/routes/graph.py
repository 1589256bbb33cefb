"""
Graph document routes — POST /upload-graph, GET /api/graph/export and
POST /api/graph/reload.
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any

from fastapi import APIRouter, File, HTTPException, Query, Request, Response, UploadFile
from pydantic import BaseModel, Field

from src.engine.loader import GraphDocumentLoader, is_remote
from src.engine.navigation import LoadStatus, NavigationController
from src.engine.render import snapshot_to_payload
from src.shared.codec import parse_document
from src.shared.exceptions import DocumentParseError, UploadError
from src.shared.logging import setup_logging

logger = setup_logging("gateway.routes.graph", level="INFO")

api_router = APIRouter()
upload_router = APIRouter()

EXPORT_FILENAME = "graph.yaml"
YAML_MEDIA_TYPE = "application/x-yaml"


# ─── Response Models ─────────────────────────────────────────


class UploadResponse(BaseModel):
    """Response model for POST /upload-graph."""

    success: bool = Field(..., description="Whether the document was stored and loaded")
    filename: str | None = Field(None, description="Name of the uploaded file")
    node_count: int = Field(..., description="Nodes in the loaded graph")
    edge_count: int = Field(..., description="Edges in the loaded graph")
    warnings: list[str] = Field(
        default_factory=list, description="Load warnings (duplicate keys, dropped edges)"
    )


# ─── Helper Functions ───────────────────────────────────────


def _controller(request: Request) -> NavigationController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Navigation controller not initialized")
    return controller


def _write_atomic(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` via a temp file in the same directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        raise UploadError(f"Cannot write {path}: {e}") from e


# ─── POST /upload-graph ─────────────────────────────────────


@upload_router.post("/upload-graph", response_model=UploadResponse)
async def upload_graph(request: Request, file: UploadFile | None = File(None)) -> UploadResponse:
    """Overwrite the graph source file and reload it.

    The document is validated before anything is written; an invalid
    upload leaves both the stored document and the loaded graph intact.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    settings = request.app.state.settings
    controller = _controller(request)

    if is_remote(settings.graph_source):
        raise HTTPException(
            status_code=409,
            detail="Graph source is a URL; uploads are only accepted for file sources",
        )

    raw = await file.read()
    if len(raw) > settings.upload_max_bytes:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    try:
        parse_document(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Uploaded file is not valid UTF-8")
    except DocumentParseError as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=f"Invalid graph document: {e}")

    target = Path(settings.graph_source)
    loader = GraphDocumentLoader(str(target), timeout=settings.load_timeout_seconds)

    try:
        async with request.app.state.lock:
            await asyncio.to_thread(_write_atomic, target, raw)
            await controller.reload(loader)
    except UploadError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail="Failed to save file")

    if controller.load_status is LoadStatus.FAILED:
        raise HTTPException(status_code=500, detail=f"Reload failed: {controller.load_error}")

    report = controller.load_report
    logger.info(f"Stored upload {file.filename} at {target}")
    return UploadResponse(
        success=True,
        filename=file.filename,
        node_count=controller.node_count,
        edge_count=controller.edge_count,
        warnings=report.warnings if report else [],
    )


# ─── GET /api/graph/export ──────────────────────────────────


@api_router.get("/graph/export")
async def export_graph(
    request: Request,
    scope: str = Query("full", description="full: whole graph, view: visible star only"),
) -> Response:
    """Download the graph (or the visible star) as a YAML document."""
    controller = _controller(request)
    try:
        content = controller.export_document(scope)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=content,
        media_type=YAML_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


# ─── POST /api/graph/reload ─────────────────────────────────


@api_router.post("/graph/reload")
async def reload_graph(request: Request) -> dict[str, Any]:
    """Reload the configured graph source.

    On failure the previous graph stays loaded and 502 is returned.
    """
    settings = request.app.state.settings
    controller = _controller(request)
    loader = GraphDocumentLoader(settings.graph_source, timeout=settings.load_timeout_seconds)

    async with request.app.state.lock:
        snapshot = await controller.reload(loader)

    if snapshot.load_status is LoadStatus.FAILED:
        raise HTTPException(status_code=502, detail=f"Graph load failed: {snapshot.load_error}")
    return snapshot_to_payload(snapshot)
