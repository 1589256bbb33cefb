"""
FastAPI Gateway — HTTP API layer for the star navigator.

Holds a single NavigationController per process in ``app.state`` and
serializes every mutation through an asyncio lock.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.engine.loader import GraphDocumentLoader
from src.engine.navigation import NavigationController
from src.gateway.config import GatewaySettings
from src.gateway.routes import graph, health, navigation
from src.shared.logging import setup_logging
from src.shared.observability import RequestLoggingMiddleware

logger = setup_logging("gateway.app", level="INFO")


def create_app(settings: GatewaySettings | None = None) -> FastAPI:
    """Build the gateway application around one navigation controller."""
    settings = settings or GatewaySettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the controller and load the initial graph document."""
        logger.info("Starting navigator gateway")

        controller = NavigationController(settings)
        app.state.controller = controller
        app.state.lock = asyncio.Lock()

        loader = GraphDocumentLoader(settings.graph_source, timeout=settings.load_timeout_seconds)
        async with app.state.lock:
            snapshot = await controller.reload(loader)
        if controller.load_error:
            logger.warning(f"Initial graph load failed: {controller.load_error}")
        else:
            logger.info(
                f"Loaded {controller.node_count} nodes, {controller.edge_count} edges "
                f"from {settings.graph_source} (focus={snapshot.focus_key})"
            )

        yield

        logger.info("Shutting down navigator gateway")

    app = FastAPI(
        title="Star Navigator",
        description="Star-subgraph navigation over a node/edge graph document",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register routers
    app.include_router(navigation.router, prefix="/api", tags=["Navigation"])
    app.include_router(graph.api_router, prefix="/api", tags=["Graph"])
    app.include_router(graph.upload_router, tags=["Graph"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with basic info."""
        return {
            "name": "Star Navigator",
            "version": "0.1.0",
            "status": "operational",
            "endpoints": {
                "navigation": "/api/navigation",
                "upload": "/upload-graph",
                "export": "/api/graph/export",
                "reload": "/api/graph/reload",
                "health": "/api/health",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(
        "src.gateway.app:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )
