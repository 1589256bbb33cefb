"""
Entry point — loads the configured graph document and prints one star view.

This bypasses the HTTP gateway and drives the navigation controller
directly.  Useful for checking a document before serving it.

Usage:
    python main.py [KEY_QUERY] [LABEL_QUERY]

For the HTTP gateway:
    python -m src.gateway.app
"""

import asyncio
import json
import sys

from src.engine.loader import GraphDocumentLoader
from src.engine.navigation import NavigationController, QueryChanged
from src.engine.render import snapshot_to_payload
from src.shared.config import BaseNavigatorSettings
from src.shared.logging import setup_logging


async def main(argv: list[str]) -> int:
    settings = BaseNavigatorSettings()
    logger = setup_logging("main", level=settings.log_level)

    controller = NavigationController(settings)
    loader = GraphDocumentLoader(settings.graph_source, timeout=settings.load_timeout_seconds)
    await controller.reload(loader)
    if controller.load_error:
        logger.error("Could not load %s: %s", settings.graph_source, controller.load_error)
        return 1

    report = controller.load_report
    for warning in report.warnings if report else []:
        logger.warning(warning)

    key_query = argv[0] if len(argv) > 0 else None
    label_query = argv[1] if len(argv) > 1 else None
    snapshot = controller.dispatch(QueryChanged(key_query, label_query))

    print(json.dumps(snapshot_to_payload(snapshot), indent=2))
    return 0 if not snapshot.no_match else 2


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
