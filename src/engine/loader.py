"""
Graph Document Loader — fetch and parse the current graph document.

The source is either a local path or an ``http(s)://`` URL.  Fetching is
the only suspending operation in the engine; parsing is delegated to the
YAML codec.  Transport problems surface as ``GraphLoadError`` and bad
documents as ``DocumentParseError``.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from src.shared.codec import parse_document
from src.shared.exceptions import DocumentParseError, GraphLoadError
from src.shared.models import Graph

logger = logging.getLogger("engine.loader")


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class GraphDocumentLoader:
    """Loads the graph document from a file path or URL."""

    def __init__(self, source: str, timeout: float = 10.0) -> None:
        self.source = source
        self._timeout = timeout

    async def fetch_text(self) -> str:
        """Return the raw document text.

        Raises:
            GraphLoadError: If the file cannot be read or the request fails.
            DocumentParseError: If the file is not valid UTF-8.
        """
        if is_remote(self.source):
            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self.source)
                    response.raise_for_status()
                    return response.text
            except httpx.HTTPError as exc:
                raise GraphLoadError(f"Failed to fetch {self.source}: {exc}") from exc

        path = Path(self.source)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentParseError(f"{path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise GraphLoadError(f"Failed to read {path}: {exc}") from exc

    async def load(self) -> Graph:
        """Fetch and parse the document.

        Raises:
            GraphLoadError: On transport failure.
            DocumentParseError: If the text is not UTF-8 or not a graph document.
        """
        text = await self.fetch_text()
        graph = parse_document(text)
        logger.info(
            "Loaded graph document from %s (%d nodes, %d edges)",
            self.source, len(graph.nodes), len(graph.edges),
        )
        return graph
