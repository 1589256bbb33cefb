"""
Unit tests for GraphDocumentLoader (file and HTTP sources).

HTTP sources are served through httpx.MockTransport; no network access.
"""

import httpx
import pytest
from unittest.mock import patch

from src.engine.loader import GraphDocumentLoader, is_remote
from src.engine.navigation import LoadStatus, NavigationController
from src.shared.exceptions import DocumentParseError, GraphLoadError

_RealAsyncClient = httpx.AsyncClient


def _mock_client(handler):
    def factory(*args, **kwargs):
        return _RealAsyncClient(*args, transport=httpx.MockTransport(handler), **kwargs)
    return factory


class TestIsRemote:
    @pytest.mark.parametrize("source, expected", [
        ("http://example.com/graph.yaml", True),
        ("https://example.com/graph.yaml", True),
        ("data/graph.yaml", False),
        ("/abs/graph.yaml", False),
    ])
    def test_is_remote(self, source, expected):
        assert is_remote(source) is expected


# ─── File sources ────────────────────────────────────────────


class TestFileSource:
    async def test_load_file(self, tmp_path, abc_document):
        path = tmp_path / "graph.yaml"
        path.write_text(abc_document, encoding="utf-8")

        graph = await GraphDocumentLoader(str(path)).load()

        assert graph.keys() == ["A", "B", "C"]
        assert graph.edge_pairs() == [("A", "B"), ("A", "C")]

    async def test_missing_file(self, tmp_path):
        with pytest.raises(GraphLoadError, match="Failed to read"):
            await GraphDocumentLoader(str(tmp_path / "nope.yaml")).load()

    async def test_malformed_file(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(DocumentParseError):
            await GraphDocumentLoader(str(path)).load()

    async def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_bytes(b"nodes:\n  - key: \xff\xfe\n")
        with pytest.raises(DocumentParseError, match="not valid UTF-8"):
            await GraphDocumentLoader(str(path)).load()

    async def test_non_utf8_file_fails_reload(self, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_bytes(b"nodes:\n  - key: \xff\xfe\n")
        nav = NavigationController()

        snapshot = await nav.reload(GraphDocumentLoader(str(path)))

        assert snapshot.load_status is LoadStatus.FAILED
        assert "not valid UTF-8" in snapshot.load_error


# ─── HTTP sources ────────────────────────────────────────────


class TestHttpSource:
    async def test_load_url(self, abc_document):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/graph.yaml"
            return httpx.Response(200, text=abc_document)

        with patch("src.engine.loader.httpx.AsyncClient", side_effect=_mock_client(handler)):
            graph = await GraphDocumentLoader("https://example.com/graph.yaml").load()

        assert graph.keys() == ["A", "B", "C"]

    async def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="missing")

        with patch("src.engine.loader.httpx.AsyncClient", side_effect=_mock_client(handler)):
            with pytest.raises(GraphLoadError, match="Failed to fetch"):
                await GraphDocumentLoader("https://example.com/graph.yaml").load()

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with patch("src.engine.loader.httpx.AsyncClient", side_effect=_mock_client(handler)):
            with pytest.raises(GraphLoadError):
                await GraphDocumentLoader("http://example.com/graph.yaml").fetch_text()
