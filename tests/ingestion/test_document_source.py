"""Tests for the HTTP document source, using an in-process transport or a local server."""
import asyncio
import httpx
import pytest
import sys
import os
import time

from article_fetcher.ingestion.document_source import DocumentSource
from article_fetcher.utils.errors import FetchError, FetchTimeoutError, FetchTransportError

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))
from tests.fixtures.pages import ARTICLE_URL, RFA_SOURCE, STORY_PAGE


def source_with(handler) -> DocumentSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DocumentSource(RFA_SOURCE, client=client)


class TestDocumentSource:

    @pytest.mark.asyncio
    async def test_fetch_returns_bytes_and_tree(self):
        def handler(request):
            return httpx.Response(200, content=STORY_PAGE.encode("utf-8"),
                                  headers={"Content-Type": "text/html; charset=utf-8"})

        source = source_with(handler)
        doc = await source.fetch(ARTICLE_URL)

        assert doc.url == ARTICLE_URL
        assert doc.raw == STORY_PAGE.encode("utf-8")
        assert doc.tree.find("title").string == "香港法院裁决 — 普通话主页"
        assert "dateModified" in doc.text

    @pytest.mark.asyncio
    async def test_user_agent_sent_by_default_client(self):
        source = DocumentSource(RFA_SOURCE)
        client = source._get_client()
        assert client.headers["User-Agent"] == RFA_SOURCE.user_agent
        await source.close()
        assert source._client is None

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        source = source_with(lambda request: httpx.Response(404, text="gone"))

        with pytest.raises(FetchTransportError) as exc:
            await source.fetch(ARTICLE_URL)

        assert exc.value.status_code == 404
        assert "HTTP 404" in str(exc.value)
        assert ARTICLE_URL in str(exc.value)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FetchTimeoutError) as exc:
            await source_with(handler).fetch(ARTICLE_URL)
        assert "[自由亚洲电台]" in str(exc.value)

    @pytest.mark.asyncio
    async def test_timeout_bounds_slow_body(self):
        body = b"<p>x</p>"
        stop = asyncio.Event()

        async def trickle(reader, writer):
            await reader.readuntil(b"\r\n\r\n")
            writer.write(b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n"
                         b"Content-Length: %d\r\n\r\n" % len(body))
            try:
                for byte in body:
                    if stop.is_set():
                        break
                    writer.write(bytes([byte]))
                    await writer.drain()
                    await asyncio.sleep(0.2)
            except ConnectionError:
                pass
            finally:
                writer.close()

        server = await asyncio.start_server(trickle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        client = httpx.AsyncClient(trust_env=False)
        source = DocumentSource(RFA_SOURCE.model_copy(update={"timeout": 0.5}), client=client)

        started = time.monotonic()
        try:
            with pytest.raises(FetchTimeoutError):
                await source.fetch(f"http://127.0.0.1:{port}/slow.html")
        finally:
            elapsed = time.monotonic() - started
            stop.set()
            await client.aclose()
            server.close()
            await server.wait_closed()

        # Each byte arrives well within the per-read limit; only the total is exceeded
        assert elapsed < 1.2

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchTransportError) as exc:
            await source_with(handler).fetch(ARTICLE_URL)
        assert exc.value.status_code is None
        assert isinstance(exc.value, FetchError)

    @pytest.mark.asyncio
    async def test_context_manager_keeps_injected_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<p>x</p>")))
        async with DocumentSource(RFA_SOURCE, client=client) as source:
            await source.fetch(ARTICLE_URL)
        assert not client.is_closed
        await client.aclose()
