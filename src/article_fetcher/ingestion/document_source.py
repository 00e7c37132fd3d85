import asyncio
import httpx
import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..config import SourceConfig
from ..models.article import FetchedDocument
from ..utils.errors import FetchTimeoutError, FetchTransportError

logger = logging.getLogger(__name__)


class DocumentSource:
    """Fetches raw bytes and a parsed tree for a URL in one round trip."""

    def __init__(self, source: SourceConfig, client: Optional[httpx.AsyncClient] = None):
        self.source = source
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "DocumentSource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.source.timeout,
                headers={"User-Agent": self.source.user_agent},
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> FetchedDocument:
        """
        Fetch a page and parse it.

        Raises:
            FetchTimeoutError: If the request exceeds the configured timeout
            FetchTransportError: On network errors or non-2xx responses
        """
        client = self._get_client()
        try:
            # Bounds the whole request including the body read, not each phase
            response = await asyncio.wait_for(client.get(url), self.source.timeout)
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FetchTimeoutError(
                f"fetch timed out after {self.source.timeout:g}s ({type(e).__name__})",
                self.source.title, url
            ) from e
        except httpx.HTTPStatusError as e:
            raise FetchTransportError(
                f"HTTP {e.response.status_code}",
                self.source.title, url, status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise FetchTransportError(f"transport error: {e}", self.source.title, url) from e

        raw = response.content
        encoding = response.encoding or "utf-8"
        logger.debug(f"Fetched {len(raw)} bytes from {url}")
        return FetchedDocument(
            url=url,
            raw=raw,
            tree=BeautifulSoup(raw, "html.parser"),
            encoding=encoding,
        )
