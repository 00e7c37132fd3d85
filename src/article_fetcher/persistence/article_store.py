import redis.asyncio as redis
from pydantic import ValidationError
from typing import List, Optional, cast
import logging

from ..models.article import Article

logger = logging.getLogger(__name__)


class RedisArticleStore:
    """Persists articles in one Redis hash per source, keyed by article id."""

    def __init__(self, redis_url: str = "redis://localhost:6379/0", source_id: str = "rfa"):
        self.redis_url = redis_url
        self.key = f"articles:{source_id}"
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        self.client = redis.from_url(self.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        logger.info(f"Connected to Redis at {self.redis_url}")

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _client(self) -> redis.Redis:
        if not self.client:
            await self.connect()
        return cast(redis.Redis, self.client)

    async def load(self) -> List[Article]:
        """Read every stored article in one HGETALL, so callers see a snapshot."""
        cl = await self._client()
        entries = await cl.hgetall(self.key)

        articles = []
        for article_id, data in entries.items():
            try:
                articles.append(Article.model_validate_json(data))
            except ValidationError as e:
                logger.error(f"Skipping corrupt article {article_id} in {self.key}: {e}")
        return articles

    async def store(self, article: Article) -> None:
        """Insert or replace an article by id."""
        cl = await self._client()
        await cl.hset(self.key, article.id, article.model_dump_json())

    async def count(self) -> int:
        cl = await self._client()
        return int(await cl.hlen(self.key))
