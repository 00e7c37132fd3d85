"""Read operations over stored articles."""
from typing import Iterable, List, Protocol
import logging

from ..models.article import Article
from ..utils.errors import NotFoundError

logger = logging.getLogger(__name__)


class ArticleLoader(Protocol):
    async def load(self) -> List[Article]: ...


def sort_by_update_time(articles: Iterable[Article]) -> List[Article]:
    """Articles ordered by ascending update time."""
    return sorted(articles, key=lambda a: a.update_time)


def matches_keyword(article: Article, keyword: str) -> bool:
    """Exact id/website id match, or case-insensitive substring of the text fields."""
    if article.id == keyword or article.website_id == keyword:
        return True
    return any(
        keyword in field.lower()
        for field in (article.title, article.content, article.website_domain, article.website_title)
    )


class ArticleRepository:
    """List, get and search over whatever the store returns on each call."""

    def __init__(self, store: ArticleLoader, source_title: str = ""):
        self.store = store
        self.source_title = source_title

    async def list(self) -> List[Article]:
        return await self.store.load()

    async def get(self, article_id: str) -> Article:
        for article in await self.store.load():
            if article.id == article_id:
                return article
        raise NotFoundError(article_id, self.source_title)

    async def search(self, *keywords: str) -> List[Article]:
        """
        Articles matching any keyword on any field.

        Each article appears once even when several keywords match it.
        Blank keywords are ignored. No match gives an empty list.
        """
        terms = [k.strip().lower() for k in keywords if k and k.strip()]
        if not terms:
            return []

        results: List[Article] = []
        seen: set[str] = set()
        for article in await self.store.load():
            if article.id in seen:
                continue
            if any(matches_keyword(article, term) for term in terms):
                seen.add(article.id)
                results.append(article)

        logger.debug(f"Search {terms} matched {len(results)} articles")
        return results
