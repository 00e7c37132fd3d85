#!/usr/bin/env python3
"""
Query stored articles.

Usage:
    python -m article_fetcher.scripts.query_articles list --sort
    python -m article_fetcher.scripts.query_articles get <id>
    python -m article_fetcher.scripts.query_articles search rfa 香港
"""
import argparse
import asyncio
import logging
import sys
from typing import List

from dotenv import load_dotenv

from ..config import Settings
from ..models.article import Article
from ..persistence.article_store import RedisArticleStore
from ..persistence.repository import ArticleRepository, sort_by_update_time
from ..utils.errors import NotFoundError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def print_rows(articles: List[Article]) -> None:
    for a in articles:
        print(f"{a.id}  {a.update_time.isoformat()}  {a.title}")
    print(f"({len(articles)} articles)")


async def run_query(args: argparse.Namespace, settings: Settings) -> int:
    store = RedisArticleStore(settings.redis_url, settings.source_id)
    repo = ArticleRepository(store, settings.source_title)
    try:
        if args.command == "get":
            try:
                article = await repo.get(args.id)
            except NotFoundError as e:
                logger.error(str(e))
                return 1
            print(article.content)
            return 0

        if args.command == "search":
            articles = await repo.search(*args.keywords)
        else:
            articles = await repo.list()

        if args.sort:
            articles = sort_by_update_time(articles)
        print_rows(articles)
        return 0
    finally:
        await store.close()


def main():
    parser = argparse.ArgumentParser(description="Query stored articles")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List all articles")
    list_parser.add_argument("--sort", action="store_true", help="Order by update time")

    get_parser = sub.add_parser("get", help="Print one article document")
    get_parser.add_argument("id")

    search_parser = sub.add_parser("search", help="Search by keywords (OR)")
    search_parser.add_argument("keywords", nargs="+")
    search_parser.add_argument("--sort", action="store_true", help="Order by update time")

    args = parser.parse_args()
    load_dotenv()
    sys.exit(asyncio.run(run_query(args, Settings())))


if __name__ == "__main__":
    main()
