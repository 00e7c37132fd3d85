#!/usr/bin/env python3
"""
One-shot fetch of article URLs into the article store.

Runs each URL through the pipeline once, stores the successes and exits with a
summary. Does NOT discover URLs or retry failures.

Usage:
    python -m article_fetcher.scripts.fetch_once https://www.rfa.org/mandarin/... [URL...]
    python -m article_fetcher.scripts.fetch_once --urls-file urls.txt --dry-run
"""
import argparse
import asyncio
import logging
import time
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from ..config import Settings
from ..ingestion.document_source import DocumentSource
from ..orchestration.article_graph import ArticleGraph
from ..persistence.article_store import RedisArticleStore
from ..utils.logging import AuditLogger

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def run_fetch(urls: List[str], settings: Settings, dry_run: bool) -> dict:
    """
    Fetch the URLs once.

    Returns:
        Summary dict with fetched/stored/failed counts and duration.
    """
    start_time = time.time()
    source = settings.source_config()

    audit = AuditLogger("fetch_once", log_dir=settings.audit_log_dir)
    audit.log_event("BATCH_START", "INFO", details={
        "source_id": source.source_id,
        "url_count": len(urls),
        "dry_run": dry_run,
    })

    store = None if dry_run else RedisArticleStore(settings.redis_url, source.source_id)

    async with DocumentSource(source) as document_source:
        graph = ArticleGraph(
            source,
            document_source=document_source,
            max_concurrent=settings.max_concurrent_fetches,
        )
        logger.info(f"📡 Fetching {len(urls)} articles from {source.domain}...")
        outcomes = await graph.run_batch(urls, store=store, audit=audit)

    failed = [o for o in outcomes if not o.ok]
    for outcome in failed:
        logger.warning(f"  ❌ {outcome.error_type}: {outcome.reason}")

    stored_total = 0
    if store is not None:
        stored_total = await store.count()
        await store.close()

    duration_seconds = time.time() - start_time
    summary = {
        "fetched": len(outcomes) - len(failed),
        "failed": len(failed),
        "stored_total": stored_total,
        "duration_seconds": round(duration_seconds, 1),
        "dry_run": dry_run,
    }
    audit.log_event("BATCH_COMPLETE", "INFO", details=summary)

    print("\n" + "=" * 60)
    print("📊 FETCH SUMMARY")
    print("=" * 60)
    print(f"  Fetched:        {summary['fetched']} articles")
    print(f"  Failed:         {summary['failed']} articles")
    print(f"  Duration:       {summary['duration_seconds']} seconds")
    print(f"  Dry Run:        {summary['dry_run']}")
    if not dry_run:
        print(f"  Stored (total): {summary['stored_total']}")
    print("=" * 60 + "\n")

    return summary


def read_urls(args: argparse.Namespace) -> List[str]:
    urls = list(args.urls)
    if args.urls_file:
        for line in Path(args.urls_file).read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                urls.append(line)
    return urls


def main():
    parser = argparse.ArgumentParser(
        description="Fetch article URLs once into the article store"
    )
    parser.add_argument("urls", nargs="*", help="Article URLs")
    parser.add_argument(
        "--urls-file", default=None,
        help="File with one URL per line (# comments allowed)"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Run the pipeline without storing articles"
    )

    args = parser.parse_args()
    urls = read_urls(args)
    if not urls:
        parser.error("no URLs given")

    load_dotenv()
    asyncio.run(run_fetch(urls, Settings(), dry_run=args.dry_run))


if __name__ == "__main__":
    main()
