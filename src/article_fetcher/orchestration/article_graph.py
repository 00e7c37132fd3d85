from typing import TypedDict, Optional, Any, Iterable, List, Protocol, cast
from datetime import datetime
from enum import Enum
from langgraph.graph import StateGraph, END
from pydantic import BaseModel
import asyncio
import logging

from ..config import SourceConfig
from ..models.article import Article, FetchedDocument
from ..ingestion.base import BaseSite
from ..ingestion.document_source import DocumentSource
from ..ingestion.registry import get_site
from ..extraction.normalizer import ContentNormalizer
from ..extraction.formatter import DocumentFormatter
from ..utils.errors import ArticleError
from ..utils.logging import AuditLogger

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    START = "start"
    FETCHED = "fetched"
    TITLE_EXTRACTED = "title_extracted"
    TIMESTAMP_EXTRACTED = "timestamp_extracted"
    CONTENT_EXTRACTED = "content_extracted"
    NORMALIZED = "normalized"
    FORMATTED = "formatted"
    DONE = "done"
    FAILED = "failed"


class ArticleState(TypedDict):
    url: str
    stage: PipelineStage
    document: Optional[FetchedDocument]
    title: Optional[str]
    update_time: Optional[datetime]
    raw_content: Optional[str]
    body: Optional[str]
    article: Optional[Article]


class PipelineOutcome(BaseModel):
    """Terminal state of one URL: Done with an article, or Failed with a reason."""
    url: str
    stage: PipelineStage
    article: Optional[Article] = None
    error_type: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.stage == PipelineStage.DONE


class ArticleSink(Protocol):
    async def store(self, article: Article) -> None: ...


class ArticleGraph:
    """Per-URL workflow: fetch, title, timestamp, content, normalize, format.

    Content runs last because the formatted document embeds title and time.
    Any step raising an ArticleError ends the run; nothing partial is returned.
    """

    def __init__(
        self,
        source: SourceConfig,
        document_source: Optional[DocumentSource] = None,
        site: Optional[BaseSite] = None,
        max_concurrent: int = 5,
    ) -> None:
        self.source = source
        self.document_source = document_source or DocumentSource(source)
        self.site = site or get_site(source)
        self.normalizer = ContentNormalizer()
        self.formatter = DocumentFormatter(source.title, source.domain)
        self.max_concurrent = max_concurrent

        self.workflow = self._build_graph()

    def _build_graph(self) -> Any:
        workflow = StateGraph(ArticleState)

        # Nodes
        workflow.add_node("fetch", self.fetch_node)
        workflow.add_node("title", self.title_node)
        workflow.add_node("timestamp", self.timestamp_node)
        workflow.add_node("content", self.content_node)
        workflow.add_node("normalize", self.normalize_node)
        workflow.add_node("format", self.format_node)

        # Edges
        workflow.set_entry_point("fetch")
        workflow.add_edge("fetch", "title")
        workflow.add_edge("title", "timestamp")
        workflow.add_edge("timestamp", "content")
        workflow.add_edge("content", "normalize")
        workflow.add_edge("normalize", "format")
        workflow.add_edge("format", END)

        return workflow.compile()

    async def fetch_node(self, state: ArticleState) -> ArticleState:
        doc = await self.document_source.fetch(state["url"])
        return {**state, "document": doc, "stage": PipelineStage.FETCHED}

    async def title_node(self, state: ArticleState) -> ArticleState:
        title = self.site.extract_title(cast(FetchedDocument, state["document"]))
        return {**state, "title": title, "stage": PipelineStage.TITLE_EXTRACTED}

    async def timestamp_node(self, state: ArticleState) -> ArticleState:
        update_time = self.site.extract_update_time(cast(FetchedDocument, state["document"]))
        return {**state, "update_time": update_time, "stage": PipelineStage.TIMESTAMP_EXTRACTED}

    async def content_node(self, state: ArticleState) -> ArticleState:
        raw_content = self.site.extract_content(cast(FetchedDocument, state["document"]))
        return {**state, "raw_content": raw_content, "stage": PipelineStage.CONTENT_EXTRACTED}

    async def normalize_node(self, state: ArticleState) -> ArticleState:
        body = self.normalizer.normalize(cast(str, state["raw_content"]))
        return {**state, "body": body, "stage": PipelineStage.NORMALIZED}

    async def format_node(self, state: ArticleState) -> ArticleState:
        title = cast(str, state["title"])
        update_time = cast(datetime, state["update_time"])
        content = self.formatter.format(title, update_time, cast(str, state["body"]), state["url"])
        article = Article.for_source(self.source, state["url"], title, update_time, content)
        # The tree and raw bytes are not needed past this point
        return {**state, "article": article, "document": None, "stage": PipelineStage.FORMATTED}

    async def run(self, url: str) -> Article:
        """
        Fetch one URL into an Article.

        Raises:
            ArticleError: The typed error of the step that failed
        """
        initial_state = ArticleState(
            url=url,
            stage=PipelineStage.START,
            document=None,
            title=None,
            update_time=None,
            raw_content=None,
            body=None,
            article=None,
        )
        try:
            final_state = await self.workflow.ainvoke(initial_state)
        except ArticleError as e:
            logger.error(f"Pipeline failed ({type(e).__name__}): {e}")
            raise

        article = cast(Optional[Article], final_state.get("article"))
        if article is None:
            raise ArticleError("pipeline finished without an article", self.source.title, url)
        logger.info(f"✅ Fetched: {article.title[:50]} ({article.id})")
        return article

    async def run_batch(
        self,
        urls: Iterable[str],
        store: Optional[ArticleSink] = None,
        audit: Optional[AuditLogger] = None,
    ) -> List[PipelineOutcome]:
        """
        Run many URLs concurrently (bounded by max_concurrent).

        Successful articles are stored when a store is given; failures are
        reported in the outcome list and never stored. A URL whose article
        cannot be stored is reported as failed; the rest of the batch goes on.
        No retries.
        """
        semaphore = asyncio.Semaphore(self.max_concurrent)

        def failed(url: str, e: BaseException) -> PipelineOutcome:
            if audit:
                audit.log_event("ARTICLE_FAILED", "WARN", url=url, details={
                    "error_type": type(e).__name__, "reason": str(e)
                })
            return PipelineOutcome(
                url=url,
                stage=PipelineStage.FAILED,
                error_type=type(e).__name__,
                reason=str(e),
            )

        async def run_one(url: str) -> PipelineOutcome:
            async with semaphore:
                try:
                    article = await self.run(url)
                except ArticleError as e:
                    return failed(url, e)

            if store is not None:
                try:
                    await store.store(article)
                except Exception as e:
                    logger.error(f"Failed to store {article.id} from {url}: {e}")
                    return failed(url, e)
                if audit:
                    audit.log_event("ARTICLE_STORED", "INFO", url=url, details={"article_id": article.id})
            return PipelineOutcome(url=url, stage=PipelineStage.DONE, article=article)

        url_list = list(urls)
        results = await asyncio.gather(*(run_one(url) for url in url_list), return_exceptions=True)

        outcomes: List[PipelineOutcome] = []
        for url, result in zip(url_list, results):
            if isinstance(result, Exception):
                logger.error(f"Unexpected error for {url}: {result!r}")
                result = failed(url, result)
            elif isinstance(result, BaseException):
                raise result
            outcomes.append(result)
        return outcomes
