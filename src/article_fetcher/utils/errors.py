"""
Custom exceptions for the article fetcher.

Every failure of a single article's pipeline run is an ArticleError subclass
carrying the source title and URL, so operators can tell which page broke.
"""

from typing import Any, Optional


class ArticleFetcherError(Exception):
    """Base exception for all article-fetcher errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnknownSourceError(ArticleFetcherError):
    """No site extractor is registered for the configured source id."""

    def __init__(self, source_id: str, known: list[str]) -> None:
        message = f"Unknown source '{source_id}'. Registered sources: {', '.join(sorted(known))}"
        super().__init__(message, {"source_id": source_id})
        self.source_id = source_id


# =============================================================================
# Per-article pipeline errors
# =============================================================================


class ArticleError(ArticleFetcherError):
    """Base exception for a failed pipeline run over one URL."""

    def __init__(self, reason: str, source_title: str = "", url: str = "") -> None:
        message = f"[{source_title}] {reason}" if source_title else reason
        if url:
            message = f"{message}: {url}"
        super().__init__(message)
        self.reason = reason
        self.source_title = source_title
        self.url = url


class FetchError(ArticleError):
    """The Document Source could not deliver the page."""

    pass


class FetchTimeoutError(FetchError):
    """The fetch did not complete within the configured timeout."""

    pass


class FetchTransportError(FetchError):
    """Network, DNS, TLS or HTTP status failure."""

    def __init__(
        self,
        reason: str,
        source_title: str = "",
        url: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(reason, source_title, url)
        self.status_code = status_code
        if status_code is not None:
            self.details["status_code"] = status_code


class ExtractionError(ArticleError):
    """Base exception for field extraction failures."""

    pass


class MissingElementError(ExtractionError):
    """A structural extraction target is absent from the document."""

    pass


class MissingMetadataError(ExtractionError):
    """No timestamp candidate found in structured data or raw bytes."""

    pass


class TimestampParseError(ExtractionError):
    """A timestamp candidate exists but is not a valid RFC3339 instant."""

    def __init__(self, value: str, source_title: str = "", url: str = "") -> None:
        super().__init__(f"cannot parse timestamp {value!r} as RFC3339", source_title, url)
        self.value = value


class NoContentError(ExtractionError):
    """No content strategy located any paragraph."""

    pass


class VideoPageError(ExtractionError):
    """The page is a video page, which this pipeline does not support."""

    pass


# =============================================================================
# Repository errors
# =============================================================================


class NotFoundError(ArticleFetcherError):
    """No stored article has the requested id."""

    def __init__(self, article_id: str, source_title: str = "") -> None:
        prefix = f"[{source_title}] " if source_title else ""
        super().__init__(f"{prefix}no article with id: {article_id}", {"article_id": article_id})
        self.article_id = article_id
