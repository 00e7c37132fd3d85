from abc import ABC, abstractmethod
from datetime import datetime

from ..config import SourceConfig
from ..models.article import FetchedDocument


class BaseSite(ABC):
    """Abstract base class for per-site extraction.

    A site supplies the three field extractors; the orchestrator is shared.
    """

    source_id: str = ""

    def __init__(self, source: SourceConfig):
        self.source = source

    @abstractmethod
    def extract_title(self, doc: FetchedDocument) -> str:
        """
        Title of the page with site boilerplate removed.

        Raises:
            MissingElementError: If the page has no usable title
        """
        pass

    @abstractmethod
    def extract_update_time(self, doc: FetchedDocument) -> datetime:
        """
        Last-modified or published instant, in UTC.

        Raises:
            MissingMetadataError: If no timestamp candidate exists
            TimestampParseError: If the candidate is not RFC3339
        """
        pass

    @abstractmethod
    def extract_content(self, doc: FetchedDocument) -> str:
        """
        Raw paragraph markup joined with markdown line breaks.

        Raises:
            NoContentError: If no strategy located the body
            VideoPageError: If the page only carries a video
        """
        pass
