from datetime import datetime

from ..config import SourceConfig
from ..extraction.content import ContainerStrategy, ContentExtractor
from ..extraction.timestamp import TimestampExtractor
from ..extraction.title import TitleExtractor
from ..models.article import FetchedDocument
from .base import BaseSite


class RFASite(BaseSite):
    """Radio Free Asia article pages."""

    source_id = "rfa"

    CONTENT_STRATEGIES = (
        ContainerStrategy("storytext", "div", {"id": "storytext"}),
        ContainerStrategy("story-body", "div", {"class": "story-body"}),
        ContainerStrategy("article-body", "article", {"class": "article-body"}),
        ContainerStrategy("document"),
    )

    def __init__(self, source: SourceConfig):
        super().__init__(source)
        self.title_extractor = TitleExtractor(source.title_suffixes)
        self.timestamp_extractor = TimestampExtractor()
        self.content_extractor = ContentExtractor(self.CONTENT_STRATEGIES)

    def extract_title(self, doc: FetchedDocument) -> str:
        return self.title_extractor.extract(doc.tree, self.source.title, doc.url)

    def extract_update_time(self, doc: FetchedDocument) -> datetime:
        return self.timestamp_extractor.extract(doc, self.source.title)

    def extract_content(self, doc: FetchedDocument) -> str:
        return self.content_extractor.extract(doc, self.source.title)
