"""
Article body extraction.

The body is located with an ordered chain of strategies; the first one that
yields at least one paragraph wins. Each paragraph becomes one unit followed by
a markdown line break ("  \\n").
"""
import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag

from ..models.article import FetchedDocument
from ..utils.errors import NoContentError, VideoPageError

LINE_BREAK = "  \n"

RAW_PARAGRAPH = re.compile(r"<p.*?>(?P<content>.*?)</p>")
RAW_VIDEO = re.compile(r"<video.*?>")


def paragraph_unit(p: Tag) -> str:
    """
    Text of one paragraph.

    A paragraph whose only content is <strong>/<b> wrapping a <span> (a styled
    lead paragraph) yields the inner markup of the span; any other paragraph
    yields its own inner markup. Entities stay escaped for the normalizer.
    """
    children = [
        c for c in p.contents
        if not (isinstance(c, NavigableString) and not c.strip())
    ]
    if len(children) == 1 and isinstance(children[0], Tag) and children[0].name in ("strong", "b"):
        span = children[0].find("span")
        if span is not None:
            return span.decode_contents()
    return p.decode_contents()


class ContentStrategy(ABC):
    """One structural assumption about where the article body lives."""

    name: str = "base"

    @abstractmethod
    def paragraphs(self, doc: FetchedDocument) -> list[str]:
        """Return paragraph units, or an empty list when nothing matched."""
        pass


class ContainerStrategy(ContentStrategy):
    """Paragraphs inside the first element matching tag + attributes.

    With tag=None the whole document is the container.
    """

    def __init__(self, name: str, tag: Optional[str] = None, attrs: Optional[dict[str, Any]] = None):
        self.name = name
        self.tag = tag
        self.attrs = attrs or {}

    def _container(self, tree: BeautifulSoup) -> Optional[Tag]:
        if self.tag is None:
            return tree
        found = tree.find(self.tag, attrs=self.attrs)
        return found if isinstance(found, Tag) else None

    def paragraphs(self, doc: FetchedDocument) -> list[str]:
        container = self._container(doc.tree)
        if container is None:
            return []
        return [paragraph_unit(p) for p in container.find_all("p")]

    def __repr__(self) -> str:
        return f"ContainerStrategy({self.name!r}, tag={self.tag!r}, attrs={self.attrs!r})"


class RawParagraphStrategy(ContentStrategy):
    """Single-line <p>...</p> matches over the raw response."""

    name = "raw-paragraphs"

    def paragraphs(self, doc: FetchedDocument) -> list[str]:
        return [m.group("content") for m in RAW_PARAGRAPH.finditer(doc.text)]


class ContentExtractor:
    """Runs the strategy chain and joins the winning paragraphs."""

    def __init__(self, strategies: Sequence[ContentStrategy]):
        if not strategies:
            raise ValueError("ContentExtractor needs at least one strategy")
        self.strategies = list(strategies)

    def locate(self, doc: FetchedDocument) -> tuple[str, list[str]]:
        """Return (strategy name, paragraph units) of the first strategy that matched."""
        for strategy in self.strategies:
            units = strategy.paragraphs(doc)
            if units:
                return strategy.name, units
        return "", []

    def extract(self, doc: FetchedDocument, source_title: str = "") -> str:
        _, units = self.locate(doc)
        if not units:
            if doc.tree.find("video") is not None or RAW_VIDEO.search(doc.text):
                raise VideoPageError("this is a video page", source_title, doc.url)
            raise NoContentError("no content strategy matched", source_title, doc.url)
        return "".join(unit + LINE_BREAK for unit in units)
