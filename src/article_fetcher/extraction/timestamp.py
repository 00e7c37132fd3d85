"""
Publish/modify timestamp extraction.

Two strategies, tried in order:
1. Structured data: the first <script type="application/ld+json"> block
2. Raw bytes: the same key pattern scanned over the whole response

When several date keys are present, the first match in document order wins
(for ld+json pages that is usually dateModified).
"""
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Sequence

from dateutil.parser import isoparse

from ..models.article import FetchedDocument
from ..utils.errors import MissingMetadataError, TimestampParseError

DATE_KEY_PATTERN = re.compile(r'"date\w*?":\s*?"(.*?)"')

RFC3339_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

# Index into the list of date-key matches that is used as the article time
MATCH_INDEX = 0


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the value is not RFC3339 or names an impossible instant
    """
    text = value.strip()
    if not RFC3339_PATTERN.match(text):
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")
    return isoparse(text).astimezone(timezone.utc)


class TimestampStrategy(ABC):
    """One way of finding date-key candidates in a fetched document."""

    name: str = "base"

    @abstractmethod
    def candidates(self, doc: FetchedDocument) -> Sequence[str]:
        """Return candidate timestamp strings in document order (may be empty)."""
        pass


class LinkedDataStrategy(TimestampStrategy):
    """Date keys inside the first structured-data (ld+json) script block."""

    name = "ld+json"

    def candidates(self, doc: FetchedDocument) -> Sequence[str]:
        script = doc.tree.find("script", attrs={"type": "application/ld+json"})
        if script is None:
            return []
        payload = script.string
        if not payload:
            return []
        return DATE_KEY_PATTERN.findall(str(payload))


class RawBytesStrategy(TimestampStrategy):
    """Date keys anywhere in the raw response."""

    name = "raw-bytes"

    def candidates(self, doc: FetchedDocument) -> Sequence[str]:
        return DATE_KEY_PATTERN.findall(doc.text)


class TimestampExtractor:
    """Runs the strategy chain and parses the selected candidate."""

    def __init__(self, strategies: Optional[Sequence[TimestampStrategy]] = None):
        self.strategies = list(strategies) if strategies is not None else [
            LinkedDataStrategy(),
            RawBytesStrategy(),
        ]

    def extract(self, doc: FetchedDocument, source_title: str = "") -> datetime:
        for strategy in self.strategies:
            matches = strategy.candidates(doc)
            if len(matches) > MATCH_INDEX:
                value = matches[MATCH_INDEX]
                try:
                    return parse_rfc3339(value)
                except ValueError as e:
                    raise TimestampParseError(value, source_title, doc.url) from e

        raise MissingMetadataError("no datePublished/dateModified metadata found", source_title, doc.url)
