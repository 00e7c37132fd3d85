from pydantic import BaseModel, ConfigDict, Field, field_validator
from dataclasses import dataclass
from datetime import datetime, timezone
import hashlib

from bs4 import BeautifulSoup

from ..config import SourceConfig


def article_id(url: str) -> str:
    """Stable identifier of an article: md5 hex digest of its source URL."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()


def website_id(domain: str) -> str:
    """Stable identifier of a website: md5 hex digest of its domain."""
    return hashlib.md5(domain.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class FetchedDocument:
    """Raw response bytes and parsed tree for one URL. Used only during extraction."""

    url: str
    raw: bytes
    tree: BeautifulSoup
    encoding: str = "utf-8"

    @property
    def text(self) -> str:
        return self.raw.decode(self.encoding, errors="replace")


class Article(BaseModel):
    """A fully formatted article produced by one successful pipeline run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="md5 of the source URL")
    title: str
    content: str = Field(..., min_length=1, description="Formatted markdown document")
    website_id: str = Field(..., min_length=1)
    website_domain: str
    website_title: str
    update_time: datetime = Field(..., description="Last modified or published instant, UTC")
    source_url: str

    @field_validator('update_time')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @classmethod
    def for_source(
        cls,
        source: SourceConfig,
        url: str,
        title: str,
        update_time: datetime,
        content: str,
    ) -> "Article":
        return cls(
            id=article_id(url),
            title=title,
            content=content,
            website_id=website_id(source.domain),
            website_domain=source.domain,
            website_title=source.title,
            update_time=update_time,
            source_url=url,
        )
