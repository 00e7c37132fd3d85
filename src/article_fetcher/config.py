"""
Centralized configuration for the article fetcher.
Defaults come from config.yaml, overridable via environment variables.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field
from typing import List
import logging
import re
import yaml
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def _load_yaml_config() -> dict:
    """Load config.yaml if it exists, else return empty dict."""
    config_path = Path(__file__).parent.parent.parent / "config.yaml"
    if config_path.exists():
        with open(config_path, 'r', encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}

_yaml = _load_yaml_config()
_source = _yaml.get('source', {})


def parse_duration(value: str) -> float:
    """
    Parse a duration string like "30s", "1m30s" or "500ms" into seconds.

    Raises:
        ValueError: If the string is not a sequence of <number><unit> groups
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return total


class SourceConfig(BaseModel):
    """Read-only view of one configured source, passed into the pipeline."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    domain: str
    title: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    title_suffixes: tuple[str, ...] = ()
    user_agent: str = "article-fetcher/1.0"


class Settings(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # === Source ===
    source_id: str = Field(
        default=_source.get('id', "rfa"),
        description="Registry key selecting the site extractor"
    )
    source_domain: str = Field(default=_source.get('domain', "www.rfa.org"))
    source_title: str = Field(default=_source.get('title', "自由亚洲电台"))
    title_suffixes: List[str] = Field(
        default=_source.get('title_suffixes', [" — 普通话主页"]),
        description="Boilerplate removed from page titles"
    )

    # === Fetching ===
    fetch_timeout: str = Field(
        default=_yaml.get('fetch', {}).get('timeout', "1m"),
        description="Duration string, e.g. 30s or 1m30s"
    )
    user_agent: str = Field(default=_yaml.get('fetch', {}).get('user_agent', "article-fetcher/1.0"))
    max_concurrent_fetches: int = Field(
        default=_yaml.get('fetch', {}).get('max_concurrent', 5),
        ge=1
    )

    # === Storage ===
    redis_url: str = Field(default="redis://localhost:6379/0")
    audit_log_dir: str = Field(default="logs")

    def timeout_seconds(self) -> float:
        """Fetch timeout in seconds, falling back to one minute when unparseable."""
        try:
            return parse_duration(self.fetch_timeout)
        except ValueError as e:
            logger.warning(f"[{self.source_title}] timeout init error: {e}")
            return DEFAULT_TIMEOUT_SECONDS

    def source_config(self) -> SourceConfig:
        return SourceConfig(
            source_id=self.source_id,
            domain=self.source_domain,
            title=self.source_title,
            timeout=self.timeout_seconds(),
            title_suffixes=tuple(self.title_suffixes),
            user_agent=self.user_agent,
        )
