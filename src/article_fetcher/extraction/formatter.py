"""
Final markdown document layout.

    # <title>

    LastUpdate: <RFC3339 in UTC+8> @ [<site title>](/list/?v=<site title>): [<domain>](http://<domain>)

    ---
    <body>

    原地址：[<decoded url>](<decoded url>)

Downstream renderers parse this layout, so it must not change.
"""
import re
from datetime import datetime, timedelta, timezone
from urllib.parse import unquote_plus

DISPLAY_TZ = timezone(timedelta(hours=8))
SOURCE_LABEL = "原地址："

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def format_last_update(update_time: datetime) -> str:
    """RFC3339 rendering of an instant in the fixed UTC+8 display zone, to the second."""
    if update_time.tzinfo is None:
        update_time = update_time.replace(tzinfo=timezone.utc)
    return update_time.astimezone(DISPLAY_TZ).replace(microsecond=0).isoformat()


def query_unescape(value: str) -> str:
    """
    Percent-decode a URL the way query strings are decoded ("+" is a space).

    Raises:
        ValueError: On a malformed %-escape or escapes that are not UTF-8
    """
    bad = _BAD_ESCAPE.search(value)
    if bad:
        raise ValueError(f'invalid URL escape "{value[bad.start():bad.start() + 3]}"')
    return unquote_plus(value, errors="strict")


class DocumentFormatter:
    """Assembles title, metadata banner, body and attribution."""

    def __init__(self, website_title: str, website_domain: str):
        self.website_title = website_title
        self.website_domain = website_domain

    def source_line(self, url: str) -> str:
        try:
            u = query_unescape(url)
        except ValueError as e:
            u = f"{url}\n\nunescape url error:\n{e}"
        return f"{SOURCE_LABEL}[{u}]({u})"

    def format(self, title: str, update_time: datetime, body: str, url: str) -> str:
        banner = (
            f" @ [{self.website_title}](/list/?v={self.website_title}): "
            f"[{self.website_domain}](http://{self.website_domain})"
        )
        return (
            f"# {title}\n\n"
            f"LastUpdate: {format_last_update(update_time)}{banner}\n\n"
            "---\n"
            f"{body}\n\n"
            f"{self.source_line(url)}"
        )
