"""Page title extraction."""
from typing import Iterable

from bs4 import BeautifulSoup, NavigableString

from ..utils.errors import MissingElementError

# Characters unsafe in markdown headings or file names, mapped to full-width forms
ILLEGAL_CHARS = str.maketrans({
    "/": "／",
    "\\": "＼",
    ":": "：",
    "*": "＊",
    "?": "？",
    '"': "＂",
    "<": "＜",
    ">": "＞",
    "|": "｜",
    "\n": " ",
    "\r": " ",
    "\t": " ",
})


def replace_illegal_chars(text: str) -> str:
    return text.translate(ILLEGAL_CHARS)


class TitleExtractor:
    """Reads <title>, strips site boilerplate and sanitizes the result."""

    def __init__(self, suffixes: Iterable[str] = ()):
        self.suffixes = tuple(s for s in suffixes if s)

    def extract(self, tree: BeautifulSoup, source_title: str = "", url: str = "") -> str:
        node = tree.find("title")
        if node is None:
            raise MissingElementError("there is no element <title>", source_title, url)

        first = next(iter(node.children), None)
        if not isinstance(first, NavigableString) or not str(first).strip():
            raise MissingElementError("element <title> has no text", source_title, url)

        title = str(first)
        for suffix in self.suffixes:
            title = title.replace(suffix, "")
        return replace_illegal_chars(title.strip())
