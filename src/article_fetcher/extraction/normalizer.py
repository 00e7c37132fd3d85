"""Turns extracted paragraph markup into the markdown body."""
import html
import re
from typing import Mapping


def _multi_replacer(mapping: Mapping[str, str]):
    """Single-pass replacement; at each position the first listed key that matches wins."""
    pattern = re.compile("|".join(re.escape(k) for k in mapping))

    def replace(text: str) -> str:
        return pattern.sub(lambda m: mapping[m.group(0)], text)

    return replace


class ContentNormalizer:
    """
    Cleans paragraph markup:
    1. unescape HTML entities
    2. drop <i> and <iframe> elements with their contents
    3. translate bold tags to ** markers (a closing marker ends the line)
    4. collapse the empty marker pairs left by empty bold tags
    """

    ITALIC = re.compile(r"<i(?:\s[^>]*)?>.*?</i>")
    IFRAME = re.compile(r"<iframe\b.*?</iframe>")

    def __init__(self) -> None:
        self._translate = _multi_replacer({
            "\n\n": "\n",
            "<br/>": "",
            "<br />": "",
            "<br>": "",
            "<b>": "**",
            "</b>": "**  \n",
            "<strong>": "**",
            "</strong>": "**  \n",
        })
        self._collapse = _multi_replacer({
            "****": "",
            "** **": "",
        })

    def normalize(self, body: str) -> str:
        body = html.unescape(body)
        body = self.ITALIC.sub("", body)
        body = self.IFRAME.sub("", body)
        body = self._translate(body)
        return self._collapse(body)
