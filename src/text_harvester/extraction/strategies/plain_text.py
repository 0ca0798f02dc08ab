"""Plain-text documents (``text/plain`` responses and ``.txt`` paths).

No structural extraction is attempted.  Line endings are normalized, runs of
three or more line breaks become a single blank line, and Project Gutenberg
transmissions lose their licence header and footer.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import TYPE_CHECKING

from text_harvester.extraction.base import ExtractorStrategy, TextBlock
from text_harvester.extraction.registry import register

if TYPE_CHECKING:
    from text_harvester.acquisition.fetcher import RawDocument

_GUTENBERG_START_RE = re.compile(r"\*\*\*\s*START OF[^\n]*?\*\*\*", re.IGNORECASE)
_GUTENBERG_END_RE = re.compile(r"\*\*\*\s*END OF[^\n]*?\*\*\*", re.IGNORECASE)
_EXCESS_BREAKS_RE = re.compile(r"\n{3,}")


def normalize_line_breaks(text: str) -> str:
    """Convert line endings to ``\\n`` and collapse 3+ consecutive breaks to 2."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _EXCESS_BREAKS_RE.sub("\n\n", text).strip()


def is_gutenberg(url: str, text: str) -> bool:
    """Return ``True`` if *text* looks like a Project Gutenberg transmission."""
    host = (urllib.parse.urlparse(url).hostname or "").lower()
    return "gutenberg" in host or _GUTENBERG_START_RE.search(text) is not None


def strip_gutenberg_boilerplate(text: str) -> str:
    """Keep only the text between the first START marker and the first END marker after it.

    Either marker may be missing, in which case that side is left untouched.
    """
    start = _GUTENBERG_START_RE.search(text)
    if start:
        text = text[start.end():]
    end = _GUTENBERG_END_RE.search(text)
    if end:
        text = text[: end.start()]
    return text.strip()


@register
class PlainTextStrategy(ExtractorStrategy):
    """Returns the whole document as one block with its line structure intact."""

    name = "plain_text"
    priority = 900
    max_blocks = None

    def extract(self, document: RawDocument) -> list[TextBlock]:
        text = normalize_line_breaks(document.text)
        if is_gutenberg(document.url, text):
            text = strip_gutenberg_boilerplate(text)
        return [text] if text else []
