"""Generic fallback strategy for hosts without a dedicated strategy.

Fallback order:

1. Remove scripts, styles, comments and page chrome (``nav``, ``header``,
   ``footer``).
2. Collect heading and paragraph blocks of at least 20 characters, looking
   first inside ``<article>``, then ``<main>``, then any element whose class
   mentions ``content``, then the whole document.
3. If no block qualifies, collapse all remaining markup into one
   whitespace-joined block.

This is the terminal fallback: it never hands a document on, and it only
returns an empty list when the document contains no text at all.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from text_harvester.extraction.base import ExtractorStrategy, Selector, TextBlock
from text_harvester.extraction.normalizer import clean
from text_harvester.extraction.registry import register

if TYPE_CHECKING:
    from text_harvester.acquisition.fetcher import RawDocument

logger = logging.getLogger(__name__)

_BLOCKS = "h1, h2, h3, h4, h5, h6, p"


@register
class GenericStrategy(ExtractorStrategy):
    """Headings and paragraphs from the most specific content container found."""

    name = "generic"
    priority = 1000
    strip_selectors = ("nav", "header", "footer")
    selectors = (
        Selector(container="article", blocks=_BLOCKS),
        Selector(container="main", blocks=_BLOCKS),
        Selector(container='[class*="content"]', blocks=_BLOCKS),
        Selector(blocks=_BLOCKS),
    )
    min_block_chars = 20
    max_blocks = None

    def extract(self, document: RawDocument) -> list[TextBlock]:
        markup = document.text
        try:
            blocks = self.extract_blocks(markup)
        except Exception as exc:  # noqa: BLE001
            logger.warning("extraction: generic matching failed for %s: %s", document.url, exc)
            blocks = []
        if blocks:
            return blocks

        logger.info("extraction: no structured blocks in %s; using plain rendering", document.url)
        return self.plain_rendering(markup)

    def plain_rendering(self, markup: str) -> list[TextBlock]:
        """Return the whole stripped document as a single block (or nothing if empty)."""
        text = clean(str(self.prepare(markup)))
        return [text] if text else []
