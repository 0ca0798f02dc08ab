"""Wikipedia articles.

Section headings and paragraphs are taken from ``#mw-content-text`` after
removing edit links, citation markers, navigation boxes and tables.
"""

from __future__ import annotations

import re

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register


@register
class WikipediaStrategy(ExtractorStrategy):
    """Article body headings and paragraphs."""

    name = "wikipedia"
    priority = 80
    host_patterns = ("wikipedia.org",)
    strip_selectors = (
        ".mw-editsection",
        "sup.reference",
        "table",
        ".navbox",
    )
    selectors = (
        Selector(container="#mw-content-text", blocks="h2, h3, p"),
        Selector(blocks="p"),
    )
    inline_noise = re.compile(r"\[(?:\d+|citation needed|edit)\]", re.IGNORECASE)
    min_block_chars = 20
    max_blocks = 50
    denylist = (
        "retrieved from",
        "from wikipedia, the free encyclopedia",
        "jump to navigation",
        "cite error",
    )
