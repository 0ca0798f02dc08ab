"""The Unsent Project (short anonymous messages on coloured cards).

Messages appear in card containers and, on gallery pages, only as image
``alt`` captions; the same message is often rendered more than once, so
blocks are deduplicated.
"""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register

_CARD_TEXT = ", ".join(
    f'{tag}[class*="{fragment}"]'
    for tag in ("div", "p", "span")
    for fragment in ("message", "card-text", "post-text")
)


@register
class UnsentProjectStrategy(ExtractorStrategy):
    """Message cards, then image captions, then paragraphs."""

    name = "unsent_project"
    priority = 10
    host_patterns = ("unsentproject",)
    selectors = (
        Selector(blocks=_CARD_TEXT),
        Selector(blocks="img[alt]", attribute="alt"),
        Selector(blocks="p"),
    )
    min_block_chars = 10
    max_blocks = 50
    denylist = (
        "unsent project",
        "submit",
        "follow",
        "subscribe",
    )
    dedupe = True
