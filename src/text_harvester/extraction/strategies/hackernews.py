"""Hacker News item pages: story title, story text and comments."""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register


@register
class HackerNewsStrategy(ExtractorStrategy):
    """``titleline``, ``toptext`` and ``commtext`` elements in page order."""

    name = "hackernews"
    priority = 60
    host_patterns = ("news.ycombinator.com",)
    selectors = (
        Selector(blocks=".titleline, .toptext, .commtext"),
        Selector(blocks="p"),
    )
    min_block_chars = 20
    max_blocks = 50
    denylist = ("hacker news", "guidelines | faq")
    dedupe = True
