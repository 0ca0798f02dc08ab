"""Stack Overflow questions: title, question body and answers."""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register


@register
class StackOverflowStrategy(ExtractorStrategy):
    """Question title plus the prose and code of every ``s-prose`` post body."""

    name = "stackoverflow"
    priority = 70
    host_patterns = ("stackoverflow.com",)
    title_selector = "h1"
    selectors = (
        Selector(container="div.s-prose, div.post-text", blocks="p, h1, h2, h3, li, pre"),
        Selector(blocks="p"),
    )
    min_block_chars = 20
    max_blocks = 40
    denylist = (
        "stack overflow",
        "stack exchange",
        "sign up",
        "cookie",
        "add a comment",
    )
    dedupe = True
