"""Reddit threads (old and new layouts).

Post and comment bodies live in ``<div slot="text-body">`` on the new
layout and in ``<div class="md">`` on old.reddit.com.  The post title is
prepended when present.
"""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register


@register
class RedditStrategy(ExtractorStrategy):
    """Post title, post body and comments."""

    name = "reddit"
    priority = 20
    host_patterns = ("reddit.com",)
    strip_selectors = ("nav", "faceplate-tracker")
    title_selector = "h1"
    selectors = (
        Selector(blocks='div[slot="text-body"], div.md'),
        Selector(blocks="p"),
    )
    min_block_chars = 20
    max_blocks = 50
    denylist = (
        "reddit",
        "log in",
        "sign up",
        "more posts you may like",
        "upvote",
    )
    dedupe = True
