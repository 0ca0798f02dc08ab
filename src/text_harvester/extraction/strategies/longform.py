"""Long-form publishing platforms: Medium and Substack.

Both render the story as headings and paragraphs inside an article body and
surround it with follow/subscribe prompts, so they share a block selector and
a denylist and differ only in their container selectors.
"""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register

_STORY_BLOCKS = "h1, h2, h3, p, blockquote"

_PLATFORM_CHROME = (
    "sign up",
    "sign in",
    "follow",
    "subscribe",
    "member-only",
    "leave a comment",
    "share this post",
)


@register
class MediumStrategy(ExtractorStrategy):
    """Medium stories: ``<article>`` first, then post-body paragraphs."""

    name = "medium"
    priority = 40
    host_patterns = ("medium.com",)
    selectors = (
        Selector(container="article", blocks=_STORY_BLOCKS),
        Selector(blocks="p.pw-post-body-paragraph"),
        Selector(blocks="p"),
    )
    min_block_chars = 30
    max_blocks = 50
    denylist = ("medium",) + _PLATFORM_CHROME


@register
class SubstackStrategy(ExtractorStrategy):
    """Substack posts: the ``available-content`` body first, then ``<article>``."""

    name = "substack"
    priority = 50
    host_patterns = ("substack.com",)
    selectors = (
        Selector(container="div.available-content, div.body.markup", blocks=_STORY_BLOCKS),
        Selector(container="article", blocks=_STORY_BLOCKS),
        Selector(blocks="p"),
    )
    min_block_chars = 30
    max_blocks = 50
    denylist = ("substack", "ready for more?") + _PLATFORM_CHROME
