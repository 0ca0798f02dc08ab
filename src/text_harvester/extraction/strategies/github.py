"""GitHub repository READMEs, issues and pull requests."""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register

_MARKDOWN_BLOCKS = "h1, h2, h3, p, li"


@register
class GitHubStrategy(ExtractorStrategy):
    """Rendered markdown (README) first, then issue and pull request comments."""

    name = "github"
    priority = 90
    host_patterns = ("github.com",)
    selectors = (
        Selector(container="article.markdown-body", blocks=_MARKDOWN_BLOCKS),
        Selector(container="td.comment-body, div.comment-body", blocks=_MARKDOWN_BLOCKS),
        Selector(blocks="p"),
    )
    min_block_chars = 20
    max_blocks = 50
    denylist = (
        "sign in to github",
        "sign up for github",
        "you signed in with another tab",
        "skip to content",
        "github, inc.",
    )
    dedupe = True
