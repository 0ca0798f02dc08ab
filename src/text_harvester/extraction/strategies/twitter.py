"""Twitter / X status pages.

Logged-out pages rarely render tweet markup, so the Open Graph and Twitter
card descriptions are used when no ``tweetText`` container is present.
"""

from __future__ import annotations

from text_harvester.extraction.base import ExtractorStrategy, Selector
from text_harvester.extraction.registry import register

_X_DOMAIN = "x.com"

_DESCRIPTION_META = ", ".join(
    f'meta[{key}="{prefix}:description"]'
    for prefix in ("og", "twitter")
    for key in ("property", "name")
)


@register
class TwitterStrategy(ExtractorStrategy):
    """Tweet text, falling back to the page's description meta tags."""

    name = "twitter"
    priority = 30
    host_patterns = ("twitter.com", _X_DOMAIN)
    selectors = (
        Selector(blocks='div[data-testid="tweetText"]'),
        Selector(blocks=_DESCRIPTION_META, attribute="content"),
        Selector(blocks="p"),
    )
    min_block_chars = 10
    max_blocks = 30
    denylist = (
        "log in",
        "sign up",
        "don't miss what's happening",
        "don’t miss what’s happening",
        "javascript is not available",
    )
    dedupe = True

    @classmethod
    def matches_host(cls, host: str) -> bool:
        # "x.com" must match whole labels so that e.g. box.com is not captured.
        if "twitter.com" in host:
            return True
        return host == _X_DOMAIN or host.endswith("." + _X_DOMAIN)
