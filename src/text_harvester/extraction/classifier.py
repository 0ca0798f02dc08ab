"""Domain classifier: pick the extraction strategy for a document.

Classification is a pure function of the URL's lower-cased host, checked
against the registered strategies in priority order (Unsent Project,
Reddit, Twitter/X, Medium, Substack, Hacker News, Stack Overflow, Wikipedia,
GitHub).  The first match wins; everything else, including any failure
inside the classifier, routes to the generic strategy.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING

from text_harvester.extraction.registry import get_strategy, ordered_strategies

if TYPE_CHECKING:
    from text_harvester.acquisition.fetcher import RawDocument
    from text_harvester.extraction.base import ExtractorStrategy

logger = logging.getLogger(__name__)


def classify(url: str) -> ExtractorStrategy:
    """Return the extraction strategy for *url*'s host.

    Never raises; unmatched hosts and classification errors yield the
    generic strategy.

    Args:
        url: Absolute URL of the document.

    Returns:
        An ``ExtractorStrategy`` instance.
    """
    try:
        host = (urllib.parse.urlparse(url).hostname or "").lower()
        if host:
            for cls in ordered_strategies():
                if cls.host_patterns and cls.matches_host(host):
                    logger.debug("classifier: %s -> %s", host, cls.name)
                    return cls()
    except Exception as exc:  # noqa: BLE001
        logger.warning("classifier: failed for %s: %s; using generic", url, exc)
    return get_strategy("generic")()


def select_strategy(document: RawDocument) -> ExtractorStrategy:
    """Return the strategy for a fetched *document*.

    Plain-text documents skip structural extraction entirely; everything
    else is classified by host.
    """
    if document.is_plain_text:
        return get_strategy("plain_text")()
    return classify(document.url)
