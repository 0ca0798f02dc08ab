"""Text normalization shared by every extraction strategy.

Entities are decoded *before* tags are stripped, so markup that was
escaped in the source (``&lt;p&gt;``) is removed rather than surviving as
literal angle brackets.  Only tag-shaped spans are stripped: a bare ``<``
or ``>`` in prose or code (``lo < hi``) is kept.
"""

from __future__ import annotations

import html as html_module
import re

_TAG_RE = re.compile(r"<(?:/?[A-Za-z][^<>]*|![^<>]*)>")
_WHITESPACE_RE = re.compile(r"\s+")


def squash_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean(text: str) -> str:
    """Decode HTML entities, strip tags and collapse whitespace.

    Covers the common entities (``&quot;``, ``&amp;``, ``&lt;``, ``&gt;``,
    ``&nbsp;``, ``&#39;``, ``&hellip;``) and every other named or numeric
    entity.  Tags are replaced by a space so adjacent words do not fuse.
    Idempotent for input that is not itself double-encoded.

    Args:
        text: Raw markup fragment or text.

    Returns:
        Single-spaced text without leading or trailing whitespace.
    """
    decoded = html_module.unescape(text)
    return squash_whitespace(_TAG_RE.sub(" ", decoded))


def count_words(text: str) -> int:
    """Return the number of non-empty whitespace-delimited tokens in *text*."""
    return len(text.split())
