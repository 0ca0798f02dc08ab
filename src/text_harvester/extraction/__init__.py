"""Text extraction: normalizer, domain classifier and extraction strategies.

Sub-modules:
- ``normalizer``: entity decoding, tag stripping and whitespace collapsing
- ``base``: ``ExtractorStrategy`` base class and BeautifulSoup selector matching
- ``registry``: ``@register`` decorator and strategy lookup
- ``classifier``: host-based strategy selection
- ``strategies``: one module per source family plus the generic fallback
"""

from __future__ import annotations

from text_harvester.extraction.classifier import classify, select_strategy
from text_harvester.extraction.normalizer import clean, count_words

__all__ = [
    "classify",
    "clean",
    "count_words",
    "select_strategy",
]
