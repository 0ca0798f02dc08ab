"""Abstract base class for extraction strategies.

Every source family (Reddit, Wikipedia, ...) is one ``ExtractorStrategy``
subclass registered with :func:`~text_harvester.extraction.registry.register`.
Most subclasses are pure data: they declare which hosts they serve and a
priority list of :class:`Selector` objects (CSS selectors applied to the
parsed document), and inherit the matching machinery implemented here.

Example::

    from text_harvester.extraction.base import ExtractorStrategy, Selector
    from text_harvester.extraction.registry import register

    @register
    class ExampleStrategy(ExtractorStrategy):
        name = "example"
        priority = 95
        host_patterns = ("example.org",)
        strip_selectors = ("aside",)
        selectors = (Selector(container="main", blocks="p, li"),)
        min_block_chars = 20
        max_blocks = 40

Extraction never raises.  A strategy whose selectors find nothing, or that
fails on malformed markup, hands the document to the generic strategy.
"""

from __future__ import annotations

import logging
import re
from abc import ABC
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, ClassVar

from bs4 import BeautifulSoup, Comment, Tag

from text_harvester.extraction.normalizer import clean, squash_whitespace

if TYPE_CHECKING:
    from text_harvester.acquisition.fetcher import RawDocument

logger = logging.getLogger(__name__)

TextBlock = str
"""A contiguous chunk of extracted prose (paragraph, heading, post or message)."""

#: Parser handed to BeautifulSoup; tolerant of the truncated markup that
#: sample and batch windows produce.
HTML_PARSER = "html.parser"

#: Elements removed from every document before matching.
BASE_STRIP_SELECTORS: tuple[str, ...] = ("script", "style", "noscript")


@lru_cache(maxsize=64)
def denylist_pattern(terms: tuple[str, ...]) -> re.Pattern[str] | None:
    """Compile *terms* into one case-insensitive pattern matching whole words only.

    ``"follow"`` matches "Follow us" but not "the following".
    """
    if not terms:
        return None
    alternatives = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


def parse_html(markup: str, strip_selectors: tuple[str, ...] = ()) -> BeautifulSoup:
    """Parse *markup* and remove comments plus every element matching *strip_selectors*."""
    soup = BeautifulSoup(markup, HTML_PARSER)
    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()
    for selector in BASE_STRIP_SELECTORS + strip_selectors:
        for element in soup.select(selector):
            # Nested matches are already gone with their ancestor.
            if not element.decomposed:
                element.decompose()
    return soup


def element_text(element: Tag, attribute: str | None = None) -> str:
    """Return the normalized text of *element*, or of one of its attributes.

    Element content is re-serialized and passed through
    :func:`~text_harvester.extraction.normalizer.clean` exactly once.
    Attribute values arrive already decoded by the parser, so only their
    whitespace is collapsed.
    """
    if attribute is not None:
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        return squash_whitespace(value or "")
    return clean(element.decode_contents())


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Selector:
    """One entry in a strategy's priority list.

    Attributes:
        blocks: CSS selector (comma-separated alternatives allowed) for the
            candidate block elements.
        container: Optional CSS selector limiting where ``blocks`` is
            searched.  Every container match is searched; a block inside
            two nested containers is returned once.
        attribute: Read this attribute (``alt``, ``content``) instead of the
            element's text.
    """

    blocks: str
    container: str | None = None
    attribute: str | None = None

    @property
    def css(self) -> str:
        """The combined selector string passed to ``soup.select``."""
        if self.container is None:
            return self.blocks
        return ", ".join(
            f"{outer.strip()} {inner.strip()}"
            for outer in self.container.split(",")
            for inner in self.blocks.split(",")
        )

    def candidates(self, soup: BeautifulSoup) -> list[str]:
        """Return the text of every matched element in document order.

        An element nested inside an element already matched by this selector
        is skipped, its text being part of the outer block.
        """
        matched: set[int] = set()
        texts: list[str] = []
        for element in soup.select(self.css):
            if any(id(parent) in matched for parent in element.parents):
                continue
            matched.add(id(element))
            texts.append(element_text(element, self.attribute))
        return texts


# ---------------------------------------------------------------------------
# Strategy base class
# ---------------------------------------------------------------------------


class ExtractorStrategy(ABC):
    """Abstract base class for all extraction strategies.

    Class Attributes:
        name: Unique registry key (e.g. ``"reddit"``).
        priority: Position in the classifier's lookup order; lower values
            are consulted first.
        host_patterns: Lower-cased host substrings served by this strategy.
            Empty for strategies that are never chosen by host.
        strip_selectors: CSS selectors for elements removed before matching,
            in addition to :data:`BASE_STRIP_SELECTORS`.
        title_selector: Optional CSS selector for a lead block (e.g. the
            page title) prepended to the selector blocks.
        selectors: Priority list; the first selector yielding at least one
            accepted block wins and later selectors are not consulted.
        inline_noise: Optional pattern removed from each block's text
            (e.g. bracketed citation markers).
        min_block_chars: Cleaned blocks shorter than this are dropped.
        max_blocks: Maximum number of blocks returned (``None`` for no cap).
        denylist: Case-insensitive terms marking site chrome; blocks
            containing any of them as whole words are dropped.
        dedupe: Drop blocks identical to an earlier block.
    """

    name: ClassVar[str]
    priority: ClassVar[int] = 1000
    host_patterns: ClassVar[tuple[str, ...]] = ()
    strip_selectors: ClassVar[tuple[str, ...]] = ()
    title_selector: ClassVar[str | None] = None
    selectors: ClassVar[tuple[Selector, ...]] = ()
    inline_noise: ClassVar[re.Pattern[str] | None] = None
    min_block_chars: ClassVar[int] = 20
    max_blocks: ClassVar[int | None] = 50
    denylist: ClassVar[tuple[str, ...]] = ()
    dedupe: ClassVar[bool] = False

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @classmethod
    def matches_host(cls, host: str) -> bool:
        """Return ``True`` if this strategy serves the lower-cased *host*."""
        return any(pattern in host for pattern in cls.host_patterns)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self, document: RawDocument) -> list[TextBlock]:
        """Convert *document* into an ordered list of text blocks.

        Never raises: if matching fails or finds nothing the document is
        handed to the generic strategy.

        Args:
            document: The fetched resource.

        Returns:
            Cleaned text blocks in document order.
        """
        try:
            blocks = self.extract_blocks(document.text)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "extraction: %s strategy failed for %s: %s; using generic",
                self.name,
                document.url,
                exc,
            )
            blocks = []

        if blocks:
            logger.debug(
                "extraction: %s strategy found %d blocks for %s",
                self.name,
                len(blocks),
                document.url,
            )
            return blocks
        return self.fallback(document)

    def fallback(self, document: RawDocument) -> list[TextBlock]:
        """Hand *document* to the generic strategy."""
        from text_harvester.extraction.registry import get_strategy  # noqa: PLC0415

        logger.info("extraction: %s strategy found no content for %s", self.name, document.url)
        return get_strategy("generic")().extract(document)

    def extract_blocks(self, markup: str) -> list[TextBlock]:
        """Parse *markup* and apply the strip list, title selector and selector list.

        Returns an empty list if no selector yields an accepted block.
        """
        soup = self.prepare(markup)

        lead: list[str] = []
        if self.title_selector is not None:
            title = soup.select_one(self.title_selector)
            if title is not None:
                lead = [element_text(title)]

        for selector in self.selectors:
            blocks = self.accept(selector.candidates(soup))
            if blocks:
                return self.accept(lead + blocks) if lead else blocks
        return []

    def prepare(self, markup: str) -> BeautifulSoup:
        """Parse *markup* with the base and strategy-specific regions removed."""
        return parse_html(markup, self.strip_selectors)

    def accept(self, texts: list[str]) -> list[TextBlock]:
        """Apply the noise, length, denylist, dedupe and count rules to cleaned *texts*."""
        denied = denylist_pattern(self.denylist)
        seen: set[str] = set()
        blocks: list[TextBlock] = []
        for text in texts:
            if self.inline_noise is not None:
                text = squash_whitespace(self.inline_noise.sub(" ", text))
            if len(text) < self.min_block_chars:
                continue
            if denied is not None and denied.search(text):
                continue
            if self.dedupe:
                key = text.lower()
                if key in seen:
                    continue
                seen.add(key)
            blocks.append(text)
            if self.max_blocks is not None and len(blocks) >= self.max_blocks:
                break
        return blocks
