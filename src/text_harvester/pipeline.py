"""Pipeline orchestrator: from a ``(url, mode, batchIndex)`` request to a bounded text.

Stages run strictly in sequence::

    Validate → Probe → (NeedsModeChoice) / Plan → Fetch → Classify + Extract
             → Normalize → Bound → (Success)

Any stage failure ends the request with a single failure outcome.  Two entry
points are provided:

- :func:`harvest` returns a :class:`HarvestResult` or a
  :class:`~text_harvester.acquisition.planner.NeedsModeChoice` and raises
  :class:`~text_harvester.core.exceptions.TextHarvesterError` subclasses.
- :func:`run_pipeline` wraps :func:`harvest` and always returns exactly one
  response model of the boundary contract; it never raises.
"""

from __future__ import annotations

import logging
import urllib.parse
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from text_harvester.acquisition.config import (
    MAX_OUTPUT_CHARS,
    MIN_OUTPUT_CHARS,
    TRUNCATION_MARKER,
    USER_AGENT,
)
from text_harvester.acquisition.fetcher import fetch_document
from text_harvester.acquisition.planner import (
    FetchPlan,
    Mode,
    NeedsModeChoice,
    plan_fetch,
    probe_size,
)
from text_harvester.core.exceptions import (
    InsufficientContentError,
    InvalidInputError,
    TextHarvesterError,
)
from text_harvester.core.schemas import (
    AvailableModes,
    HarvestFailureResponse,
    HarvestResponse,
    HarvestSuccessResponse,
    ModeChoiceResponse,
)
from text_harvester.extraction.classifier import select_strategy
from text_harvester.extraction.normalizer import count_words

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})

#: Separator placed between extracted blocks.
BLOCK_SEPARATOR: str = "\n\n"

# ---------------------------------------------------------------------------
# Request and result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContentRequest:
    """A validated scrape request.

    Attributes:
        url: Absolute http(s) URL of the resource.
        mode: Requested mode, or ``None`` if unset.
        batch_index: Batch window index; only meaningful for ``Mode.BATCH``.
    """

    url: str
    mode: Mode | None = None
    batch_index: int = 0

    @classmethod
    def from_params(
        cls,
        url: str | None,
        mode: str | None = None,
        batch_index: int | str | None = None,
    ) -> ContentRequest:
        """Validate raw request parameters.

        Raises:
            InvalidInputError: If the URL is missing or not http(s), the mode
                is unknown, or the batch index is negative.
        """
        return cls(
            url=validate_url(url),
            mode=parse_mode(mode),
            batch_index=validate_batch_index(batch_index),
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Bounded text and its word count.

    Attributes:
        text: Final text, at most ``MAX_OUTPUT_CHARS`` characters.
        word_count: Number of whitespace-delimited tokens in ``text``.
        truncated: ``True`` if content was removed and a marker appended.
    """

    text: str
    word_count: int
    truncated: bool


@dataclass(frozen=True)
class HarvestResult:
    """Successful outcome of :func:`harvest`.

    Attributes:
        url: The requested URL.
        mode: Mode of the plan actually executed.
        batch_index: Batch index of the request.
        strategy: Name of the extraction strategy used.
        extraction: The bounded text.
    """

    url: str
    mode: Mode
    batch_index: int
    strategy: str
    extraction: ExtractionResult


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_url(url: str | None) -> str:
    """Return *url* stripped of surrounding whitespace if it is an absolute http(s) URL."""
    if url is None or not url.strip():
        raise InvalidInputError("URL parameter is required")
    url = url.strip()
    try:
        parsed = urllib.parse.urlparse(url)
        host = parsed.hostname
    except ValueError as exc:
        raise InvalidInputError("Invalid URL") from exc
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not host:
        raise InvalidInputError("Invalid URL: only absolute http and https URLs are supported")
    return url


def parse_mode(mode: str | Mode | None) -> Mode | None:
    """Convert a raw mode parameter into a :class:`Mode` (``None`` if unset)."""
    if mode is None or isinstance(mode, Mode):
        return mode
    value = mode.strip().lower()
    if not value:
        return None
    try:
        return Mode(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid mode '{mode}'. Use 'sample' or 'batch'."
        ) from None


def validate_batch_index(batch_index: int | str | None) -> int:
    """Convert a raw batch index (``None`` means 0) into a non-negative int."""
    if batch_index is None or batch_index == "":
        return 0
    try:
        value = int(batch_index)
    except (TypeError, ValueError):
        raise InvalidInputError("batchIndex must be a non-negative integer") from None
    if value < 0:
        raise InvalidInputError("batchIndex must be a non-negative integer")
    return value


# ---------------------------------------------------------------------------
# Normalize and bound
# ---------------------------------------------------------------------------


def assemble_text(blocks: list[str]) -> str:
    """Join the already-normalized *blocks*, dropping empty ones.

    Strategies clean each block exactly once when they accept it; no
    decoding happens here.
    """
    return BLOCK_SEPARATOR.join(block for block in blocks if block.strip())


def bound_text(text: str, plan: FetchPlan) -> ExtractionResult:
    """Apply the output ceiling and the minimum viable length.

    Text longer than :data:`MAX_OUTPUT_CHARS` is cut so that the result,
    marker included, is exactly that long.  Sample plans are cut without a
    marker and are not reported as truncated.

    Raises:
        InsufficientContentError: If the bounded text is shorter than
            :data:`MIN_OUTPUT_CHARS`.
    """
    truncated = False
    if len(text) > MAX_OUTPUT_CHARS:
        if plan.mode is Mode.SAMPLE:
            text = text[:MAX_OUTPUT_CHARS]
        else:
            text = text[: MAX_OUTPUT_CHARS - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER
            truncated = True

    if len(text) < MIN_OUTPUT_CHARS:
        raise InsufficientContentError()

    return ExtractionResult(text=text, word_count=count_words(text), truncated=truncated)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _client_scope(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client*, or a request-scoped client that is closed afterwards."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    ) as owned:
        yield owned


async def harvest(
    request: ContentRequest,
    *,
    client: httpx.AsyncClient | None = None,
) -> HarvestResult | NeedsModeChoice:
    """Run the acquisition and extraction pipeline for one request.

    Args:
        request: A validated :class:`ContentRequest`.
        client: Optional shared :class:`httpx.AsyncClient`.  When omitted a
            client is created for this request and closed afterwards.

    Returns:
        A :class:`HarvestResult`, or a
        :class:`~text_harvester.acquisition.planner.NeedsModeChoice` when a
        large resource was requested without a mode.

    Raises:
        TextHarvesterError: Any fetch failure or insufficient content.
    """
    async with _client_scope(client) as http:
        probe = await probe_size(request.url, client=http)
        plan = plan_fetch(probe, request.mode, request.batch_index)
        if isinstance(plan, NeedsModeChoice):
            logger.info(
                "pipeline: %s is %d bytes; asking caller to choose a mode",
                request.url,
                plan.file_size_bytes,
            )
            return plan

        document = await fetch_document(request.url, plan, client=http)

    strategy = select_strategy(document)
    blocks = strategy.extract(document)
    text = assemble_text(blocks)
    extraction = bound_text(text, plan)

    logger.info(
        "pipeline: %s -> %d chars, %d words (mode=%s, strategy=%s, truncated=%s)",
        request.url,
        len(extraction.text),
        extraction.word_count,
        plan.mode.value,
        strategy.name,
        extraction.truncated,
    )
    return HarvestResult(
        url=request.url,
        mode=plan.mode,
        batch_index=request.batch_index,
        strategy=strategy.name,
        extraction=extraction,
    )


def _to_response(outcome: HarvestResult | NeedsModeChoice) -> HarvestResponse:
    if isinstance(outcome, NeedsModeChoice):
        return ModeChoiceResponse(
            file_size_bytes=outcome.file_size_bytes,
            file_size_mb=outcome.file_size_mb,
            available_modes=AvailableModes(**outcome.available_modes),
            batch_count=outcome.batch_count,
        )
    return HarvestSuccessResponse(
        text=outcome.extraction.text,
        word_count=outcome.extraction.word_count,
        url=outcome.url,
        mode=outcome.mode.value,
        batch_index=outcome.batch_index,
        truncated=outcome.extraction.truncated,
    )


async def run_pipeline(
    url: str | None,
    mode: str | None = None,
    batch_index: int | str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> HarvestResponse:
    """Validate raw parameters, run :func:`harvest` and map the outcome to a response.

    Produces exactly one response per call and never raises.

    Args:
        url: Raw URL parameter.
        mode: Raw mode parameter (``"sample"``, ``"batch"``, ``"complete"`` or ``None``).
        batch_index: Raw batch index (defaults to 0).
        client: Optional shared :class:`httpx.AsyncClient`.

    Returns:
        A :class:`~text_harvester.core.schemas.ModeChoiceResponse`,
        :class:`~text_harvester.core.schemas.HarvestSuccessResponse` or
        :class:`~text_harvester.core.schemas.HarvestFailureResponse`.
    """
    try:
        request = ContentRequest.from_params(url, mode, batch_index)
        outcome = await harvest(request, client=client)
    except TextHarvesterError as exc:
        logger.info("pipeline: request for %s failed: %s", url, exc)
        return HarvestFailureResponse(error=str(exc), error_type=type(exc).__name__)
    except Exception:
        logger.exception("pipeline: unexpected error for %s", url)
        return HarvestFailureResponse(error="Failed to scrape URL", error_type="Exception")
    return _to_response(outcome)
