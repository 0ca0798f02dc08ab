"""Bounded async HTTP fetcher.

Uses ``httpx`` streaming responses for every retrieval so that byte and
character budgets can be enforced while the body arrives, not after it has
been buffered.  Each network attempt runs inside its own
``asyncio.wait_for`` scope: when the wall-clock budget expires the attempt's
coroutine is cancelled, its ``async with client.stream(...)`` block exits
and the response is closed before :func:`fetch_document` returns.

Plans are executed as follows:

- :class:`~text_harvester.acquisition.planner.CompletePlan`: stream the
  whole body, aborting once it exceeds the complete-fetch ceiling.
- :class:`~text_harvester.acquisition.planner.SamplePlan`: request a byte
  prefix; if the remote ignores ``Range`` stream with early stop, and if it
  rejects the range retry once without it.
- :class:`~text_harvester.acquisition.planner.BatchPlan`: request one byte
  window; a non-2xx status is a hard failure.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import urllib.parse
from dataclasses import dataclass
from typing import Awaitable, TypeVar

import httpx

from text_harvester.acquisition.config import (
    COMPLETE_MAX_CHARS,
    EARLY_STOP_CHECK_CHARS,
    LARGE_FILE_THRESHOLD,
    USER_AGENT,
)
from text_harvester.acquisition.planner import (
    BatchPlan,
    CompletePlan,
    FetchPlan,
    SamplePlan,
)
from text_harvester.core.exceptions import (
    BatchFetchFailedError,
    FetchTimeoutError,
    TooLargeError,
    UnreachableError,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class RawDocument:
    """Raw bytes of a fetched resource plus what is needed to interpret them.

    Produced by :func:`fetch_document` and consumed once by extraction.

    Attributes:
        url: URL after following redirects.
        content: Body bytes (complete body, prefix or batch window).
        content_type: Declared ``Content-Type`` header value ("" if absent).
        encoding: Charset used to decode ``content``.
        plan: The plan the document was fetched under.
    """

    url: str
    content: bytes
    content_type: str
    encoding: str
    plan: FetchPlan

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding, errors="replace")

    @property
    def mime_type(self) -> str:
        return self.content_type.split(";")[0].strip().lower()

    @property
    def is_plain_text(self) -> bool:
        """``True`` for ``text/plain`` responses and ``.txt`` paths."""
        if self.mime_type == "text/plain":
            return True
        path = urllib.parse.urlparse(self.url).path
        return path.lower().endswith(".txt")


# ---------------------------------------------------------------------------
# Incremental decoding
# ---------------------------------------------------------------------------


def _response_encoding(response: httpx.Response) -> str:
    """Return a usable codec name for *response*, defaulting to UTF-8."""
    encoding = response.encoding or "utf-8"
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        return "utf-8"


class _TextAccumulator:
    """Collect body bytes while tracking the decoded character count.

    Decoding is incremental, so a multibyte character split across two
    chunks is counted once, when it completes.
    """

    def __init__(self, encoding: str) -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._content = bytearray()
        self._parts: list[str] = []
        self.chars = 0
        self.chars_since_check = 0

    def feed(self, chunk: bytes) -> None:
        self._content.extend(chunk)
        decoded = self._decoder.decode(chunk)
        self._parts.append(decoded)
        self.chars += len(decoded)
        self.chars_since_check += len(decoded)

    def count_words(self) -> int:
        self.chars_since_check = 0
        return len("".join(self._parts).split())

    @property
    def content(self) -> bytes:
        return bytes(self._content)


# ---------------------------------------------------------------------------
# Stream readers
# ---------------------------------------------------------------------------


async def read_window(response: httpx.Response, *, start: int, length: int) -> bytes:
    """Read *length* bytes starting at offset *start* of the response body.

    Stops consuming the stream as soon as the window is filled.  Used with
    ``start=0`` to cap partial-content bodies and with the window offset when
    a server ignores the ``Range`` header and sends the whole body.

    Args:
        response: An open streaming response.
        start: Offset of the first byte to keep.
        length: Maximum number of bytes to return.

    Returns:
        The window's bytes; shorter than *length* if the body ends first.
    """
    buffer = bytearray()
    offset = 0
    async for chunk in response.aiter_bytes():
        chunk_end = offset + len(chunk)
        if chunk_end > start:
            buffer.extend(chunk[max(start - offset, 0):])
        offset = chunk_end
        if len(buffer) >= length:
            break
    return bytes(buffer[:length])


async def read_until_words(
    response: httpx.Response,
    *,
    target_words: int,
    check_chars: int = EARLY_STOP_CHECK_CHARS,
) -> bytes:
    """Stream the body until its decoded word count exceeds *target_words*.

    Words are counted over the accumulated text only after at least
    *check_chars* new characters have arrived, so the stream may overshoot
    the target by up to one interval.

    Args:
        response: An open streaming response.
        target_words: Word count after which reading stops.
        check_chars: Minimum number of new characters between two counts.

    Returns:
        The bytes read before stopping (the whole body if it is short).
    """
    accumulator = _TextAccumulator(_response_encoding(response))
    async for chunk in response.aiter_bytes():
        accumulator.feed(chunk)
        if accumulator.chars_since_check < check_chars:
            continue
        words = accumulator.count_words()
        if words > target_words:
            logger.info(
                "fetcher: early stop for %s after %d words (%d chars)",
                response.url,
                words,
                accumulator.chars,
            )
            break
    return accumulator.content


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_stream(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    byte_range: str | None = None,
):
    """Return the ``client.stream`` context manager for a GET of *url*."""
    headers = {"User-Agent": USER_AGENT}
    if byte_range is not None:
        headers["Range"] = byte_range
    return client.stream(
        "GET",
        url,
        headers=headers,
        timeout=timeout,
        follow_redirects=True,
    )


def _declared_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("content-length")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _document(response: httpx.Response, content: bytes, plan: FetchPlan) -> RawDocument:
    return RawDocument(
        url=str(response.url),
        content=content,
        content_type=response.headers.get("content-type", ""),
        encoding=_response_encoding(response),
        plan=plan,
    )


async def run_bounded(operation: Awaitable[T], *, url: str, timeout: float) -> T:
    """Await *operation* under a wall-clock budget, translating transport errors.

    On expiry the operation is cancelled and awaited to completion before
    :class:`FetchTimeoutError` is raised, so any stream it holds is closed.

    Args:
        operation: Coroutine performing one network attempt.
        url: URL being fetched (for error context).
        timeout: Budget in seconds.

    Returns:
        Whatever *operation* returns.

    Raises:
        FetchTimeoutError: The budget or an httpx timeout expired.
        UnreachableError: DNS, connection or other transport failure.
    """
    try:
        return await asyncio.wait_for(operation, timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        logger.warning("fetcher: timeout after %.1fs fetching %s", timeout, url)
        raise FetchTimeoutError("Request timed out", url=url, timeout=timeout) from exc
    except httpx.TransportError as exc:
        logger.warning("fetcher: transport error for %s: %s", url, exc)
        raise UnreachableError("Could not connect to URL", url=url) from exc
    except httpx.TooManyRedirects as exc:
        logger.warning("fetcher: too many redirects for %s", url)
        raise UnreachableError("Could not connect to URL (too many redirects)", url=url) from exc


# ---------------------------------------------------------------------------
# Per-plan attempts
# ---------------------------------------------------------------------------


async def _fetch_complete(url: str, plan: CompletePlan, client: httpx.AsyncClient) -> RawDocument:
    async with _open_stream(client, url, timeout=plan.timeout) as response:
        if not response.is_success:
            logger.info("fetcher: HTTP %d for %s", response.status_code, url)
            raise UpstreamHTTPError(response.status_code, url=url)

        declared = _declared_length(response)
        if declared is not None and declared > LARGE_FILE_THRESHOLD:
            raise TooLargeError(
                "File too large (>1MB). Please download and upload the file instead.",
                url=url,
            )

        accumulator = _TextAccumulator(_response_encoding(response))
        async for chunk in response.aiter_bytes():
            accumulator.feed(chunk)
            if accumulator.chars > COMPLETE_MAX_CHARS:
                logger.info(
                    "fetcher: aborting %s after %d chars (ceiling %d)",
                    url,
                    accumulator.chars,
                    COMPLETE_MAX_CHARS,
                )
                raise TooLargeError(
                    "Content too large. Please try a smaller file or download and upload instead.",
                    url=url,
                )
        return _document(response, accumulator.content, plan)


async def _fetch_sample_range(
    url: str, plan: SamplePlan, client: httpx.AsyncClient
) -> RawDocument | None:
    """Try the byte-range prefix; return ``None`` if the remote rejected it."""
    byte_range = f"bytes=0-{plan.prefix_bytes - 1}"
    async with _open_stream(client, url, timeout=plan.timeout, byte_range=byte_range) as response:
        if response.status_code == 206:
            content = await read_window(response, start=0, length=plan.prefix_bytes)
            return _document(response, content, plan)
        if response.is_success:
            logger.info("fetcher: %s ignored Range; streaming with early stop", url)
            content = await read_until_words(response, target_words=plan.target_words)
            return _document(response, content, plan)
        logger.info(
            "fetcher: range request for %s got HTTP %d; retrying without Range",
            url,
            response.status_code,
        )
        return None


async def _fetch_sample_stream(url: str, plan: SamplePlan, client: httpx.AsyncClient) -> RawDocument:
    async with _open_stream(client, url, timeout=plan.timeout) as response:
        if not response.is_success:
            logger.info("fetcher: HTTP %d for %s", response.status_code, url)
            raise UpstreamHTTPError(response.status_code, url=url)
        content = await read_until_words(response, target_words=plan.target_words)
        return _document(response, content, plan)


async def _fetch_batch(url: str, plan: BatchPlan, client: httpx.AsyncClient) -> RawDocument:
    async with _open_stream(
        client, url, timeout=plan.timeout, byte_range=plan.range_header
    ) as response:
        if response.status_code == 206:
            content = await read_window(response, start=0, length=plan.window_bytes)
        elif response.is_success:
            logger.info(
                "fetcher: %s ignored Range; skipping to offset %d", url, plan.start
            )
            content = await read_window(response, start=plan.start, length=plan.window_bytes)
        else:
            logger.info("fetcher: batch %d of %s got HTTP %d", plan.index, url, response.status_code)
            raise BatchFetchFailedError(response.status_code, url=url)
        return _document(response, content, plan)


# ---------------------------------------------------------------------------
# Public fetch function
# ---------------------------------------------------------------------------


async def fetch_document(
    url: str,
    plan: FetchPlan,
    *,
    client: httpx.AsyncClient,
) -> RawDocument:
    """Retrieve *url* under *plan*'s time and byte budgets.

    No attempt is retried, with one exception: a sample whose range request
    is rejected is re-issued once without ``Range``, under a fresh budget.

    Args:
        url: Target URL (already validated as http/https).
        plan: The plan chosen by
            :func:`~text_harvester.acquisition.planner.plan_fetch`.
        client: Shared :class:`httpx.AsyncClient` instance.

    Returns:
        A :class:`RawDocument` instance.

    Raises:
        FetchTimeoutError: A wall-clock budget expired.
        UnreachableError: The host could not be reached.
        TooLargeError: A complete fetch exceeded its ceiling.
        BatchFetchFailedError: A batch request got a non-2xx/206 response.
        UpstreamHTTPError: A complete or sample fetch got a non-2xx response.
    """
    if isinstance(plan, BatchPlan):
        logger.info("fetcher: batch %d (%s) of %s", plan.index, plan.range_header, url)
        return await run_bounded(_fetch_batch(url, plan, client), url=url, timeout=plan.timeout)

    if isinstance(plan, SamplePlan):
        logger.info("fetcher: sample of %s", url)
        document = await run_bounded(
            _fetch_sample_range(url, plan, client), url=url, timeout=plan.timeout
        )
        if document is None:
            document = await run_bounded(
                _fetch_sample_stream(url, plan, client), url=url, timeout=plan.timeout
            )
        return document

    logger.info("fetcher: complete fetch of %s", url)
    return await run_bounded(_fetch_complete(url, plan, client), url=url, timeout=plan.timeout)
