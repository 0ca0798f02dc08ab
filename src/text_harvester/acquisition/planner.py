"""Fetch planning: decide how much of a remote resource to download.

A body-free ``HEAD`` probe reports the resource size; :func:`plan_fetch`
turns that probe and the caller's requested mode into exactly one fetch plan,
or into a :class:`NeedsModeChoice` when a large resource was requested
without a mode.  Planning itself is pure; only :func:`probe_size` touches the
network.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

import httpx

from text_harvester.acquisition.config import (
    BATCH_WINDOW_BYTES,
    COMPLETE_TIMEOUT,
    LARGE_FILE_THRESHOLD,
    PARTIAL_TIMEOUT,
    SAMPLE_BYTES,
    SAMPLE_TARGET_WORDS,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Fetch mode requested by the caller.

    Attributes:
        COMPLETE: Download the whole body (the default for small resources).
        SAMPLE: Download a bounded prefix of a large resource.
        BATCH: Download one fixed-size byte window of a large resource.
    """

    COMPLETE = "complete"
    SAMPLE = "sample"
    BATCH = "batch"


MODE_DESCRIPTIONS: dict[str, str] = {
    Mode.SAMPLE.value: (
        f"Extract a sample of about 10,000 words from the beginning of the file "
        f"(first {SAMPLE_BYTES // 1000} KB)"
    ),
    Mode.BATCH.value: (
        f"Process the file in {BATCH_WINDOW_BYTES // 1000} KB batches; "
        "request batchIndex 0, 1, 2, ... in turn"
    ),
}


# ---------------------------------------------------------------------------
# Probe and plans
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SizeProbe:
    """Best-effort metadata obtained without downloading the body.

    Attributes:
        byte_length: Value of ``Content-Length``, or ``None`` if unknown.
        mime_type: Media type from ``Content-Type`` without parameters, or ``None``.
    """

    byte_length: int | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class CompletePlan:
    """Fetch the entire body, capped at the complete-fetch ceiling."""

    mode: Mode = Mode.COMPLETE
    timeout: float = COMPLETE_TIMEOUT


@dataclass(frozen=True)
class SamplePlan:
    """Fetch a byte-range prefix, or stream with early stop if ranges are unsupported."""

    mode: Mode = Mode.SAMPLE
    timeout: float = PARTIAL_TIMEOUT
    prefix_bytes: int = SAMPLE_BYTES
    target_words: int = SAMPLE_TARGET_WORDS


@dataclass(frozen=True)
class BatchPlan:
    """Fetch the byte window ``[index * W, index * W + W - 1]``."""

    index: int = 0
    mode: Mode = Mode.BATCH
    timeout: float = PARTIAL_TIMEOUT
    window_bytes: int = BATCH_WINDOW_BYTES

    @property
    def start(self) -> int:
        return self.index * self.window_bytes

    @property
    def end(self) -> int:
        """Inclusive end offset of the window."""
        return self.start + self.window_bytes - 1

    @property
    def range_header(self) -> str:
        return f"bytes={self.start}-{self.end}"


FetchPlan = Union[CompletePlan, SamplePlan, BatchPlan]


@dataclass(frozen=True)
class NeedsModeChoice:
    """Informational outcome: the resource is large and no mode was requested.

    Attributes:
        file_size_bytes: Probed size in bytes.
        available_modes: Mode name to human-readable description.
    """

    file_size_bytes: int
    available_modes: dict[str, str]

    @property
    def file_size_mb(self) -> float:
        return round(self.file_size_bytes / 1024 / 1024, 1)

    @property
    def batch_count(self) -> int:
        return math.ceil(self.file_size_bytes / BATCH_WINDOW_BYTES)


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def plan_fetch(
    probe: SizeProbe,
    requested_mode: Mode | None,
    batch_index: int | None = 0,
) -> FetchPlan | NeedsModeChoice:
    """Select the fetch plan for a request.

    Resources of unknown size or at most :data:`LARGE_FILE_THRESHOLD` bytes
    are always fetched completely, whatever mode was requested.  Larger
    resources require an explicit mode; without one the caller receives a
    :class:`NeedsModeChoice`.

    Args:
        probe: Result of :func:`probe_size`.
        requested_mode: Mode requested by the caller, or ``None`` if unset.
        batch_index: Batch window index, only used for :attr:`Mode.BATCH`.

    Returns:
        One of :class:`CompletePlan`, :class:`SamplePlan`,
        :class:`BatchPlan`, or a :class:`NeedsModeChoice`.
    """
    size = probe.byte_length
    if size is None or size <= LARGE_FILE_THRESHOLD:
        return CompletePlan()

    if requested_mode is None:
        return NeedsModeChoice(
            file_size_bytes=size,
            available_modes=dict(MODE_DESCRIPTIONS),
        )
    if requested_mode is Mode.SAMPLE:
        return SamplePlan()
    if requested_mode is Mode.BATCH:
        return BatchPlan(index=batch_index or 0)
    return CompletePlan()


# ---------------------------------------------------------------------------
# Size probe
# ---------------------------------------------------------------------------


def _parse_probe(response: httpx.Response) -> SizeProbe:
    """Read size and media type from a ``HEAD`` response."""
    content_type = response.headers.get("content-type")
    mime_type = content_type.split(";")[0].strip().lower() if content_type else None

    byte_length: int | None = None
    raw_length = response.headers.get("content-length")
    if raw_length is not None:
        try:
            byte_length = int(raw_length)
        except ValueError:
            logger.debug("planner: ignoring malformed content-length %r", raw_length)
        else:
            if byte_length < 0:
                byte_length = None

    return SizeProbe(byte_length=byte_length, mime_type=mime_type)


async def probe_size(
    url: str,
    *,
    client: httpx.AsyncClient,
    timeout: float = COMPLETE_TIMEOUT,
) -> SizeProbe:
    """Probe the size and type of *url* with a ``HEAD`` request.

    Any failure (transport error, timeout, non-2xx status) yields an empty
    probe, which the planner treats as "unknown, assume small".  The probe
    never fails the request; a genuinely unreachable host is reported by the
    subsequent fetch.

    Args:
        url: Target URL.
        client: Shared :class:`httpx.AsyncClient` instance.
        timeout: Request timeout in seconds.

    Returns:
        A :class:`SizeProbe` instance.
    """
    try:
        response = await asyncio.wait_for(
            client.head(
                url,
                timeout=timeout,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            ),
            timeout,
        )
    except (httpx.HTTPError, asyncio.TimeoutError) as exc:
        logger.debug("planner: size probe failed for %s: %r", url, exc)
        return SizeProbe()

    if not response.is_success:
        logger.debug("planner: size probe got HTTP %d for %s", response.status_code, url)
        return SizeProbe()

    probe = _parse_probe(response)
    logger.debug(
        "planner: probed %s (bytes=%s, type=%s)", url, probe.byte_length, probe.mime_type
    )
    return probe
