"""Unit tests for fetch planning and the HEAD size probe."""

from __future__ import annotations

import httpx
import pytest
import respx

from text_harvester.acquisition.config import (
    BATCH_WINDOW_BYTES,
    COMPLETE_TIMEOUT,
    LARGE_FILE_THRESHOLD,
    PARTIAL_TIMEOUT,
    SAMPLE_BYTES,
    SAMPLE_TARGET_WORDS,
)
from text_harvester.acquisition.planner import (
    BatchPlan,
    CompletePlan,
    Mode,
    NeedsModeChoice,
    SamplePlan,
    SizeProbe,
    plan_fetch,
    probe_size,
)

# ---------------------------------------------------------------------------
# plan_fetch
# ---------------------------------------------------------------------------


class TestPlanFetchSmallOrUnknown:
    """Resources of unknown size or at most 1 MB are always fetched completely."""

    @pytest.mark.parametrize("mode", [None, Mode.COMPLETE, Mode.SAMPLE, Mode.BATCH])
    def test_unknown_size_is_complete_for_any_mode(self, mode: Mode | None) -> None:
        plan = plan_fetch(SizeProbe(), mode, 3)
        assert isinstance(plan, CompletePlan)

    def test_exact_threshold_is_not_large(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=LARGE_FILE_THRESHOLD), None)
        assert isinstance(plan, CompletePlan)

    def test_small_file_ignores_requested_batch(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=50_000), Mode.BATCH, 7)
        assert isinstance(plan, CompletePlan)
        assert plan.mode is Mode.COMPLETE

    def test_complete_plan_budget(self) -> None:
        assert CompletePlan().timeout == COMPLETE_TIMEOUT


class TestPlanFetchLarge:
    """Resources above the threshold require an explicit mode."""

    def test_no_mode_needs_choice(self) -> None:
        outcome = plan_fetch(SizeProbe(byte_length=LARGE_FILE_THRESHOLD + 1), None)
        assert isinstance(outcome, NeedsModeChoice)
        assert outcome.file_size_bytes == LARGE_FILE_THRESHOLD + 1
        assert set(outcome.available_modes) == {"sample", "batch"}

    def test_sample_mode(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=5_000_000), Mode.SAMPLE)
        assert isinstance(plan, SamplePlan)
        assert plan.prefix_bytes == SAMPLE_BYTES
        assert plan.target_words == SAMPLE_TARGET_WORDS
        assert plan.timeout == PARTIAL_TIMEOUT

    def test_batch_mode_carries_index(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=5_000_000), Mode.BATCH, 2)
        assert isinstance(plan, BatchPlan)
        assert plan.index == 2
        assert plan.timeout == PARTIAL_TIMEOUT

    def test_batch_mode_defaults_index_to_zero(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=5_000_000), Mode.BATCH, None)
        assert isinstance(plan, BatchPlan)
        assert plan.index == 0

    def test_explicit_complete_on_large_file(self) -> None:
        plan = plan_fetch(SizeProbe(byte_length=5_000_000), Mode.COMPLETE)
        assert isinstance(plan, CompletePlan)


class TestBatchPlanWindow:
    def test_first_window(self) -> None:
        plan = BatchPlan(index=0)
        assert plan.start == 0
        assert plan.end == BATCH_WINDOW_BYTES - 1
        assert plan.range_header == "bytes=0-149999"

    def test_third_window(self) -> None:
        plan = BatchPlan(index=2)
        assert plan.range_header == "bytes=300000-449999"


class TestNeedsModeChoice:
    def test_size_in_megabytes_rounded_to_one_decimal(self) -> None:
        choice = NeedsModeChoice(file_size_bytes=5_000_000, available_modes={})
        assert choice.file_size_mb == 4.8

    def test_batch_count_rounds_up(self) -> None:
        choice = NeedsModeChoice(file_size_bytes=5_000_000, available_modes={})
        assert choice.batch_count == 34

    def test_batch_count_exact_multiple(self) -> None:
        choice = NeedsModeChoice(file_size_bytes=BATCH_WINDOW_BYTES * 8, available_modes={})
        assert choice.batch_count == 8


# ---------------------------------------------------------------------------
# probe_size
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestProbeSize:
    async def test_reads_length_and_mime_type(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/book.txt").mock(
                return_value=httpx.Response(
                    200,
                    headers={
                        "content-type": "text/plain; charset=utf-8",
                        "content-length": "2500000",
                    },
                )
            )
            probe = await probe_size("https://example.com/book.txt", client=http_client)

        assert probe.byte_length == 2_500_000
        assert probe.mime_type == "text/plain"

    async def test_missing_length_is_unknown(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/page").mock(
                return_value=httpx.Response(200, headers={"content-type": "text/html"})
            )
            probe = await probe_size("https://example.com/page", client=http_client)

        assert probe.byte_length is None
        assert probe.mime_type == "text/html"

    async def test_malformed_length_is_unknown(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/page").mock(
                return_value=httpx.Response(200, headers={"content-length": "lots"})
            )
            probe = await probe_size("https://example.com/page", client=http_client)

        assert probe.byte_length is None

    async def test_error_status_gives_empty_probe(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/page").mock(
                return_value=httpx.Response(405, headers={"content-length": "9999999"})
            )
            probe = await probe_size("https://example.com/page", client=http_client)

        assert probe == SizeProbe()

    async def test_transport_error_gives_empty_probe(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/page").mock(side_effect=httpx.ConnectError("refused"))
            probe = await probe_size("https://example.com/page", client=http_client)

        assert probe == SizeProbe()

    async def test_timeout_gives_empty_probe(self, http_client: httpx.AsyncClient) -> None:
        with respx.mock(base_url="https://example.com") as mock:
            mock.head("/page").mock(side_effect=httpx.ReadTimeout("slow"))
            probe = await probe_size("https://example.com/page", client=http_client)

        assert probe == SizeProbe()
