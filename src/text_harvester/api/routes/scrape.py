"""Scrape route handler.

``GET /api/scrape?url=...&mode=...&batchIndex=...``
    Runs the acquisition and extraction pipeline and returns exactly one of
    the boundary responses (success, mode choice, or failure).  The body is
    always JSON; the HTTP status is derived from the failure kind.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from text_harvester.core.schemas import HarvestFailureResponse, HarvestResponse
from text_harvester.pipeline import run_pipeline

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["scrape"])

#: Failure kind (exception class name) to HTTP status.
_FAILURE_STATUS: dict[str, int] = {
    "InvalidInputError": 400,
    "InsufficientContentError": 400,
    "TooLargeError": 413,
    "FetchTimeoutError": 504,
    "UnreachableError": 502,
    "UpstreamHTTPError": 502,
    "BatchFetchFailedError": 502,
}


def status_for(response: HarvestResponse) -> int:
    """Return the HTTP status code for a boundary response."""
    if isinstance(response, HarvestFailureResponse):
        return _FAILURE_STATUS.get(response.error_type or "", 500)
    return 200


@router.get("/api/scrape")
async def scrape(
    request: Request,
    url: str | None = Query(default=None, description="Absolute http(s) URL to harvest."),
    mode: str | None = Query(default=None, description="'sample', 'batch' or 'complete'."),
    batch_index: str | None = Query(
        default=None,
        alias="batchIndex",
        description="Zero-based batch window index (batch mode only).",
    ),
) -> JSONResponse:
    """Harvest readable text from *url*.

    Returns:
        The serialised boundary response with camelCase keys.
    """
    client = getattr(request.app.state, "http_client", None)
    result = await run_pipeline(url, mode, batch_index, client=client)
    status_code = status_for(result)

    logger.info(
        "scrape_complete",
        url=url,
        mode=mode,
        batch_index=batch_index,
        success=result.success,
        status_code=status_code,
    )
    return JSONResponse(result.model_dump(by_alias=True), status_code=status_code)
