"""Health check route handler.

``GET /health``
    Process-level liveness check.  Performs no I/O and always returns 200;
    the payload lists the registered extraction strategies so deployments
    can confirm which site families are served.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from text_harvester import __version__
from text_harvester.extraction.registry import list_strategies

router = APIRouter(tags=["system"])


@router.get("/health", include_in_schema=True)
async def health() -> JSONResponse:
    """Return a minimal liveness status.

    Returns:
        JSON with keys: ``status``, ``version``, ``strategies``, ``timestamp``.
    """
    return JSONResponse(
        {
            "status": "ok",
            "version": __version__,
            "strategies": [entry["name"] for entry in list_strategies()],
            "timestamp": datetime.now(UTC).isoformat(),
        }
    )
