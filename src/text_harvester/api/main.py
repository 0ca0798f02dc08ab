"""HTTP surface of Text Harvester.

``create_app()`` wires the CORS policy from settings, the request-logging
middleware and the ``/health`` and ``/api/scrape`` routers.  One outbound
``httpx.AsyncClient`` is opened at startup and shared by every scrape
request through ``app.state.http_client``.

Run locally with::

    uvicorn text_harvester.api.main:app --reload
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Awaitable, Callable

import httpx
import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from text_harvester import __version__
from text_harvester.acquisition.config import USER_AGENT
from text_harvester.config.settings import get_settings
from text_harvester.core.logging_config import configure_logging, request_id_var

configure_logging("INFO")

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied IDs are echoed into logs and headers, so only short
# token-like values are accepted.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id_for(request: Request) -> str:
    """Reuse a well-formed incoming request ID, otherwise mint a UUID4."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(incoming):
        return incoming
    return str(uuid.uuid4())


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request ID to the log context and log one line per request."""
    request_id = _request_id_for(request)
    request_id_var.set(request_id)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_failed")
        raise

    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
    log = logger.warning if response.status_code >= 400 else logger.info
    log("request_complete", status_code=response.status_code, elapsed_ms=elapsed_ms)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _register_lifecycle(application: FastAPI) -> None:
    settings = get_settings()

    @application.on_event("startup")
    async def open_http_client() -> None:
        application.state.http_client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        logger.info(
            "application_startup",
            version=__version__,
            debug=settings.debug,
            log_level=settings.log_level,
        )

    @application.on_event("shutdown")
    async def close_http_client() -> None:
        client = getattr(application.state, "http_client", None)
        if client is not None:
            await client.aclose()
        logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Build the FastAPI application from the current settings.

    Tests call this directly to get an instance bound to their environment;
    ``uvicorn`` uses the module-level :data:`app`.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Fetches a public URL within fixed time and size budgets and "
            "returns its readable text."
        ),
        version=__version__,
        debug=settings.debug,
        redirect_slashes=False,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=settings.allowed_methods,
        allow_headers=settings.allowed_headers,
        expose_headers=[REQUEST_ID_HEADER],
    )
    application.middleware("http")(log_requests)

    from text_harvester.api.routes import health, scrape  # noqa: PLC0415

    application.include_router(health.router)
    application.include_router(scrape.router)

    _register_lifecycle(application)
    return application


app = create_app()
