"""Shared pytest fixtures for Text Harvester tests.

Fixture summary
---------------
http_client     : httpx.AsyncClient for tests that mock the network with respx.
make_document   : Factory building a ``RawDocument`` without any network access.
html_page       : Helper wrapping body markup in a minimal HTML document.

No test touches the real network.  Outbound HTTP is mocked with ``respx``;
the API is exercised in-process through ``httpx.ASGITransport``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------
# Set before any application module is imported so that Settings() reads a
# predictable environment during collection.

_TEST_ENV_DEFAULTS: dict[str, str] = {
    "TEXT_HARVESTER_LOG_LEVEL": "INFO",
    "TEXT_HARVESTER_DEBUG": "false",
}

for _key, _default in _TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _default)

# ---------------------------------------------------------------------------
# Application imports (after env bootstrap)
# ---------------------------------------------------------------------------

from text_harvester.acquisition.fetcher import RawDocument  # noqa: E402
from text_harvester.acquisition.planner import CompletePlan, FetchPlan  # noqa: E402
from text_harvester.config.settings import get_settings  # noqa: E402

# Clear the lru_cache so Settings() re-reads from the patched environment.
get_settings.cache_clear()


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an AsyncClient configured like the application's shared client."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def _html_page(body: str, title: str = "Test page") -> str:
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title}</title>"
        "<script>var tracking = 'should never appear';</script>"
        "<style>.x { color: red; }</style>"
        f"</head><body>{body}</body></html>"
    )


@pytest.fixture
def html_page() -> Callable[..., str]:
    """Return a helper that wraps body markup in a minimal HTML document."""
    return _html_page


@pytest.fixture
def make_document() -> Callable[..., RawDocument]:
    """Return a factory for ``RawDocument`` instances.

    Usage::

        doc = make_document("https://en.wikipedia.org/wiki/X", "<p>...</p>")
    """

    def _make(
        url: str,
        markup: str,
        content_type: str = "text/html; charset=utf-8",
        plan: FetchPlan | None = None,
    ) -> RawDocument:
        return RawDocument(
            url=url,
            content=markup.encode("utf-8"),
            content_type=content_type,
            encoding="utf-8",
            plan=plan or CompletePlan(),
        )

    return _make
