"""Application-wide exception hierarchy for Text Harvester.

All custom exceptions subclass ``TextHarvesterError``.  The ``str()`` of each
exception is the human-readable message surfaced verbatim in the ``error``
field of a failure response, so messages are written for end users.

Hierarchy::

    TextHarvesterError
    ├── InvalidInputError
    ├── FetchError                 (url)
    │   ├── UnreachableError
    │   ├── FetchTimeoutError      (timeout)
    │   ├── TooLargeError
    │   ├── BatchFetchFailedError  (status_code)
    │   └── UpstreamHTTPError      (status_code)
    └── InsufficientContentError

Extraction failures are deliberately absent: strategies recover internally
and never surface an error to the orchestrator.
"""

from __future__ import annotations


class TextHarvesterError(Exception):
    """Base class for all Text Harvester exceptions.

    Callers can catch the entire hierarchy with a single ``except`` clause
    when mapping failures to the boundary contract.
    """


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class InvalidInputError(TextHarvesterError):
    """Raised when the request is malformed (bad URL, scheme, mode or batch index).

    Raised before any network access takes place.
    """


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------


class FetchError(TextHarvesterError):
    """Base class for failures while retrieving the remote resource.

    Args:
        message: Human-readable description of the failure.
        url: The URL that was being fetched.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UnreachableError(FetchError):
    """Raised on DNS resolution, connection or other transport failures."""


class FetchTimeoutError(FetchError):
    """Raised when a network attempt exceeds its wall-clock budget.

    Args:
        message: Human-readable description of the failure.
        url: The URL that was being fetched.
        timeout: The budget in seconds that was exceeded.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.timeout = timeout


class TooLargeError(FetchError):
    """Raised when the body exceeds a hard ceiling, even if the probe under-reported it."""


class BatchFetchFailedError(FetchError):
    """Raised when a ranged batch request gets neither a 2xx nor a 206 response.

    Args:
        status_code: HTTP status code returned by the remote.
        url: The URL that was being fetched.
    """

    def __init__(self, status_code: int, url: str | None = None) -> None:
        super().__init__(f"Batch fetch failed: {status_code}", url=url)
        self.status_code = status_code


class UpstreamHTTPError(FetchError):
    """Raised when a complete or sample fetch gets a non-success HTTP status.

    Args:
        status_code: HTTP status code returned by the remote.
        url: The URL that was being fetched.
    """

    def __init__(self, status_code: int, url: str | None = None) -> None:
        super().__init__(f"Failed to scrape URL (HTTP {status_code})", url=url)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class InsufficientContentError(TextHarvesterError):
    """Raised when the bounded output is shorter than the minimum viable length."""

    def __init__(self, message: str = "Could not extract meaningful text from this URL") -> None:
        super().__init__(message)
