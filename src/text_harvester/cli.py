"""Command-line entry point: harvest one URL and print the response as JSON.

Usage::

    text-harvester https://en.wikipedia.org/wiki/Python_(programming_language)
    text-harvester https://example.org/big.txt --mode batch --batch-index 2

The JSON response (camelCase keys, same shape as ``GET /api/scrape``) is
written to stdout; log records go to stderr.

Exit codes:
    0: Success or a mode choice for a large file.
    1: Any failure response.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from text_harvester.config.settings import get_settings
from text_harvester.core.logging_config import configure_logging
from text_harvester.pipeline import run_pipeline


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace`` with ``url``, ``mode``, ``batch_index``
        and ``log_level`` attributes.
    """
    parser = argparse.ArgumentParser(
        prog="text-harvester",
        description="Fetch a public URL within fixed budgets and print its readable text as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("url", help="Absolute http(s) URL to harvest.")
    parser.add_argument(
        "--mode",
        choices=("complete", "sample", "batch"),
        default=None,
        help="Acquisition mode. Omit to let the size probe decide.",
    )
    parser.add_argument(
        "--batch-index",
        type=int,
        default=0,
        help="Zero-based batch window index (batch mode only). Default: 0.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging verbosity. Defaults to the TEXT_HARVESTER_LOG_LEVEL setting.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``text-harvester`` console script."""
    args = _parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level, stream=sys.stderr)

    result = asyncio.run(run_pipeline(args.url, args.mode, args.batch_index))
    print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
