"""Constants for content acquisition and output bounding.

These thresholds are fixed properties of the design, not runtime settings.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------

#: Probed size (bytes) above which the caller must choose a partial mode.
LARGE_FILE_THRESHOLD: int = 1_000_000

# ---------------------------------------------------------------------------
# Fetch timing
# ---------------------------------------------------------------------------

#: Wall-clock budget (seconds) for a complete fetch and for the size probe.
COMPLETE_TIMEOUT: float = 10.0

#: Wall-clock budget (seconds) for sample and batch fetches.
PARTIAL_TIMEOUT: float = 15.0

# ---------------------------------------------------------------------------
# Byte and character budgets
# ---------------------------------------------------------------------------

#: Maximum decoded characters accepted by a complete fetch.
COMPLETE_MAX_CHARS: int = 500_000

#: Length of the byte-range prefix requested in sample mode.
SAMPLE_BYTES: int = 200_000

#: Word count after which early-stop streaming halts.  Deliberately above the
#: ~10k words a sample targets, since cleanup discards part of the markup.
SAMPLE_TARGET_WORDS: int = 15_000

#: Minimum number of newly decoded characters between two word counts.
EARLY_STOP_CHECK_CHARS: int = 10_000

#: Size of one batch window in bytes.
BATCH_WINDOW_BYTES: int = 150_000

# ---------------------------------------------------------------------------
# Output bounds
# ---------------------------------------------------------------------------

#: Maximum length of the returned text, truncation marker included.
MAX_OUTPUT_CHARS: int = 100_000

#: Outputs shorter than this are treated as extraction failures.
MIN_OUTPUT_CHARS: int = 50

#: Appended to truncated non-sample output.
TRUNCATION_MARKER: str = "\n\n[Truncated for processing]"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

#: User-agent string sent with every HTTP request.
USER_AGENT: str = "Mozilla/5.0 (compatible; TextHarvester/1.0; +https://github.com/text-harvester)"
