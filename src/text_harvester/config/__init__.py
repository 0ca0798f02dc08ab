"""Configuration package for Text Harvester.

Re-exports the settings symbols so that callers can write::

    from text_harvester.config import get_settings
"""

from __future__ import annotations

from text_harvester.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
