"""Built-in extraction strategies.

Importing this package registers every strategy with
:mod:`text_harvester.extraction.registry`.
"""

from __future__ import annotations

from text_harvester.extraction.strategies import (  # noqa: F401
    generic,
    github,
    hackernews,
    longform,
    plain_text,
    reddit,
    stackoverflow,
    twitter,
    unsent_project,
    wikipedia,
)
