"""Content acquisition: size probing, fetch planning and bounded retrieval.

Sub-modules:
- ``config``: fixed thresholds, budgets and the client user-agent
- ``planner``: ``HEAD`` size probe and the pure plan-selection function
- ``fetcher``: httpx streaming fetcher enforcing time and byte budgets
"""

from __future__ import annotations

from text_harvester.acquisition.fetcher import RawDocument, fetch_document
from text_harvester.acquisition.planner import (
    BatchPlan,
    CompletePlan,
    FetchPlan,
    Mode,
    NeedsModeChoice,
    SamplePlan,
    SizeProbe,
    plan_fetch,
    probe_size,
)

__all__ = [
    "BatchPlan",
    "CompletePlan",
    "FetchPlan",
    "Mode",
    "NeedsModeChoice",
    "RawDocument",
    "SamplePlan",
    "SizeProbe",
    "fetch_document",
    "plan_fetch",
    "probe_size",
]
