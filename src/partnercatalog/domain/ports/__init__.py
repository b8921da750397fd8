"""Domain port definitions for adapters."""

from __future__ import annotations

from .extraction import PageUrl, PartnerPageParser, SolutionPageParser
from .fetching import ContentReady, FetchError, PageFetcher, PageNotReadyError, ProgressSink

__all__ = [
    "ContentReady",
    "FetchError",
    "PageFetcher",
    "PageNotReadyError",
    "PageUrl",
    "PartnerPageParser",
    "ProgressSink",
    "SolutionPageParser",
]
