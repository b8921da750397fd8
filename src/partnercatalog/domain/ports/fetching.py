"""Ports for fetching remote catalog pages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class FetchError(RuntimeError):
    """Raised by a page fetcher when the page could not be retrieved."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class PageNotReadyError(FetchError):
    """Raised when a fetched page never showed its content marker in time."""


@runtime_checkable
class PageFetcher(Protocol):
    """One-shot primitive turning a URL into rendered page content.

    Implementations must not retry; collectors own every retry budget.
    """

    async def fetch(self, url: str) -> str: ...


class ContentReady(Protocol):
    """Predicate telling whether fetched content carries the expected payload."""

    def __call__(self, content: str) -> bool: ...


class ProgressSink(Protocol):
    """Receives coarse progress updates: records collected so far and the estimated total."""

    def __call__(self, collected: int, estimated_total: int) -> None: ...


__all__ = ["ContentReady", "FetchError", "PageFetcher", "PageNotReadyError", "ProgressSink"]
