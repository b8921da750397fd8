"""HTTP page fetcher and page URL builders for the catalog sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from partnercatalog.adapters.http_resilience import ResilientClient
from partnercatalog.domain.ports.fetching import FetchError, PageFetcher

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from partnercatalog.config.http_resilience import ResilienceConfig
    from partnercatalog.domain.ports.extraction import PageUrl

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(frozen=True, slots=True)
class PagedUrl:
    """Builds ``base_url?{offset_param}=..&{size_param}=..`` page URLs."""

    base_url: str
    offset_param: str = "start"
    size_param: str = "max"

    def __call__(self, offset: int, page_size: int) -> str:
        url = httpx.URL(self.base_url).copy_merge_params(
            {self.offset_param: offset, self.size_param: page_size}
        )
        return str(url)


def solutions_page_url(base_url: str) -> PageUrl:
    return PagedUrl(base_url, size_param="max")


def partners_page_url(base_url: str) -> PageUrl:
    return PagedUrl(base_url, size_param="limiter")


@dataclass(slots=True)
class HttpPageFetcher:
    """One-shot page fetcher over a resilient ``httpx`` client.

    Must be entered with ``async with`` so the client lives inside the running
    event loop. Transport failures and error statuses surface as ``FetchError``.
    """

    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False)

    async def __aenter__(self) -> HttpPageFetcher:
        self._client = self.client_factory(self.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> str:
        if self._client is None:
            raise FetchError("HttpPageFetcher used outside of 'async with'", url=url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            log.debug("Fetch failed for %s: %s", url, exc)
            raise FetchError(f"Fetching {url} failed: {exc}", url=url) from exc
        return response.text


if TYPE_CHECKING:
    _fetcher_check: type[PageFetcher] = HttpPageFetcher
