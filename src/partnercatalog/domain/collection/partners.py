"""Batched concurrent collector for the partner directory."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from partnercatalog.domain.ports.fetching import PageNotReadyError
from partnercatalog.domain.retry import RetryExhaustedError, retry_async, wait_until_ready

from .results import CollectionReport, CollectionResult
from .settings import PartnerCollectorSettings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from partnercatalog.domain.model import Partner
    from partnercatalog.domain.ports.extraction import PageUrl, PartnerPageParser
    from partnercatalog.domain.ports.fetching import PageFetcher, ProgressSink
    from partnercatalog.domain.retry import Sleep

log = getLogger(__name__)


def plan_batches(total_pages: int, batch_size: int) -> list[range]:
    """Split pages ``1..total_pages`` into consecutive batches of ``batch_size``."""

    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    return [
        range(start, min(start + batch_size, total_pages + 1))
        for start in range(1, total_pages + 1, batch_size)
    ]


class PartnerAccumulator:
    """Lock-guarded bag shared by the concurrent page tasks of one run."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._partners: list[Partner] = []
        self._failed_pages: set[int] = set()

    async def add_partners(self, partners: Iterable[Partner]) -> None:
        async with self._lock:
            self._partners.extend(partners)

    async def mark_failed(self, page: int) -> None:
        async with self._lock:
            self._failed_pages.add(page)

    async def mark_recovered(self, page: int) -> None:
        async with self._lock:
            self._failed_pages.discard(page)

    @property
    def partner_count(self) -> int:
        return len(self._partners)

    def failed_pages(self) -> list[int]:
        return sorted(self._failed_pages)

    def unique_partners(self) -> list[Partner]:
        unique: dict[str, Partner] = {}
        for partner in self._partners:
            unique.setdefault(partner.name, partner)
        return sorted(unique.values(), key=lambda partner: partner.name)


@dataclass(slots=True, kw_only=True)
class PartnerCollector:
    """Collect the partner directory in sequential batches of concurrent pages.

    Phase one fetches each batch concurrently and records failures without
    stopping the batch. Phase two retries the failed pages one at a time with
    a more patient wait. Pages failing both phases are dropped.
    """

    fetcher: PageFetcher
    parser: PartnerPageParser
    page_url: PageUrl
    settings: PartnerCollectorSettings = field(default_factory=PartnerCollectorSettings)
    sleep: Sleep = asyncio.sleep

    def collect_all_partners(self, progress: ProgressSink | None = None) -> list[Partner]:
        return self.run(progress).records

    def run(self, progress: ProgressSink | None = None) -> CollectionResult[Partner]:
        return asyncio.run(self.run_async(progress))

    async def run_async(self, progress: ProgressSink | None = None) -> CollectionResult[Partner]:
        settings = self.settings
        bag = PartnerAccumulator()
        batches = plan_batches(settings.total_pages, settings.batch_size)
        loop = asyncio.get_running_loop()
        started = loop.time()
        log.info(
            "Collecting partners: %s pages in %s batches of up to %s",
            settings.total_pages,
            len(batches),
            settings.batch_size,
        )

        for number, batch in enumerate(batches, start=1):
            log.info("Batch %s: pages %s-%s", number, batch.start, batch.stop - 1)
            await asyncio.gather(*(self._collect_page(page, bag) for page in batch))

            completed = batch.stop - 1
            elapsed = loop.time() - started
            remaining = max(0.0, elapsed / completed * settings.total_pages - elapsed)
            log.info(
                "Progress: %s/%s pages, %s partners, %s failed, eta %.0fs",
                completed,
                settings.total_pages,
                bag.partner_count,
                len(bag.failed_pages()),
                remaining,
            )
            if progress is not None:
                progress(bag.partner_count, settings.estimated_records)
            if number < len(batches):
                await self.sleep(settings.batch_pause_seconds)

        first_pass_failures = bag.failed_pages()
        recovered = 0
        if first_pass_failures:
            log.info("Retrying %s failed pages sequentially", len(first_pass_failures))
            recovered = await self._retry_failed(first_pass_failures, bag)

        partners = bag.unique_partners()
        report = CollectionReport(
            pages_planned=settings.total_pages,
            pages_succeeded=settings.total_pages - len(first_pass_failures),
            pages_recovered=recovered,
            dropped_pages=bag.failed_pages(),
            duplicates_skipped=bag.partner_count - len(partners),
        )
        log.info(
            "Partners collected: %s unique (%s duplicates removed), %s/%s pages, %s dropped",
            len(partners),
            report.duplicates_skipped,
            report.pages_planned - report.pages_failed,
            report.pages_planned,
            report.pages_failed,
        )
        return CollectionResult(records=partners, report=report)

    def _url_for(self, page: int) -> str:
        page_size = self.settings.page_size
        return self.page_url((page - 1) * page_size, page_size)

    async def _collect_page(self, page: int, bag: PartnerAccumulator) -> None:
        try:
            partners = await self._fetch_page(page)
        except Exception as exc:  # noqa: BLE001
            log.warning("Partner page %s: error %s", page, exc)
            await bag.mark_failed(page)
            return
        if not partners:
            log.warning("Partner page %s: no partners, will retry", page)
            await bag.mark_failed(page)
            return
        await bag.add_partners(partners)
        log.info("Partner page %s: %s partners", page, len(partners))

    async def _fetch_page(self, page: int) -> list[Partner]:
        url = self._url_for(page)

        async def attempt(_number: int) -> str:
            content = await self.fetcher.fetch(url)
            if not self.parser.is_content_ready(content):
                raise PageNotReadyError(f"partner page {page} not rendered yet", url=url)
            return content

        try:
            content = await retry_async(
                attempt,
                budget=self.settings.poll,
                retry_on=(PageNotReadyError,),
                sleep=self.sleep,
                label=f"partner page {page}",
            )
        except RetryExhaustedError:
            # one last look after a longer wait; extraction decides if it is usable
            await self.sleep(self.settings.final_wait_seconds)
            content = await self.fetcher.fetch(url)
        return self.parser.extract_partners(content)

    async def _retry_failed(self, pages: list[int], bag: PartnerAccumulator) -> int:
        recovered = 0
        for page in pages:
            try:
                partners = await self._fetch_page_patiently(page)
            except Exception as exc:  # noqa: BLE001
                log.warning("Partner page %s: retry failed: %s", page, exc)
            else:
                if partners:
                    await bag.add_partners(partners)
                    await bag.mark_recovered(page)
                    recovered += 1
                    log.info("Partner page %s: retry recovered %s partners", page, len(partners))
                else:
                    log.warning("Partner page %s: still no data", page)
            await self.sleep(self.settings.retry_pause_seconds)
        return recovered

    async def _fetch_page_patiently(self, page: int) -> list[Partner]:
        url = self._url_for(page)
        content = await wait_until_ready(
            self.fetcher,
            url,
            ready=self.parser.is_content_ready,
            timeout_seconds=self.settings.retry_timeout_seconds,
            interval_seconds=self.settings.retry_interval_seconds,
            sleep=self.sleep,
        )
        await self.sleep(self.settings.retry_settle_seconds)
        settled = await self.fetcher.fetch(url)
        if self.parser.is_content_ready(settled):
            content = settled
        return self.parser.extract_partners(content)


__all__ = ["PartnerAccumulator", "PartnerCollector", "plan_batches"]
