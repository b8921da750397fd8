"""Sequential collector for the partner solutions catalog."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from partnercatalog.domain.retry import RetryExhaustedError, retry_async, wait_until_ready
from partnercatalog.domain.validation import is_valid_solution

from .results import CollectionReport, CollectionResult
from .settings import SolutionCollectorSettings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from partnercatalog.domain.model import Solution
    from partnercatalog.domain.ports.extraction import PageUrl, SolutionPageParser
    from partnercatalog.domain.ports.fetching import PageFetcher
    from partnercatalog.domain.retry import Sleep

log = getLogger(__name__)


class EmptyPageError(RuntimeError):
    """A ready page carried no records and no end-of-data marker."""


@dataclass(slots=True)
class _SolutionRun:
    estimated_pages: int
    records: list[Solution] = field(default_factory=list["Solution"])
    seen: set[tuple[str, str]] = field(default_factory=set[tuple[str, str]])
    report: CollectionReport = field(default_factory=CollectionReport)

    def accept(self, candidates: Iterable[Solution]) -> int:
        added = 0
        for solution in candidates:
            if not is_valid_solution(solution):
                self.report.invalid_rejected += 1
                continue
            key = solution.dedup_key
            if key in self.seen:
                self.report.duplicates_skipped += 1
                continue
            self.seen.add(key)
            self.records.append(solution)
            added += 1
        return added


@dataclass(slots=True, kw_only=True)
class SolutionCollector:
    """Walk the catalog page by page, validating and deduplicating pairs.

    Every page gets a bounded number of attempts in the main pass; pages that
    never succeed get exactly one more try afterwards with a longer wait.
    Pages failing both are dropped and show up in the report only.
    """

    fetcher: PageFetcher
    parser: SolutionPageParser
    page_url: PageUrl
    settings: SolutionCollectorSettings = field(default_factory=SolutionCollectorSettings)
    sleep: Sleep = asyncio.sleep

    def collect_all_solutions(self) -> list[Solution]:
        return self.run().records

    def run(self) -> CollectionResult[Solution]:
        return asyncio.run(self.run_async())

    async def run_async(self) -> CollectionResult[Solution]:
        state = _SolutionRun(estimated_pages=self.settings.estimated_pages)
        log.info(
            "Collecting solutions: page_size=%s, estimated_pages=%s",
            self.settings.page_size,
            state.estimated_pages,
        )

        failed_pages: list[int] = []
        page_index = 0
        while page_index < state.estimated_pages:
            if not await self._collect_page(page_index, state):
                failed_pages.append(page_index)
            page_index += 1
            if page_index < state.estimated_pages:
                await self.sleep(self.settings.page_pause_seconds)

        state.report.pages_planned = page_index
        state.report.pages_succeeded = page_index - len(failed_pages)

        if failed_pages:
            log.warning(
                "Main pass left %s failed pages: %s",
                len(failed_pages),
                ", ".join(str(index + 1) for index in failed_pages),
            )
            await self._final_retry(failed_pages, state)

        state.report.dropped_pages = [index + 1 for index in failed_pages]
        log.info(
            "Solutions collected: %s unique, %s/%s pages, %s dropped",
            len(state.records),
            state.report.pages_planned - state.report.pages_failed,
            state.report.pages_planned,
            state.report.pages_failed,
        )
        records = sorted(state.records, key=lambda solution: solution.solution_name)
        return CollectionResult(records=records, report=state.report)

    def _url_for(self, page_index: int) -> str:
        page_size = self.settings.page_size
        return self.page_url(page_index * page_size, page_size)

    async def _collect_page(self, page_index: int, state: _SolutionRun) -> bool:
        url = self._url_for(page_index)

        async def attempt(number: int) -> int:
            log.debug("Loading solutions page %s (attempt %s): %s", page_index + 1, number, url)
            content = await wait_until_ready(
                self.fetcher,
                url,
                ready=self.parser.is_content_ready,
                timeout_seconds=self.settings.ready_timeout_seconds,
                interval_seconds=self.settings.ready_interval_seconds,
                sleep=self.sleep,
            )
            self._adjust_estimate(content, state)
            candidates = self.parser.extract_solutions(content)
            if candidates:
                return state.accept(candidates)
            if self.parser.is_end_of_data(content):
                log.info("Solutions page %s: valid empty page", page_index + 1)
                return 0
            raise EmptyPageError(f"page {page_index + 1} returned no solutions")

        try:
            added = await retry_async(
                attempt,
                budget=self.settings.retry,
                sleep=self.sleep,
                label=f"solutions page {page_index + 1}",
            )
        except RetryExhaustedError as exc:
            log.warning("Solutions page %s failed: %s", page_index + 1, exc.last_error)
            return False

        log.info(
            "Solutions page %s: %s new (total %s)", page_index + 1, added, len(state.records)
        )
        return True

    def _adjust_estimate(self, content: str, state: _SolutionRun) -> None:
        if not self.settings.adjust_estimate_from_total:
            return
        total = self.parser.reported_total(content)
        if total is None or total <= 0:
            return
        pages = math.ceil(total / self.settings.page_size)
        if pages != state.estimated_pages:
            log.info("Adjusting solutions page estimate %s -> %s", state.estimated_pages, pages)
            state.estimated_pages = pages

    async def _final_retry(self, failed_pages: list[int], state: _SolutionRun) -> None:
        log.info("Final retry for %s failed pages", len(failed_pages))
        for page_index in list(failed_pages):
            url = self._url_for(page_index)
            await self.sleep(self.settings.final_retry_wait_seconds)
            try:
                content = await self.fetcher.fetch(url)
            except Exception as exc:  # noqa: BLE001
                log.warning("Final retry failed for solutions page %s: %s", page_index + 1, exc)
                continue
            candidates = self.parser.extract_solutions(content)
            if not candidates:
                if self.parser.is_end_of_data(content):
                    failed_pages.remove(page_index)
                    state.report.pages_recovered += 1
                    log.info("Final retry: solutions page %s is a valid empty page", page_index + 1)
                else:
                    log.warning("Final retry for solutions page %s found nothing", page_index + 1)
                continue
            added = state.accept(candidates)
            failed_pages.remove(page_index)
            state.report.pages_recovered += 1
            log.info("Final retry recovered solutions page %s: %s new", page_index + 1, added)


__all__ = ["EmptyPageError", "SolutionCollector"]
