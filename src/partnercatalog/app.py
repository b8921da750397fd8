"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from partnercatalog.adapters.catalog import (
    HttpPageFetcher,
    PartnerPageRules,
    SolutionPageRules,
    partners_page_url,
    solutions_page_url,
)
from partnercatalog.adapters.export import (
    load_partners,
    load_solutions,
    write_joined_json,
    write_partners_csv,
    write_partners_json,
    write_solutions_csv,
    write_solutions_json,
)
from partnercatalog.config import (
    get_catalog_config,
    get_partner_collector_settings,
    get_solution_collector_settings,
    get_storage_config,
)
from partnercatalog.domain.collection import PartnerCollector, SolutionCollector
from partnercatalog.domain.reconciliation import reconcile

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from partnercatalog.config import CatalogSourceConfig, StorageConfig
    from partnercatalog.domain.collection import (
        CollectionResult,
        PartnerCollectorSettings,
        SolutionCollectorSettings,
    )
    from partnercatalog.domain.model import Partner, Solution
    from partnercatalog.domain.ports import PageFetcher, ProgressSink
    from partnercatalog.domain.reconciliation import JoinResult


log = getLogger(__name__)


async def _with_fetcher[T](
    fetcher: PageFetcher | None,
    source: CatalogSourceConfig,
    run: Callable[[PageFetcher], Awaitable[T]],
) -> T:
    if fetcher is not None:
        return await run(fetcher)
    async with HttpPageFetcher(source.resilience) as http_fetcher:
        return await run(http_fetcher)


def collect_solutions(
    *,
    fetcher: PageFetcher | None = None,
    source: CatalogSourceConfig | None = None,
    settings: SolutionCollectorSettings | None = None,
    storage: StorageConfig | None = None,
) -> CollectionResult[Solution]:
    """Collect the solutions catalog and write ``solutions.json`` / ``.csv``."""

    effective_source = source or get_catalog_config()
    effective_settings = settings or get_solution_collector_settings()
    effective_storage = storage or get_storage_config()
    rules = SolutionPageRules()

    async def run(active: PageFetcher) -> CollectionResult[Solution]:
        collector = SolutionCollector(
            fetcher=active,
            parser=rules,
            page_url=solutions_page_url(effective_source.solutions_url),
            settings=effective_settings,
        )
        return await collector.run_async()

    log.info("Starting solutions collection from %s", effective_source.solutions_url)
    result = asyncio.run(_with_fetcher(fetcher, effective_source, run))

    json_path = write_solutions_json(result.records, effective_storage.solutions_path())
    write_solutions_csv(result.records, json_path.with_suffix(".csv"))
    log.info(
        "Finished solutions collection: stored=%s, dropped_pages=%s",
        len(result.records),
        result.report.pages_failed,
    )
    return result


def collect_partners(
    *,
    fetcher: PageFetcher | None = None,
    source: CatalogSourceConfig | None = None,
    settings: PartnerCollectorSettings | None = None,
    storage: StorageConfig | None = None,
    progress: ProgressSink | None = None,
) -> CollectionResult[Partner]:
    """Collect the partner directory and write ``partners.json`` / ``.csv``."""

    effective_source = source or get_catalog_config()
    effective_settings = settings or get_partner_collector_settings()
    effective_storage = storage or get_storage_config()
    rules = PartnerPageRules()

    async def run(active: PageFetcher) -> CollectionResult[Partner]:
        collector = PartnerCollector(
            fetcher=active,
            parser=rules,
            page_url=partners_page_url(effective_source.partners_url),
            settings=effective_settings,
        )
        return await collector.run_async(progress)

    log.info("Starting partner collection from %s", effective_source.partners_url)
    result = asyncio.run(_with_fetcher(fetcher, effective_source, run))

    json_path = write_partners_json(result.records, effective_storage.partners_path())
    write_partners_csv(result.records, json_path.with_suffix(".csv"))
    log.info(
        "Finished partner collection: stored=%s, dropped_pages=%s",
        len(result.records),
        result.report.pages_failed,
    )
    return result


def join_collections(*, storage: StorageConfig | None = None) -> JoinResult:
    """Join the stored partner and solution files into ``partners_with_solutions.json``."""

    effective_storage = storage or get_storage_config()
    partners = load_partners(effective_storage.partners_path(ensure=False))
    solutions = load_solutions(effective_storage.solutions_path(ensure=False))

    result = reconcile(partners, solutions)
    write_joined_json(result.partners, effective_storage.joined_path())
    return result


@dataclass(slots=True)
class PipelineResult:
    solutions: CollectionResult[Solution]
    partners: CollectionResult[Partner]
    joined: JoinResult


def run_pipeline(
    *,
    fetcher: PageFetcher | None = None,
    source: CatalogSourceConfig | None = None,
    solution_settings: SolutionCollectorSettings | None = None,
    partner_settings: PartnerCollectorSettings | None = None,
    storage: StorageConfig | None = None,
    progress: ProgressSink | None = None,
) -> PipelineResult:
    """Collect both sources, then join them from the written files."""

    effective_source = source or get_catalog_config()
    effective_storage = storage or get_storage_config()
    solutions = collect_solutions(
        fetcher=fetcher,
        source=effective_source,
        settings=solution_settings,
        storage=effective_storage,
    )
    partners = collect_partners(
        fetcher=fetcher,
        source=effective_source,
        settings=partner_settings,
        storage=effective_storage,
        progress=progress,
    )
    joined = join_collections(storage=effective_storage)
    return PipelineResult(solutions=solutions, partners=partners, joined=joined)
