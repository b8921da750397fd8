"""Collector tuning loaded from the environment."""

from __future__ import annotations

from partnercatalog.domain.collection.settings import (
    DEFAULT_ESTIMATED_SOLUTIONS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PARTNER_BATCH_SIZE,
    DEFAULT_PARTNER_TOTAL_PAGES,
    PartnerCollectorSettings,
    SolutionCollectorSettings,
)
from partnercatalog.domain.retry import RetryBudget, linear_backoff

from .env import env_float, env_int


def get_solution_collector_settings() -> SolutionCollectorSettings:
    attempts = env_int("PARTNERCATALOG_SOLUTION_ATTEMPTS", 3, minimum=1)
    backoff = env_float("PARTNERCATALOG_SOLUTION_BACKOFF_SECONDS", 1.0, minimum=0.0)
    return SolutionCollectorSettings(
        page_size=env_int("PARTNERCATALOG_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        estimated_records=env_int(
            "PARTNERCATALOG_SOLUTION_ESTIMATED_RECORDS", DEFAULT_ESTIMATED_SOLUTIONS, minimum=0
        ),
        retry=RetryBudget(attempts, linear_backoff(backoff)),
        ready_timeout_seconds=env_float(
            "PARTNERCATALOG_SOLUTION_READY_TIMEOUT_SECONDS", 6.0, minimum=0.0
        ),
        final_retry_wait_seconds=env_float(
            "PARTNERCATALOG_SOLUTION_FINAL_WAIT_SECONDS", 5.0, minimum=0.0
        ),
    )


def get_partner_collector_settings() -> PartnerCollectorSettings:
    return PartnerCollectorSettings(
        page_size=env_int("PARTNERCATALOG_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        total_pages=env_int(
            "PARTNERCATALOG_PARTNER_TOTAL_PAGES", DEFAULT_PARTNER_TOTAL_PAGES, minimum=0
        ),
        batch_size=env_int(
            "PARTNERCATALOG_PARTNER_BATCH_SIZE", DEFAULT_PARTNER_BATCH_SIZE, minimum=1
        ),
        batch_pause_seconds=env_float(
            "PARTNERCATALOG_PARTNER_BATCH_PAUSE_SECONDS", 0.3, minimum=0.0
        ),
        retry_timeout_seconds=env_float(
            "PARTNERCATALOG_PARTNER_RETRY_TIMEOUT_SECONDS", 8.0, minimum=0.0
        ),
    )
