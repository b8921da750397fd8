"""Tuning knobs for the collectors.

The remote sources expose no reliable page count up front, so page totals are
estimates. Everything here is injected into the collectors; the config layer
builds these from the environment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from partnercatalog.domain.retry import RetryBudget, incremental_waits, linear_backoff

DEFAULT_PAGE_SIZE = 5
DEFAULT_ESTIMATED_SOLUTIONS = 200
DEFAULT_PARTNER_TOTAL_PAGES = 114
DEFAULT_PARTNER_BATCH_SIZE = 5


@dataclass(frozen=True, slots=True, kw_only=True)
class SolutionCollectorSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    estimated_records: int = DEFAULT_ESTIMATED_SOLUTIONS
    retry: RetryBudget = field(default_factory=lambda: RetryBudget(3, linear_backoff(1.0)))
    ready_timeout_seconds: float = 6.0
    ready_interval_seconds: float = 0.3
    page_pause_seconds: float = 0.2
    final_retry_wait_seconds: float = 5.0
    adjust_estimate_from_total: bool = True

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if self.estimated_records < 0:
            raise ValueError("estimated_records must not be negative")

    @property
    def estimated_pages(self) -> int:
        return math.ceil(self.estimated_records / self.page_size)


@dataclass(frozen=True, slots=True, kw_only=True)
class PartnerCollectorSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = DEFAULT_PARTNER_TOTAL_PAGES
    batch_size: int = DEFAULT_PARTNER_BATCH_SIZE
    poll: RetryBudget = field(default_factory=lambda: RetryBudget(3, incremental_waits(1.0, 0.5)))
    final_wait_seconds: float = 2.0
    batch_pause_seconds: float = 0.3
    retry_timeout_seconds: float = 8.0
    retry_interval_seconds: float = 0.5
    retry_settle_seconds: float = 3.0
    retry_pause_seconds: float = 0.2

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if self.batch_size < 1:
            raise ValueError("batch_size must be positive")
        if self.total_pages < 0:
            raise ValueError("total_pages must not be negative")

    @property
    def estimated_records(self) -> int:
        return self.total_pages * self.page_size


__all__ = [
    "DEFAULT_ESTIMATED_SOLUTIONS",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PARTNER_BATCH_SIZE",
    "DEFAULT_PARTNER_TOTAL_PAGES",
    "PartnerCollectorSettings",
    "SolutionCollectorSettings",
]
