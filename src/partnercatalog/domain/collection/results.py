"""Outcome types shared by the collectors."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class CollectionReport:
    """Page accounting for one collector run.

    ``dropped_pages`` are pages that failed every phase; their records are
    missing from the result rather than raised as an error.
    """

    pages_planned: int = 0
    pages_succeeded: int = 0
    pages_recovered: int = 0
    dropped_pages: list[int] = field(default_factory=list[int])
    duplicates_skipped: int = 0
    invalid_rejected: int = 0

    @property
    def pages_failed(self) -> int:
        return len(self.dropped_pages)

    @property
    def success_rate(self) -> float:
        if self.pages_planned == 0:
            return 1.0
        return (self.pages_planned - self.pages_failed) / self.pages_planned


@dataclass(slots=True)
class CollectionResult[T]:
    records: list[T]
    report: CollectionReport


__all__ = ["CollectionReport", "CollectionResult"]
