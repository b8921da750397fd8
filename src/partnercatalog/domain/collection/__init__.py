"""Collectors for the two paginated remote record sets."""

from __future__ import annotations

from .partners import PartnerAccumulator, PartnerCollector, plan_batches
from .results import CollectionReport, CollectionResult
from .settings import PartnerCollectorSettings, SolutionCollectorSettings
from .solutions import EmptyPageError, SolutionCollector

__all__ = [
    "CollectionReport",
    "CollectionResult",
    "EmptyPageError",
    "PartnerAccumulator",
    "PartnerCollector",
    "PartnerCollectorSettings",
    "SolutionCollector",
    "SolutionCollectorSettings",
    "plan_batches",
]
