"""Reconcile the partner directory with the solutions catalog.

Flow:
1) coerce both collections into domain records (bare or wrapped shapes)
2) group solutions by lower-cased partner name, in insertion order
3) look every partner up: exact key first, then first fuzzy key
4) sort joined records by solution count, then partner name
"""

from __future__ import annotations

from .grouping import (
    SolutionGroup,
    find_group_key,
    group_solutions_by_partner,
    is_fuzzy_match,
    normalize_name,
)
from .join import FuzzyMatch, JoinReport, JoinResult, join_partners, reconcile, sort_joined
from .records import coerce_partners, coerce_solutions, unwrap_records

__all__ = [
    "FuzzyMatch",
    "JoinReport",
    "JoinResult",
    "SolutionGroup",
    "coerce_partners",
    "coerce_solutions",
    "find_group_key",
    "group_solutions_by_partner",
    "is_fuzzy_match",
    "join_partners",
    "normalize_name",
    "reconcile",
    "sort_joined",
    "unwrap_records",
]
