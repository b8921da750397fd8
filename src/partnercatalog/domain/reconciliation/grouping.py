"""Group solutions by partner name and look partners up in the grouping.

The grouping is an insertion-ordered mapping keyed by the lower-cased, trimmed
partner name. Fuzzy lookup scans it in that order and the first acceptable key
wins, so the outcome depends on the order solutions were grouped in and on
nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from partnercatalog.domain.model import Solution


def normalize_name(name: str) -> str:
    return name.strip().lower()


@dataclass(slots=True)
class SolutionGroup:
    """Solutions sharing one partner name; ``name`` is the first spelling seen."""

    name: str
    solutions: list[Solution] = field(default_factory=list["Solution"])


type SolutionGrouping = dict[str, SolutionGroup]


def group_solutions_by_partner(solutions: Iterable[Solution]) -> SolutionGrouping:
    """Group ``solutions`` case-insensitively by trimmed partner name.

    Solutions without a partner name are left out.
    """

    groups: SolutionGrouping = {}
    for solution in solutions:
        display = solution.partner_name.strip()
        if not display:
            continue
        key = normalize_name(display)
        group = groups.get(key)
        if group is None:
            group = groups[key] = SolutionGroup(name=display)
        group.solutions.append(solution)
    return groups


def is_fuzzy_match(key: str, name: str) -> bool:
    """Equal, or either contains the other; both arguments already normalized."""

    return key == name or name in key or key in name


def find_group_key(groups: SolutionGrouping, partner_name: str) -> tuple[str | None, bool]:
    """Return ``(key, fuzzy)`` for ``partner_name`` in ``groups``.

    Exact case-insensitive hits are returned with ``fuzzy=False``. Otherwise the
    first key in insertion order passing ``is_fuzzy_match`` is returned with
    ``fuzzy=True``. Blank names never match.
    """

    name = normalize_name(partner_name)
    if not name:
        return None, False
    if name in groups:
        return name, False
    for key in groups:
        if is_fuzzy_match(key, name):
            return key, True
    return None, False


__all__ = [
    "SolutionGroup",
    "SolutionGrouping",
    "find_group_key",
    "group_solutions_by_partner",
    "is_fuzzy_match",
    "normalize_name",
]
