"""Join collected partners with catalog solutions."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from partnercatalog.domain.model import JoinedPartner

from .grouping import find_group_key, group_solutions_by_partner
from .records import coerce_partners, coerce_solutions

if TYPE_CHECKING:
    from partnercatalog.domain.model import Solution

    from .records import RecordCollection

log = getLogger(__name__)

_UNMATCHED_NAMES_LOGGED = 10


@dataclass(frozen=True, slots=True)
class FuzzyMatch:
    partner_name: str
    group_name: str


@dataclass(slots=True)
class JoinReport:
    """Diagnostics for one join; none of it is part of the joined records."""

    partners_total: int = 0
    partners_with_solutions: int = 0
    solutions_total: int = 0
    solutions_matched: int = 0
    unmatched_solutions: int = 0
    unmatched_partner_names: list[str] = field(default_factory=list[str])
    fuzzy_matches: list[FuzzyMatch] = field(default_factory=list[FuzzyMatch])


@dataclass(slots=True)
class JoinResult:
    partners: list[JoinedPartner]
    report: JoinReport


def sort_joined(records: list[JoinedPartner]) -> list[JoinedPartner]:
    """Most solutions first; ties by partner name."""

    return sorted(records, key=lambda record: (-record.solution_count, record.partner_name))


def reconcile(
    partners: RecordCollection | None,
    solutions: RecordCollection | None,
) -> JoinResult:
    """Attach grouped solutions to each partner, exact match first, then fuzzy.

    Both collections may be bare sequences or wrappers exposing the records
    under ``partners`` / ``solutions``. ``None`` is rejected with ``TypeError``.
    """

    partner_records = coerce_partners(partners)
    solution_records = coerce_solutions(solutions)
    groups = group_solutions_by_partner(solution_records)
    log.info(
        "Joining %s partners with %s solutions in %s partner groups",
        len(partner_records),
        len(solution_records),
        len(groups),
    )

    report = JoinReport(partners_total=len(partner_records), solutions_total=len(solution_records))
    used_keys: set[str] = set()
    joined: list[JoinedPartner] = []
    for partner in partner_records:
        key, fuzzy = find_group_key(groups, partner.name)
        if key is None:
            joined.append(JoinedPartner(partner_name=partner.name))
            continue
        group = groups[key]
        if fuzzy:
            log.debug("Fuzzy match: %r -> %r", partner.name, group.name)
            report.fuzzy_matches.append(
                FuzzyMatch(partner_name=partner.name, group_name=group.name)
            )
        used_keys.add(key)
        joined.append(JoinedPartner(partner_name=partner.name, solutions=tuple(group.solutions)))

    result = sort_joined(joined)

    report.partners_with_solutions = sum(1 for record in result if record.solution_count > 0)
    report.solutions_matched = sum(record.solution_count for record in result)
    unmatched: list[Solution] = [
        solution
        for key, group in groups.items()
        if key not in used_keys
        for solution in group.solutions
    ]
    blank = [solution for solution in solution_records if not solution.partner_name.strip()]
    report.unmatched_solutions = len(unmatched) + len(blank)
    report.unmatched_partner_names = [
        group.name for key, group in groups.items() if key not in used_keys
    ]

    log.info(
        "Join completed: %s/%s partners have solutions, %s solutions attached",
        report.partners_with_solutions,
        report.partners_total,
        report.solutions_matched,
    )
    if report.unmatched_solutions:
        names = report.unmatched_partner_names
        log.warning(
            "%s solutions could not be matched to partners; unmatched names (%s): %s%s",
            report.unmatched_solutions,
            len(names),
            ", ".join(repr(name) for name in names[:_UNMATCHED_NAMES_LOGGED]),
            " ..." if len(names) > _UNMATCHED_NAMES_LOGGED else "",
        )

    return JoinResult(partners=result, report=report)


def join_partners(
    partners: RecordCollection | None,
    solutions: RecordCollection | None,
) -> list[JoinedPartner]:
    return reconcile(partners, solutions).partners


__all__ = [
    "FuzzyMatch",
    "JoinReport",
    "JoinResult",
    "join_partners",
    "reconcile",
    "sort_joined",
]
