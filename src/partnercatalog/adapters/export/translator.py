"""Translate domain records into their persisted shapes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema import JoinedPartnerRecord, PartnerRecord, SolutionRecord

if TYPE_CHECKING:
    from partnercatalog.domain.model import JoinedPartner, Partner, Solution


def partner_record(partner: Partner) -> PartnerRecord:
    return PartnerRecord(name=partner.name)


def solution_record(solution: Solution) -> SolutionRecord:
    return SolutionRecord(
        solution_name=solution.solution_name,
        partner_name=solution.partner_name,
    )


def joined_partner_record(joined: JoinedPartner) -> JoinedPartnerRecord:
    return JoinedPartnerRecord(
        partner_name=joined.partner_name,
        solutions=[solution_record(solution) for solution in joined.solutions],
        solution_count=joined.solution_count,
    )
