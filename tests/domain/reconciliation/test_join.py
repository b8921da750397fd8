from __future__ import annotations

import pytest

from partnercatalog.domain.model import JoinedPartner, Partner, Solution
from partnercatalog.domain.reconciliation import (
    find_group_key,
    group_solutions_by_partner,
    is_fuzzy_match,
    join_partners,
    reconcile,
)


def _solution(name: str, partner: str) -> Solution:
    return Solution(solution_name=name, partner_name=partner)


def test_case_insensitive_grouping_uses_one_group() -> None:
    groups = group_solutions_by_partner(
        [_solution("One", "ACME"), _solution("Two", " acme "), _solution("Three", "Beta")]
    )

    assert list(groups) == ["acme", "beta"]
    assert groups["acme"].name == "ACME"
    assert [solution.solution_name for solution in groups["acme"].solutions] == ["One", "Two"]


def test_grouping_keeps_sharp_s_apart_from_double_s() -> None:
    groups = group_solutions_by_partner(
        [_solution("One", "Straße GmbH"), _solution("Two", "STRASSE GMBH")]
    )

    assert list(groups) == ["straße gmbh", "strasse gmbh"]


def test_grouping_skips_solutions_without_partner() -> None:
    groups = group_solutions_by_partner([_solution("Orphan", "  ")])

    assert groups == {}


@pytest.mark.parametrize(
    ("key", "name", "expected"),
    [
        ("acme", "acme", True),
        ("acme corp", "acme", True),
        ("acme", "acme corp", True),
        ("beta", "acme", False),
    ],
)
def test_is_fuzzy_match(key: str, name: str, *, expected: bool) -> None:
    assert is_fuzzy_match(key, name) is expected


def test_find_group_key_prefers_exact_then_first_fuzzy_key() -> None:
    groups = group_solutions_by_partner(
        [
            _solution("One", "Acme Corp"),
            _solution("Two", "Acme Holdings"),
            _solution("Three", "Acme"),
        ]
    )

    assert find_group_key(groups, "ACME") == ("acme", False)
    assert find_group_key(groups, "Acme Co") == ("acme corp", True)
    assert find_group_key(groups, "Zeta") == (None, False)
    assert find_group_key(groups, "   ") == (None, False)


def test_fuzzy_match_attaches_solutions_by_containment() -> None:
    result = reconcile([{"Name": "Acme"}], [{"SolutionName": "X", "PartnerName": "Acme Corp"}])

    assert result.partners == [
        JoinedPartner(partner_name="Acme", solutions=(_solution("X", "Acme Corp"),))
    ]
    assert result.report.fuzzy_matches[0].partner_name == "Acme"
    assert result.report.fuzzy_matches[0].group_name == "Acme Corp"


def test_join_keeps_every_partner_and_sorts_by_count_then_name() -> None:
    partners = [Partner(name=name) for name in ("Zeta", "Beta", "Acme", "Delta")]
    solutions = [
        _solution("One", "Beta"),
        _solution("Two", "ACME"),
        _solution("Three", "acme"),
        _solution("Four", "Zeta"),
    ]

    joined = join_partners(partners, solutions)

    assert [(record.partner_name, record.solution_count) for record in joined] == [
        ("Acme", 2),
        ("Beta", 1),
        ("Zeta", 1),
        ("Delta", 0),
    ]
    assert all(record.solution_count == len(record.solutions) for record in joined)


def test_join_is_idempotent() -> None:
    partners = [Partner(name="Acme"), Partner(name="Acme Labs"), Partner(name="Beta")]
    solutions = [_solution("One", "Acme"), _solution("Two", "Beta Systems")]

    assert join_partners(partners, solutions) == join_partners(partners, solutions)


def test_report_lists_unmatched_solutions() -> None:
    result = reconcile(
        [Partner(name="Acme")],
        [_solution("One", "Acme"), _solution("Two", "Gamma"), _solution("Three", "")],
    )

    assert result.report.partners_with_solutions == 1
    assert result.report.solutions_matched == 1
    assert result.report.unmatched_solutions == 2
    assert result.report.unmatched_partner_names == ["Gamma"]


def test_blank_partner_names_never_match() -> None:
    joined = join_partners([Partner(name="  ")], [_solution("One", "Acme")])

    assert joined == [JoinedPartner(partner_name="")]


@pytest.mark.parametrize(
    ("partners", "solutions"),
    [
        (
            {"partners": [{"name": "Acme"}]},
            {"solutions": [{"solution_name": "One", "partner_name": "Acme"}]},
        ),
        ([{"NAME": "Acme"}], [{"solutionName": "One", "partnerName": "Acme"}]),
        ({"Partners": [Partner(name="Acme")]}, [_solution("One", "Acme")]),
    ],
)
def test_accepts_bare_and_wrapped_collections(partners: object, solutions: object) -> None:
    joined = join_partners(partners, solutions)  # type: ignore[arg-type]

    assert joined == [JoinedPartner(partner_name="Acme", solutions=(_solution("One", "Acme"),))]


def test_wrapper_without_records_field_yields_nothing() -> None:
    joined = join_partners({"items": [{"name": "Acme"}]}, [])

    assert joined == []


def test_missing_collections_are_rejected() -> None:
    with pytest.raises(TypeError):
        reconcile(None, [])
    with pytest.raises(TypeError):
        reconcile([], None)
    with pytest.raises(TypeError):
        reconcile("Acme", [])  # type: ignore[arg-type]
