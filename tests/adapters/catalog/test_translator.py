from __future__ import annotations

from partnercatalog.adapters.catalog import (
    PartnerPageRules,
    SolutionPageRules,
    parse_catalog_payload,
)
from partnercatalog.domain.model import Partner, Solution
from tests.helpers.pages import (
    LOADING_PAGE,
    no_results_page,
    partner_display_page,
    partners_page,
    solutions_page,
)


def test_parse_catalog_payload_reads_embedded_json() -> None:
    payload = parse_catalog_payload(solutions_page([("Widget", "Acme")], total=42))

    assert payload is not None
    assert payload.reported_total == 42
    assert payload.assets[0].metadata is not None
    assert payload.assets[0].metadata.solution_name == "Widget"


def test_parse_catalog_payload_handles_missing_and_malformed_json() -> None:
    assert parse_catalog_payload(LOADING_PAGE) is None
    assert parse_catalog_payload("var jsonResponse = JSON.stringify({not json});") is None


def test_solution_rules_readiness_needs_payload_and_total() -> None:
    rules = SolutionPageRules()

    assert rules.is_content_ready(solutions_page([("Widget", "Acme")]))
    assert not rules.is_content_ready(LOADING_PAGE)
    assert not rules.is_content_ready("<script>var jsonResponse = null;</script>")


def test_solution_rules_extract_pairs_and_skip_incomplete_assets() -> None:
    content = (
        "var jsonResponse = JSON.stringify("
        '{"results": {"total": 3, "assets": ['
        '{"metadata": {"TeamSite/Metadata/SolutionName": [" Widget "],'
        ' "TeamSite/Metadata/SolutionPartnerName": "Acme"}},'
        '{"metadata": {"TeamSite/Metadata/SolutionName": "Lonely"}},'
        '{"title": "no metadata"}'
        "]}});"
    )

    assert SolutionPageRules().extract_solutions(content) == [
        Solution(solution_name="Widget", partner_name="Acme")
    ]


def test_solution_rules_end_of_data_markers() -> None:
    rules = SolutionPageRules()

    assert rules.is_end_of_data(no_results_page())
    assert rules.is_end_of_data("<div>There are no partners found</div><div class='partner-card'>")
    assert rules.is_end_of_data("<html>plain page without listing</html>")
    assert not rules.is_end_of_data(solutions_page([]))


def test_solution_rules_reported_total_accepts_top_level_string() -> None:
    content = 'var jsonResponse = JSON.stringify({"total": "17", "results": {"assets": []}});'

    assert SolutionPageRules().reported_total(content) == 17
    assert SolutionPageRules().reported_total(LOADING_PAGE) is None


def test_partner_rules_extract_names() -> None:
    rules = PartnerPageRules()
    content = partners_page(["Acme", " Beta ", "Café Systems"])

    assert rules.is_content_ready(content)
    assert rules.extract_partners(content) == [
        Partner(name="Acme"),
        Partner(name="Beta"),
        Partner(name="Café Systems"),
    ]


def test_partner_rules_fall_back_to_display_names() -> None:
    rules = PartnerPageRules()
    content = partner_display_page(["Acme", "Beta"])

    assert rules.is_content_ready(content)
    assert rules.extract_partners(content) == [Partner(name="Acme"), Partner(name="Beta")]


def test_partner_rules_decode_escaped_names() -> None:
    content = r'{"TeamSite/Metadata/Name":"Acme \u0026 Sons"}'

    assert PartnerPageRules().extract_partners(content) == [Partner(name="Acme & Sons")]
    assert not PartnerPageRules().is_content_ready(LOADING_PAGE)
