"""Translate catalog page content into domain records."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from partnercatalog.domain.model import Partner, Solution

from .schema import CatalogPayload

if TYPE_CHECKING:
    from partnercatalog.domain.ports.extraction import PartnerPageParser, SolutionPageParser

log = getLogger(__name__)

JSON_RESPONSE_PATTERN: Final = re.compile(
    r"var jsonResponse\s*=\s*JSON\.stringify\((\{.*?\})\);", re.DOTALL
)
PARTNER_NAME_PATTERN: Final = re.compile(r'"TeamSite/Metadata/Name":"([^"]+)"')
PARTNER_DISPLAY_PATTERN: Final = re.compile(r'"PartnerDisplay":\s*\{\s*"Name":"([^"]+)"')


def parse_catalog_payload(content: str) -> CatalogPayload | None:
    """Return the embedded ``jsonResponse`` payload, or ``None`` when absent or malformed."""

    match = JSON_RESPONSE_PATTERN.search(content)
    if match is None:
        return None
    try:
        return CatalogPayload.model_validate(json.loads(match.group(1)))
    except (json.JSONDecodeError, ValidationError) as exc:
        log.warning("Malformed catalog payload: %s", exc)
        return None


def _decode_json_text(raw: str) -> str:
    try:
        decoded = json.loads(f'"{raw}"')
    except json.JSONDecodeError:
        return raw
    return decoded if isinstance(decoded, str) else raw


@dataclass(frozen=True, slots=True)
class SolutionPageRules:
    """Solutions catalog page rules: readiness marker, payload, end-of-data markers."""

    ready_markers: tuple[str, ...] = ("jsonResponse", "total")
    end_of_data_markers: tuple[str, ...] = ("No results found", "no partners found")
    listing_marker: str = "partner-card"

    def is_content_ready(self, content: str) -> bool:
        return all(marker in content for marker in self.ready_markers)

    def extract_solutions(self, content: str) -> list[Solution]:
        payload = parse_catalog_payload(content)
        if payload is None:
            return []
        solutions: list[Solution] = []
        for asset in payload.assets:
            metadata = asset.metadata
            if metadata is None or not metadata.solution_name or not metadata.partner_name:
                continue
            solutions.append(
                Solution(solution_name=metadata.solution_name, partner_name=metadata.partner_name)
            )
        return solutions

    def is_end_of_data(self, content: str) -> bool:
        if any(marker in content for marker in self.end_of_data_markers):
            return True
        return self.listing_marker not in content

    def reported_total(self, content: str) -> int | None:
        payload = parse_catalog_payload(content)
        return payload.reported_total if payload is not None else None


@dataclass(frozen=True, slots=True)
class PartnerPageRules:
    """Partner directory page rules: a primary name pattern and a fallback one."""

    ready_markers: tuple[str, ...] = ("TeamSite/Metadata/Name", '"total"')
    primary_pattern: re.Pattern[str] = PARTNER_NAME_PATTERN
    fallback_pattern: re.Pattern[str] = PARTNER_DISPLAY_PATTERN

    def is_content_ready(self, content: str) -> bool:
        return any(marker in content for marker in self.ready_markers)

    def extract_partners(self, content: str) -> list[Partner]:
        names = self._names(self.primary_pattern, content)
        if not names:
            names = self._names(self.fallback_pattern, content)
        return [Partner(name=name) for name in names]

    @staticmethod
    def _names(pattern: re.Pattern[str], content: str) -> list[str]:
        names: list[str] = []
        for match in pattern.finditer(content):
            name = _decode_json_text(match.group(1)).strip()
            if name:
                names.append(name)
        return names


if TYPE_CHECKING:
    _solution_rules_check: SolutionPageParser = SolutionPageRules()
    _partner_rules_check: PartnerPageParser = PartnerPageRules()
