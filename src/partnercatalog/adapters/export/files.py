"""Read and write the JSON/CSV collection files."""

from __future__ import annotations

import csv
import json
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from partnercatalog.domain.reconciliation.records import coerce_partners, coerce_solutions

from .schema import JoinedPartnerRecord, PartnersExport, SolutionsExport
from .translator import joined_partner_record, partner_record, solution_record

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from partnercatalog.domain.model import JoinedPartner, Partner, Solution

log = getLogger(__name__)

_JOINED_ADAPTER = TypeAdapter(list[JoinedPartnerRecord])


class CollectionFileError(ValueError):
    """Raised when a collection file exists but does not contain JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not read {path}: {reason}")
        self.path = path


def _utcnow() -> datetime:
    return datetime.now(UTC)


def write_partners_json(
    partners: Sequence[Partner],
    path: Path,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> Path:
    document = PartnersExport(
        total_count=len(partners),
        export_date=clock(),
        partners=[partner_record(partner) for partner in partners],
    )
    path.write_text(document.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    log.info("Wrote %s partners to %s", len(partners), path)
    return path


def write_solutions_json(
    solutions: Sequence[Solution],
    path: Path,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> Path:
    document = SolutionsExport(
        total_count=len(solutions),
        export_date=clock(),
        solutions=[solution_record(solution) for solution in solutions],
    )
    path.write_text(document.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    log.info("Wrote %s solutions to %s", len(solutions), path)
    return path


def write_joined_json(joined: Sequence[JoinedPartner], path: Path) -> Path:
    records = [joined_partner_record(record) for record in joined]
    path.write_bytes(_JOINED_ADAPTER.dump_json(records, by_alias=True, indent=2))
    log.info("Wrote %s joined partner records to %s", len(records), path)
    return path


def write_partners_csv(partners: Sequence[Partner], path: Path) -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["Name"])
        writer.writerows([partner.name] for partner in partners)
    log.info("Wrote %s partners to %s", len(partners), path)
    return path


def write_solutions_csv(solutions: Sequence[Solution], path: Path) -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["SolutionName", "PartnerName"])
        writer.writerows(
            [solution.solution_name, solution.partner_name] for solution in solutions
        )
    log.info("Wrote %s solutions to %s", len(solutions), path)
    return path


def read_collection(path: Path) -> object:
    """Return the parsed JSON document at ``path``.

    A missing or blank file yields an empty list with a warning.
    """

    if not path.exists():
        log.warning("Collection file not found: %s", path.resolve())
        return []
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        log.warning("Collection file is empty: %s", path)
        return []
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CollectionFileError(path, str(exc)) from exc


def load_partners(path: Path) -> list[Partner]:
    return coerce_partners(_as_collection(read_collection(path), path))


def load_solutions(path: Path) -> list[Solution]:
    return coerce_solutions(_as_collection(read_collection(path), path))


def _as_collection(document: object, path: Path) -> list[object] | dict[str, object]:
    if isinstance(document, (list, dict)):
        return document
    raise CollectionFileError(path, f"expected a list or object, got {type(document).__name__}")
