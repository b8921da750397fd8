"""Accept persisted collections in either of their stored shapes.

Collections arrive either as a bare list of records or wrapped in an object
that carries the list under a named field (``{"partners": [...]}``). Records
themselves may already be domain objects or plain mappings whose keys differ
in case or naming style (``Name``/``name``, ``SolutionName``/``solution_name``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from logging import getLogger

from partnercatalog.domain.model import Partner, Solution

log = getLogger(__name__)

type RecordCollection = Iterable[object] | Mapping[str, object]


def _key(name: str) -> str:
    return name.replace("_", "").casefold()


def _field(record: Mapping[str, object], name: str) -> str:
    wanted = _key(name)
    for key, value in record.items():
        if _key(str(key)) == wanted:
            return "" if value is None else str(value)
    return ""


def unwrap_records(collection: RecordCollection | None, field: str) -> list[object]:
    """Return the record list of ``collection``, unwrapping ``field`` when needed."""

    if collection is None:
        raise TypeError(f"{field} collection must not be None")
    if isinstance(collection, (str, bytes)):
        raise TypeError(f"{field} collection must be a sequence or mapping, not text")
    if isinstance(collection, Mapping):
        wanted = _key(field)
        for key, value in collection.items():
            if _key(str(key)) == wanted:
                if value is None:
                    return []
                if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                    raise TypeError(f"'{field}' field must hold a list of records")
                return list(value)
        log.warning("Could not find '%s' field in wrapped collection", field)
        return []
    return list(collection)


def as_partner(record: object) -> Partner:
    if isinstance(record, Partner):
        return record
    if isinstance(record, Mapping):
        return Partner(name=_field(record, "name"))
    raise TypeError(f"Unsupported partner record: {type(record).__name__}")


def as_solution(record: object) -> Solution:
    if isinstance(record, Solution):
        return record
    if isinstance(record, Mapping):
        return Solution(
            solution_name=_field(record, "solutionName"),
            partner_name=_field(record, "partnerName"),
        )
    raise TypeError(f"Unsupported solution record: {type(record).__name__}")


def coerce_partners(collection: RecordCollection | None) -> list[Partner]:
    return [as_partner(record) for record in unwrap_records(collection, "partners")]


def coerce_solutions(collection: RecordCollection | None) -> list[Solution]:
    return [as_solution(record) for record in unwrap_records(collection, "solutions")]


__all__ = [
    "RecordCollection",
    "as_partner",
    "as_solution",
    "coerce_partners",
    "coerce_solutions",
    "unwrap_records",
]
