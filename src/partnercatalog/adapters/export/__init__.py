"""Persisted collection files (JSON wrapper documents and CSV exports)."""

from __future__ import annotations

from .files import (
    CollectionFileError,
    load_partners,
    load_solutions,
    read_collection,
    write_joined_json,
    write_partners_csv,
    write_partners_json,
    write_solutions_csv,
    write_solutions_json,
)
from .schema import JoinedPartnerRecord, PartnerRecord, PartnersExport, SolutionRecord

__all__ = [
    "CollectionFileError",
    "JoinedPartnerRecord",
    "PartnerRecord",
    "PartnersExport",
    "SolutionRecord",
    "load_partners",
    "load_solutions",
    "read_collection",
    "write_joined_json",
    "write_partners_csv",
    "write_partners_json",
    "write_solutions_csv",
    "write_solutions_json",
]
