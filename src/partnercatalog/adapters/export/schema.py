"""Pydantic models describing the persisted JSON collections."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExportBaseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PartnerRecord(ExportBaseModel):
    name: str


class SolutionRecord(ExportBaseModel):
    solution_name: str
    partner_name: str


class JoinedPartnerRecord(ExportBaseModel):
    partner_name: str
    solutions: list[SolutionRecord] = Field(default_factory=list[SolutionRecord])
    solution_count: int = 0


class PartnersExport(ExportBaseModel):
    total_count: int
    export_date: datetime
    partners: list[PartnerRecord]


class SolutionsExport(ExportBaseModel):
    total_count: int
    export_date: datetime
    solutions: list[SolutionRecord]
