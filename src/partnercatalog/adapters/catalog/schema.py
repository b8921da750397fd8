"""Pydantic models describing the payload embedded in catalog pages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _first_text(value: object) -> object:
    # TeamSite metadata fields are sometimes single-element arrays
    if isinstance(value, list):
        value = next((item for item in value if isinstance(item, str)), None)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _parse_total(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return int(stripped) if stripped.isdigit() else None
    return value


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AssetMetadata(CatalogBaseModel):
    solution_name: str | None = Field(default=None, alias="TeamSite/Metadata/SolutionName")
    partner_name: str | None = Field(default=None, alias="TeamSite/Metadata/SolutionPartnerName")

    _normalize_names = field_validator("solution_name", "partner_name", mode="before")(
        _first_text
    )


class Asset(CatalogBaseModel):
    metadata: AssetMetadata | None = None


class SearchResults(CatalogBaseModel):
    assets: list[Asset] = Field(default_factory=list[Asset])
    total: int | None = None

    _normalize_total = field_validator("total", mode="before")(_parse_total)


class CatalogPayload(CatalogBaseModel):
    results: SearchResults | None = None
    total: int | None = None

    _normalize_total = field_validator("total", mode="before")(_parse_total)

    @property
    def assets(self) -> list[Asset]:
        return self.results.assets if self.results is not None else []

    @property
    def reported_total(self) -> int | None:
        if self.results is not None and self.results.total is not None:
            return self.results.total
        return self.total
