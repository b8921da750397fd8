"""Public interface for the catalog page adapter."""

from __future__ import annotations

from .client import HttpPageFetcher, PagedUrl, partners_page_url, solutions_page_url
from .schema import AssetMetadata, CatalogPayload
from .translator import PartnerPageRules, SolutionPageRules, parse_catalog_payload

__all__ = [
    "AssetMetadata",
    "CatalogPayload",
    "HttpPageFetcher",
    "PagedUrl",
    "PartnerPageRules",
    "SolutionPageRules",
    "parse_catalog_payload",
    "partners_page_url",
    "solutions_page_url",
]
