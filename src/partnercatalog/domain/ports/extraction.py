"""Ports describing how records are pulled out of fetched page content."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from partnercatalog.domain.model import Partner, Solution


class PageUrl(Protocol):
    """Build the URL of one page from its offset and page size."""

    def __call__(self, offset: int, page_size: int) -> str: ...


class SolutionPageParser(Protocol):
    """Reads the structured payload embedded in a solutions catalog page.

    Parsers never raise on malformed payloads; they return no records instead.
    """

    def is_content_ready(self, content: str) -> bool: ...

    def extract_solutions(self, content: str) -> list[Solution]: ...

    def is_end_of_data(self, content: str) -> bool: ...

    def reported_total(self, content: str) -> int | None: ...


class PartnerPageParser(Protocol):
    """Reads partner names from a partner directory page."""

    def is_content_ready(self, content: str) -> bool: ...

    def extract_partners(self, content: str) -> list[Partner]: ...


__all__ = ["PageUrl", "PartnerPageParser", "SolutionPageParser"]
