"""Validity rules applied to catalog records before they are kept."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .model import Solution

PLACEHOLDER_TERMS: Final[tuple[str, ...]] = ("null", "undefined", "metadata", "teamsite")
MIN_NAME_LENGTH: Final[int] = 2


def is_valid_name(name: str | None) -> bool:
    """Return ``True`` when ``name`` looks like a real value rather than template residue."""

    if name is None:
        return False
    stripped = name.strip()
    if len(stripped) < MIN_NAME_LENGTH:
        return False
    lowered = stripped.lower()
    return not any(term in lowered for term in PLACEHOLDER_TERMS)


def is_valid_solution(solution: Solution) -> bool:
    return (
        is_valid_name(solution.solution_name)
        and is_valid_name(solution.partner_name)
        and solution.solution_name != solution.partner_name
    )


__all__ = ["MIN_NAME_LENGTH", "PLACEHOLDER_TERMS", "is_valid_name", "is_valid_solution"]
