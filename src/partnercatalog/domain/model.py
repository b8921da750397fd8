"""Records produced by the collectors and the reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Partner:
    """A partner directory entry, identified by its trimmed name."""

    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip())


@dataclass(frozen=True, slots=True)
class Solution:
    """A (solution, partner) pair listed in the solutions catalog."""

    solution_name: str
    partner_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "solution_name", self.solution_name.strip())
        object.__setattr__(self, "partner_name", self.partner_name.strip())

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.solution_name, self.partner_name)


@dataclass(frozen=True, slots=True)
class JoinedPartner:
    """A partner together with every catalog solution attributed to it."""

    partner_name: str
    solutions: tuple[Solution, ...] = field(default_factory=tuple)

    @property
    def solution_count(self) -> int:
        return len(self.solutions)


__all__ = ["JoinedPartner", "Partner", "Solution"]
