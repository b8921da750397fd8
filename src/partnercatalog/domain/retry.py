"""Bounded retry and content polling helpers shared by the collectors.

Both collectors fetch pages from a source that is slow to render and fails
intermittently. The helpers below keep the budget explicit: a fixed number of
attempts, a delay schedule between attempts, and polling loops bounded by a
count rather than wall-clock time so they behave the same under a fake sleep.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .ports.fetching import PageNotReadyError

if TYPE_CHECKING:
    from .ports.fetching import ContentReady, PageFetcher

log = getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
DelaySchedule = Callable[[int], float]


def linear_backoff(step_seconds: float) -> DelaySchedule:
    """Delay of ``step_seconds * attempt`` after the given failed attempt."""

    def schedule(attempt: int) -> float:
        return step_seconds * attempt

    return schedule


def incremental_waits(base_seconds: float, increment_seconds: float) -> DelaySchedule:
    """Delay of ``base + increment * (attempt - 1)``; attempt 1 waits ``base``."""

    def schedule(attempt: int) -> float:
        return base_seconds + increment_seconds * (attempt - 1)

    return schedule


@dataclass(frozen=True, slots=True)
class RetryBudget:
    attempts: int = 3
    delay: DelaySchedule = linear_backoff(1.0)

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("Retry budget needs at least one attempt")


class RetryExhaustedError(RuntimeError):
    """Raised when every attempt of a retry budget failed."""

    def __init__(self, label: str, *, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{label}: gave up after {attempts} attempts ({last_error})")
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


async def retry_async[T](
    operation: Callable[[int], Awaitable[T]],
    *,
    budget: RetryBudget,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Sleep = asyncio.sleep,
    label: str = "operation",
) -> T:
    """Run ``operation(attempt)`` until it returns, retrying on ``retry_on``.

    ``attempt`` is 1-based. Between attempts the coroutine sleeps for
    ``budget.delay(attempt)`` seconds. No delay follows the last attempt.
    """

    last_error: BaseException | None = None
    for attempt in range(1, budget.attempts + 1):
        try:
            return await operation(attempt)
        except retry_on as exc:
            last_error = exc
            log.debug("%s: attempt %s/%s failed: %s", label, attempt, budget.attempts, exc)
            if attempt < budget.attempts:
                await sleep(budget.delay(attempt))

    if last_error is None:  # pragma: no cover - the loop always runs at least once
        raise RuntimeError(f"{label}: retry budget produced no attempts")
    raise RetryExhaustedError(label, attempts=budget.attempts, last_error=last_error)


async def wait_until_ready(
    fetcher: PageFetcher,
    url: str,
    *,
    ready: ContentReady,
    timeout_seconds: float,
    interval_seconds: float,
    sleep: Sleep = asyncio.sleep,
) -> str:
    """Fetch ``url`` repeatedly until ``ready`` holds or the wait budget runs out.

    The budget is ``ceil(timeout / interval)`` fetches, with ``interval`` between
    them. Raises ``PageNotReadyError`` when the content never became ready.
    """

    polls = max(1, math.ceil(timeout_seconds / interval_seconds)) if interval_seconds > 0 else 1
    for poll in range(polls):
        content = await fetcher.fetch(url)
        if ready(content):
            return content
        if poll < polls - 1:
            await sleep(interval_seconds)
    raise PageNotReadyError(
        f"Content not ready after {timeout_seconds:.1f}s ({polls} polls)", url=url
    )


__all__ = [
    "DelaySchedule",
    "RetryBudget",
    "RetryExhaustedError",
    "Sleep",
    "incremental_waits",
    "linear_backoff",
    "retry_async",
    "wait_until_ready",
]
