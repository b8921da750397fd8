from __future__ import annotations

import asyncio

import pytest

from partnercatalog.domain.ports.fetching import FetchError, PageNotReadyError
from partnercatalog.domain.retry import (
    RetryBudget,
    RetryExhaustedError,
    incremental_waits,
    linear_backoff,
    retry_async,
    wait_until_ready,
)
from tests.helpers.pages import LOADING_PAGE, FakePageFetcher, RecordingSleep

URL = "https://catalog.test/page"


def _is_ready(content: str) -> bool:
    return "READY" in content


def test_delay_schedules() -> None:
    assert [linear_backoff(1.0)(attempt) for attempt in (1, 2, 3)] == [1.0, 2.0, 3.0]
    assert [incremental_waits(1.0, 0.5)(attempt) for attempt in (1, 2, 3)] == [1.0, 1.5, 2.0]


def test_retry_budget_requires_an_attempt() -> None:
    with pytest.raises(ValueError, match="at least one attempt"):
        RetryBudget(attempts=0)


def test_retry_async_returns_first_success(recording_sleep: RecordingSleep) -> None:
    attempts: list[int] = []

    async def operation(attempt: int) -> str:
        attempts.append(attempt)
        if attempt < 3:
            raise FetchError("boom")
        return "done"

    result = asyncio.run(
        retry_async(operation, budget=RetryBudget(3, linear_backoff(1.0)), sleep=recording_sleep)
    )

    assert result == "done"
    assert attempts == [1, 2, 3]
    assert recording_sleep.delays == [1.0, 2.0]


def test_retry_async_gives_up_without_trailing_delay(recording_sleep: RecordingSleep) -> None:
    async def operation(attempt: int) -> str:
        raise FetchError(f"attempt {attempt} failed")

    with pytest.raises(RetryExhaustedError) as excinfo:
        asyncio.run(
            retry_async(
                operation,
                budget=RetryBudget(2, incremental_waits(0.5, 1.0)),
                sleep=recording_sleep,
                label="page 4",
            )
        )

    assert excinfo.value.attempts == 2
    assert str(excinfo.value.last_error) == "attempt 2 failed"
    assert "page 4" in str(excinfo.value)
    assert recording_sleep.delays == [0.5]


def test_retry_async_does_not_catch_unlisted_errors(recording_sleep: RecordingSleep) -> None:
    async def operation(_attempt: int) -> str:
        raise KeyError("unexpected")

    with pytest.raises(KeyError):
        asyncio.run(
            retry_async(
                operation,
                budget=RetryBudget(3),
                retry_on=(FetchError,),
                sleep=recording_sleep,
            )
        )

    assert recording_sleep.delays == []


def test_wait_until_ready_polls_within_budget(
    fetcher: FakePageFetcher, recording_sleep: RecordingSleep
) -> None:
    fetcher.script(URL, LOADING_PAGE, LOADING_PAGE, "READY")

    content = asyncio.run(
        wait_until_ready(
            fetcher,
            URL,
            ready=_is_ready,
            timeout_seconds=6.0,
            interval_seconds=0.3,
            sleep=recording_sleep,
        )
    )

    assert content == "READY"
    assert recording_sleep.delays == [0.3, 0.3]


def test_wait_until_ready_raises_when_budget_runs_out(
    fetcher: FakePageFetcher, recording_sleep: RecordingSleep
) -> None:
    fetcher.script(URL, LOADING_PAGE)

    with pytest.raises(PageNotReadyError) as excinfo:
        asyncio.run(
            wait_until_ready(
                fetcher,
                URL,
                ready=_is_ready,
                timeout_seconds=1.0,
                interval_seconds=0.5,
                sleep=recording_sleep,
            )
        )

    assert excinfo.value.url == URL
    assert fetcher.fetch_count(URL) == 2
    assert recording_sleep.delays == [0.5]
