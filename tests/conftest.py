from __future__ import annotations

import os

import pytest

from tests.helpers.pages import FakePageFetcher, RecordingSleep


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("PARTNERCATALOG_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fetcher() -> FakePageFetcher:
    return FakePageFetcher()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
