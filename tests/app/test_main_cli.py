from __future__ import annotations

from pathlib import Path

import pytest

from partnercatalog import main as main_module
from partnercatalog.domain.collection.settings import DEFAULT_PARTNER_TOTAL_PAGES
from partnercatalog.domain.reconciliation import JoinReport, JoinResult


def test_main_cli_partners_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_collect(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setenv("PARTNERCATALOG_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setattr(main_module, "collect_partners", fake_collect)

    main_module.main(["partners"])

    settings = captured["settings"]
    assert getattr(settings, "total_pages") == DEFAULT_PARTNER_TOTAL_PAGES
    assert getattr(captured["storage"], "output_dir") == tmp_path
    assert captured["progress"] is not None


def test_main_cli_with_flags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_collect(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(main_module, "collect_partners", fake_collect)

    main_module.main(
        [
            "--output-dir",
            str(tmp_path / "custom"),
            "partners",
            "--total-pages",
            "12",
            "--batch-size",
            "4",
        ]
    )

    settings = captured["settings"]
    assert getattr(settings, "total_pages") == 12
    assert getattr(settings, "batch_size") == 4
    assert getattr(captured["storage"], "output_dir") == tmp_path / "custom"


def test_main_cli_solutions_estimate(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_collect(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(main_module, "collect_solutions", fake_collect)

    main_module.main(["solutions", "--estimated-solutions", "50"])

    assert getattr(captured["settings"], "estimated_records") == 50


def test_main_cli_join(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[object] = []

    def fake_join(**kwargs: object) -> JoinResult:
        calls.append(kwargs["storage"])
        return JoinResult(partners=[], report=JoinReport())

    monkeypatch.setattr(main_module, "join_collections", fake_join)

    main_module.main(["join"])

    assert len(calls) == 1


def test_main_cli_invalid_environment_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_collect(**_: object) -> None:
        return None

    monkeypatch.setenv("PARTNERCATALOG_PARTNER_BATCH_SIZE", "many")
    monkeypatch.setattr(main_module, "collect_partners", fake_collect)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["partners"])

    assert excinfo.value.code == 2


def test_main_cli_invalid_argument_exits_with_2() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["partners", "--batch-size", "0"])

    assert excinfo.value.code == 2


def test_main_cli_unexpected_error_exits_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_run(**_: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(main_module, "run_pipeline", failing_run)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["run"])

    assert excinfo.value.code == 1
