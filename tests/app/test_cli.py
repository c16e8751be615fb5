from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from hokhub.ui import cli as cli_module
from tests.helpers.heroes import make_hero, make_store
from tests.helpers.moderation import FakeStoreRepository

if TYPE_CHECKING:
    from pathlib import Path

    from hokhub.domain.moderation import ModerationService
    from tests.helpers.moderation import FakeModerationState

SWAN_PRINCESS: dict[str, object] = {
    "heroId": 142,
    "skin": {"skinName": "Swan Princess", "skinCover": "https://x/a.png"},
}


@pytest.fixture
def cli_service(
    monkeypatch: pytest.MonkeyPatch,
    fake_service: ModerationService,
    moderation_state: FakeModerationState,
) -> ModerationService:
    moderation_state.store = FakeStoreRepository(make_store(make_hero()))
    monkeypatch.setattr(cli_module, "build_moderation_service", lambda: fake_service)
    return fake_service


def _payload_file(tmp_path: Path, content: object) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(content), encoding="utf-8")
    return path


def test_reconcile_uses_snapshot_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    class _Result:
        store = make_store(make_hero(), make_hero(105, "Lian Po"))

    def fake_reconcile(**kwargs: object) -> _Result:
        captured.update(kwargs)
        return _Result()

    monkeypatch.setattr(cli_module, "reconcile_sources", fake_reconcile)

    cli_module.main(["reconcile", "--snapshot-dir", str(tmp_path)])

    assert captured["snapshot_dir"] == tmp_path
    assert "Reconciled 2 heroes" in capsys.readouterr().out


@pytest.mark.usefixtures("cli_service")
def test_submit_then_approve(
    moderation_state: FakeModerationState,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    payload = _payload_file(tmp_path, SWAN_PRINCESS)

    cli_module.main(["submit", "add-skin", str(payload), "--submitter-id", "user-1"])
    contribution_id = capsys.readouterr().out.strip()
    cli_module.main(["pending"])
    listed = capsys.readouterr().out
    cli_module.main(["approve", contribution_id])
    approved = capsys.readouterr().out

    assert contribution_id.startswith("skin-")
    assert f"{contribution_id}\tadd-skin" in listed
    assert f"{contribution_id}\tok" in approved
    assert "approve: 1 succeeded, 0 failed" in approved
    angela = moderation_state.store.store.heroes["Angela"]
    assert [skin.name for skin in angela.skins] == ["Swan Princess"]


@pytest.mark.usefixtures("cli_service")
def test_bulk_failure_exits_with_one(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reject", "skin-1"])

    assert excinfo.value.code == 1
    assert "skin-1\tfailed: Contribution skin-1 not found" in capsys.readouterr().out


@pytest.mark.usefixtures("cli_service")
def test_history_lists_reviews(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    payload = _payload_file(tmp_path, SWAN_PRINCESS)
    cli_module.main(["submit", "add-skin", str(payload)])
    contribution_id = capsys.readouterr().out.strip()
    cli_module.main(["reject", contribution_id])
    capsys.readouterr()

    cli_module.main(["history", "--limit", "5"])

    (line,) = capsys.readouterr().out.splitlines()
    assert f"\trejected\t{contribution_id}\tadd-skin" in line


def test_missing_payload_file_exits_with_two(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["submit", "add-skin", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_invalid_limit_exits_with_two() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["history", "--limit", "0"])

    assert excinfo.value.code == 2


@pytest.mark.usefixtures("cli_service")
def test_invalid_payload_exits_with_one(tmp_path: Path) -> None:
    payload = _payload_file(tmp_path, {"heroId": 142})

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["submit", "add-skin", str(payload)])

    assert excinfo.value.code == 1


def test_contributors_commands(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    registered: dict[str, object] = {}

    def fake_register(**kwargs: object) -> str:
        registered.update(kwargs)
        return "abc123"

    monkeypatch.setattr(cli_module, "register_contributor", fake_register)
    monkeypatch.setattr(cli_module, "leaderboard", lambda **_: [])

    cli_module.main(["contributors", "add", "--display-name", "Mika", "--email", "m@x.io"])
    cli_module.main(["contributors", "top", "--limit", "3"])

    assert registered == {"display_name": "Mika", "email": "m@x.io"}
    assert capsys.readouterr().out.strip() == "abc123"


@pytest.mark.usefixtures("cli_service")
def test_contributions_lists_one_submitter(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = _payload_file(tmp_path, SWAN_PRINCESS)
    cli_module.main(["submit", "add-skin", str(payload), "--submitter-id", "user-1"])
    mine = capsys.readouterr().out.strip()
    cli_module.main(["submit", "add-skin", str(payload), "--submitter-id", "user-2"])
    capsys.readouterr()
    cli_module.main(["approve", mine])
    capsys.readouterr()

    cli_module.main(["contributions", "--submitter-id", "user-1"])

    (line,) = capsys.readouterr().out.splitlines()
    assert line.startswith(f"{mine}\tadd-skin\tapproved\t")
