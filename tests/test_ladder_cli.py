"""Tests for the ladder typer commands."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError
from typer.testing import CliRunner

ROOT_DIR = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="module")
def ladder_module():
    spec = importlib.util.spec_from_file_location("ladder_cli", ROOT_DIR / "scripts" / "ladder.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def ladder_app(ladder_module):
    return ladder_module.app


def _record_args(db_url: str, *extra: str) -> list[str]:
    return [
        "record",
        "--team-1", "U1",
        "--team-1", "U2",
        "--team-2", "U3",
        "--team-2", "U4",
        "--team-1-score", "2",
        "--team-2-score", "1",
        "--winner", "My team",
        "--db-url", db_url,
        *extra,
    ]


def test_record_prints_changes_and_completion(ladder_app, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    runner = CliRunner()

    assert runner.invoke(ladder_app, ["init-db", "--db-url", db_url]).exit_code == 0
    result = runner.invoke(ladder_app, _record_args(db_url, "--name", "U1=Ana"))

    assert result.exit_code == 0, result.output
    assert "player_id=U1 elo_change=+51" in result.output
    assert "player_id=U3 elo_change=-51" in result.output
    assert "completed match_id=" in result.output


def test_record_dry_run_reports_without_completing(ladder_app, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    result = CliRunner().invoke(ladder_app, _record_args(db_url, "--dry-run"))

    assert result.exit_code == 0, result.output
    assert "[dry-run] computed_changes=4" in result.output
    assert "completed" not in result.output


def test_overlapping_rosters_are_rejected(ladder_app, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    args = _record_args(db_url)
    args[args.index("U3")] = "U1"

    result = CliRunner().invoke(ladder_app, args)

    assert result.exit_code == 2


def test_unknown_system_name_is_rejected(ladder_app, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    result = CliRunner().invoke(ladder_app, _record_args(db_url, "--system", "missing"))

    assert result.exit_code != 0


def test_concurrent_registration_asks_for_resubmission(ladder_module, tmp_path: Path, monkeypatch) -> None:
    def conflicting_record(**kwargs):
        raise IntegrityError("INSERT INTO players", {}, Exception("UNIQUE constraint failed: players.id"))

    monkeypatch.setattr(ladder_module, "record_match_result", conflicting_record)
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    result = CliRunner().invoke(ladder_module.app, _record_args(db_url))

    assert result.exit_code == 1
    assert "resubmit the match" in result.output


def test_dry_run_leaves_no_player_rows(ladder_app, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    runner = CliRunner()

    assert runner.invoke(ladder_app, _record_args(db_url, "--dry-run")).exit_code == 0
    result = runner.invoke(ladder_app, _record_args(db_url))

    assert result.exit_code == 0, result.output
    assert "registered_players=['U1', 'U2', 'U3', 'U4']" in result.output
