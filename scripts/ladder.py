#!/usr/bin/env python3
"""Ladder jobs: create the schema and record finished matches."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.config_base import select_system_config
from domain.pipeline import record_match_result
from domain.ratings.common import InvariantViolation, MatchResult, Team
from domain.ratings.elo.config import load_elo_system_configs
from repositories import PlayerRepository, ensure_ladder_schema

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "elo"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Team ladder Elo jobs.",
)


def _parse_names(raw_names: list[str]) -> dict[str, str]:
    names: dict[str, str] = {}
    for raw in raw_names:
        player_id, separator, name = raw.partition("=")
        if not separator or not player_id.strip() or not name.strip():
            raise typer.BadParameter(f"expected PLAYER_ID=NAME, got {raw!r}", param_hint="--name")
        names[player_id.strip()] = name.strip()
    return names


@app.command("init-db")
def init_db(
    db_url: Annotated[str, typer.Option("--db-url", help="Database URL.")] = DEFAULT_DB_URL,
) -> None:
    """Create the players and match_history tables."""
    ensure_ladder_schema(create_db_engine(db_url))
    typer.echo("schema ready tables=players,match_history")


@app.command("record")
def record(
    team_1: Annotated[list[str], typer.Option("--team-1", help="Player id on team 1 (repeat).")],
    team_2: Annotated[list[str], typer.Option("--team-2", help="Player id on team 2 (repeat).")],
    team_1_score: Annotated[int, typer.Option("--team-1-score", min=0)],
    team_2_score: Annotated[int, typer.Option("--team-2-score", min=0)],
    winner: Annotated[
        str,
        typer.Option("--winner", help="team_1, team_2, 'My team' or 'Their team'."),
    ],
    names: Annotated[
        list[str] | None,
        typer.Option("--name", help="Display name for a new player as PLAYER_ID=NAME (repeat)."),
    ] = None,
    db_url: Annotated[str, typer.Option("--db-url", help="Database URL.")] = DEFAULT_DB_URL,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of Elo system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    system_name: Annotated[str, typer.Option("--system", help="[system].name to use.")] = "default",
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Compute and print Elo changes, then roll back instead of committing. The schema is still created.",
        ),
    ] = False,
) -> None:
    """Rate one finished match and store the result."""
    try:
        system_config = select_system_config(load_elo_system_configs(config_dir), system_name)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-dir/--system") from exc

    try:
        match_result = MatchResult(
            team_1=tuple(team_1),
            team_2=tuple(team_2),
            team_1_score=team_1_score,
            team_2_score=team_2_score,
            winner=Team.parse(winner),
        )
    except InvariantViolation as exc:
        raise typer.BadParameter(str(exc)) from exc

    engine = create_db_engine(db_url)
    ensure_ladder_schema(engine)
    session_factory = create_session_factory(engine)

    typer.echo(
        f"system={system_config.name} config={system_config.file_path.name} "
        f"team_1={list(match_result.team_1)} team_2={list(match_result.team_2)}"
    )
    try:
        summary = record_match_result(
            session_factory=session_factory,
            match_result=match_result,
            params=system_config.parameters,
            names=_parse_names(names or []),
            dry_run=dry_run,
            echo=typer.echo,
            player_repository=PlayerRepository(initial_elo=system_config.parameters.initial_elo),
        )
    except LookupError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except (StaleDataError, IntegrityError) as exc:
        typer.echo("error: a player was updated by another submission, resubmit the match", err=True)
        raise typer.Exit(code=1) from exc

    if summary.dry_run:
        typer.echo(f"[dry-run] computed_changes={len(summary.elo_changes)}")


if __name__ == "__main__":
    app()
