"""Record-match workflow: register, rate, persist and archive one match."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime

from domain.ratings.common import EloChange, MatchResult, Player
from domain.ratings.elo.calculator import EloParameters, MatchEloCalculator, apply_elo_changes
from repositories.match_history_repository import MATCH_HISTORY_REPOSITORY, MatchHistoryRepository
from repositories.player_repository import PLAYER_REPOSITORY, PlayerRepository


@dataclass(frozen=True)
class RecordSummary:
    """Outcome of recording one match."""

    match_id: str | None
    registered_players: tuple[str, ...]
    elo_changes: tuple[EloChange, ...]
    updated_players: tuple[Player, ...]
    dry_run: bool


def record_match_result(
    *,
    session_factory,
    match_result: MatchResult,
    params: EloParameters | None = None,
    names: Mapping[str, str] | None = None,
    report_date: datetime | None = None,
    dry_run: bool = False,
    echo: Callable[[str], None] | None = None,
    player_repository: PlayerRepository = PLAYER_REPOSITORY,
    match_repository: MatchHistoryRepository = MATCH_HISTORY_REPOSITORY,
) -> RecordSummary:
    """Apply one reported match to the ladder inside a single transaction.

    Any failure (unknown player, stale player row, malformed roster) rolls the
    whole transaction back so no rating is partially applied.
    """
    params = params or EloParameters()
    calculator = MatchEloCalculator(params)
    player_ids = match_result.player_ids()

    with session_factory() as session:
        try:
            registered = player_repository.register_new_players(session, player_ids, names=names)
            if registered and echo is not None:
                echo(f"registered_players={[player.player_id for player in registered]}")

            players = player_repository.fetch(session, player_ids)
            changes = calculator.process_match(match_result, players)
            updated = apply_elo_changes(players, changes)

            if echo is not None:
                for change in changes:
                    echo(f"player_id={change.player_id} elo_change={change.elo_change:+d}")

            if dry_run:
                session.rollback()
                return RecordSummary(
                    match_id=None,
                    registered_players=tuple(player.player_id for player in registered),
                    elo_changes=tuple(changes),
                    updated_players=tuple(updated),
                    dry_run=True,
                )

            player_repository.persist(session, updated)
            match_row = match_repository.record(session, match_result, report_date=report_date)
            match_id = match_row.id
            session.commit()
        except Exception:
            session.rollback()
            raise

    if echo is not None:
        echo(
            "completed "
            f"match_id={match_id} "
            f"score={match_result.team_1_score}-{match_result.team_2_score} "
            f"winner={match_result.winner.value} "
            f"updated_players={len(updated)}"
        )

    return RecordSummary(
        match_id=match_id,
        registered_players=tuple(player.player_id for player in registered),
        elo_changes=tuple(changes),
        updated_players=tuple(updated),
        dry_run=False,
    )


__all__ = ["RecordSummary", "record_match_result"]
