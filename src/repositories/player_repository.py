"""Player Store: persistence of current ladder ratings."""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from domain.ratings.common import Player
from models import PlayerRow


def _row_to_player(row: PlayerRow) -> Player:
    return Player(
        player_id=row.id,
        name=row.name,
        rating=float(row.elo),
        games_played=int(row.nb_games),
        version=row.version,
    )


class PlayerRepository:
    """Fetch, create and update player rating rows."""

    def __init__(self, *, initial_elo: float = 1400.0) -> None:
        self.initial_elo = initial_elo

    def ensure_schema(self, engine: Engine) -> None:
        """Create the players table when missing."""
        with engine.begin() as connection:
            PlayerRow.__table__.create(bind=connection, checkfirst=True)

    def fetch(self, session: Session, player_ids: Collection[str]) -> dict[str, Player]:
        """Return a snapshot for every requested id; LookupError if any is unknown."""
        requested = set(player_ids)
        if not requested:
            return {}

        rows = session.execute(select(PlayerRow).where(PlayerRow.id.in_(sorted(requested)))).scalars().all()
        players = {row.id: _row_to_player(row) for row in rows}

        missing = sorted(requested - set(players))
        if missing:
            raise LookupError(f"Unknown player ids: {missing}")
        return players

    def standings(self, session: Session) -> list[Player]:
        """All players ranked by rating, highest first."""
        rows = session.execute(select(PlayerRow).order_by(PlayerRow.elo.desc(), PlayerRow.id)).scalars()
        return [_row_to_player(row) for row in rows]

    def register_new_players(
        self,
        session: Session,
        player_ids: Sequence[str],
        *,
        names: Mapping[str, str] | None = None,
    ) -> list[Player]:
        """Create rows for ids not seen before; existing players are untouched."""
        names = names or {}
        existing = set(
            session.execute(select(PlayerRow.id).where(PlayerRow.id.in_(sorted(set(player_ids))))).scalars()
        )

        rows: list[PlayerRow] = []
        for player_id in dict.fromkeys(player_ids):
            if player_id in existing:
                continue
            row = PlayerRow(
                id=player_id,
                name=names.get(player_id),
                elo=self.initial_elo,
                nb_games=0,
            )
            session.add(row)
            rows.append(row)
        session.flush()
        return [_row_to_player(row) for row in rows]

    def persist(self, session: Session, players: Sequence[Player]) -> None:
        """Write updated ratings back over the row versions they were read at.

        Raises StaleDataError when another transaction changed a row since the
        snapshot was fetched, and LookupError when the row does not exist.
        """
        updated_at = datetime.now(UTC).replace(tzinfo=None)
        for player in players:
            if player.version is None:
                raise ValueError(f"player_id={player.player_id!r} has no row version; fetch it before persisting")

            values = {
                "elo": player.rating,
                "nb_games": player.games_played,
                "version": player.version + 1,
                "updated_at": updated_at,
            }
            if player.name is not None:
                values["name"] = player.name

            result = session.execute(
                update(PlayerRow)
                .where(PlayerRow.id == player.player_id, PlayerRow.version == player.version)
                .values(**values)
                .execution_options(synchronize_session="evaluate")
            )
            if result.rowcount == 1:
                continue
            if session.get(PlayerRow, player.player_id) is None:
                raise LookupError(f"Unknown player id: {player.player_id!r}")
            raise StaleDataError(
                f"players row {player.player_id!r} changed since version {player.version} was read"
            )
        session.flush()


PLAYER_REPOSITORY = PlayerRepository()
