"""Database repository helpers."""

from sqlalchemy.engine import Engine

from repositories.match_history_repository import MATCH_HISTORY_REPOSITORY, MatchHistoryRepository
from repositories.player_repository import PLAYER_REPOSITORY, PlayerRepository


def ensure_ladder_schema(engine: Engine) -> None:
    """Create players and match_history tables if they do not exist."""
    PLAYER_REPOSITORY.ensure_schema(engine)
    MATCH_HISTORY_REPOSITORY.ensure_schema(engine)


__all__ = [
    "MATCH_HISTORY_REPOSITORY",
    "MatchHistoryRepository",
    "PLAYER_REPOSITORY",
    "PlayerRepository",
    "ensure_ladder_schema",
]
