"""ORM models."""

from models.base import Base
from models.match_history import MatchHistory
from models.player import PlayerRow

__all__ = [
    "Base",
    "MatchHistory",
    "PlayerRow",
]
