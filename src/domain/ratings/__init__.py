"""Rating-system domain modules."""

from domain.ratings.common import EloChange, InvariantViolation, MatchResult, Player, Team
from domain.ratings.roster import MatchRoster

__all__ = [
    "EloChange",
    "InvariantViolation",
    "MatchResult",
    "MatchRoster",
    "Player",
    "Team",
]
