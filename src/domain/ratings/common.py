"""Shared types for the ladder rating engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real


class InvariantViolation(ValueError):
    """Raised when a match result or roster breaks a structural rule."""


class Team(str, Enum):
    """Which side of a match."""

    TEAM_1 = "team_1"
    TEAM_2 = "team_2"

    @property
    def other(self) -> Team:
        return Team.TEAM_2 if self is Team.TEAM_1 else Team.TEAM_1

    @classmethod
    def parse(cls, label: Team | str) -> Team:
        """Resolve a winner label from a report form into a side."""
        if isinstance(label, Team):
            return label
        normalized = str(label).strip().lower().replace(" ", "_")
        team = _TEAM_LABELS.get(normalized)
        if team is None:
            raise InvariantViolation(
                f"winner={label!r} is not one of {sorted(_TEAM_LABELS)}"
            )
        return team


# The report form labels the reporter's side "My team".
_TEAM_LABELS = {
    "team_1": Team.TEAM_1,
    "team_2": Team.TEAM_2,
    "my_team": Team.TEAM_1,
    "their_team": Team.TEAM_2,
}


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Player:
    """Rating snapshot for one player."""

    player_id: str
    rating: float
    games_played: int = 0
    name: str | None = None
    # Row version read from the store; persist refuses to overwrite a newer row.
    version: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, Real) or not math.isfinite(self.rating):
            raise InvariantViolation(
                f"player_id={self.player_id!r} rating must be a finite number, got {self.rating!r}"
            )
        if not _is_int(self.games_played) or self.games_played < 0:
            raise InvariantViolation(
                f"player_id={self.player_id!r} games_played must be an int >= 0, got {self.games_played!r}"
            )


@dataclass(frozen=True)
class MatchResult:
    """Canonical finished-match payload consumed by the rating engine."""

    team_1: tuple[str, ...]
    team_2: tuple[str, ...]
    team_1_score: int
    team_2_score: int
    winner: Team

    def __post_init__(self) -> None:
        for team, roster in ((Team.TEAM_1, self.team_1), (Team.TEAM_2, self.team_2)):
            if isinstance(roster, str):
                raise InvariantViolation(f"{team.value} must be a sequence of player ids, got {roster!r}")
        object.__setattr__(self, "team_1", tuple(self.team_1))
        object.__setattr__(self, "team_2", tuple(self.team_2))
        object.__setattr__(self, "winner", Team.parse(self.winner))

        if not self.team_1 or not self.team_2:
            raise InvariantViolation("match is missing players for one or both teams")
        for team, roster in ((Team.TEAM_1, self.team_1), (Team.TEAM_2, self.team_2)):
            if len(set(roster)) != len(roster):
                raise InvariantViolation(f"{team.value} lists a player more than once: {list(roster)}")
        overlap = set(self.team_1) & set(self.team_2)
        if overlap:
            raise InvariantViolation(f"players appear on both teams: {sorted(overlap)}")
        if not _is_int(self.team_1_score) or not _is_int(self.team_2_score):
            raise InvariantViolation(
                f"scores must be ints, got {self.team_1_score!r}-{self.team_2_score!r}"
            )
        if self.team_1_score < 0 or self.team_2_score < 0:
            raise InvariantViolation(
                f"scores must be >= 0, got {self.team_1_score}-{self.team_2_score}"
            )

    def roster(self, team: Team) -> tuple[str, ...]:
        return self.team_1 if team is Team.TEAM_1 else self.team_2

    def score(self, team: Team) -> int:
        return self.team_1_score if team is Team.TEAM_1 else self.team_2_score

    def player_ids(self) -> tuple[str, ...]:
        return self.team_1 + self.team_2


@dataclass(frozen=True)
class EloChange:
    """Signed rating delta for one participant."""

    player_id: str
    elo_change: int
