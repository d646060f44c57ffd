"""Team/opponent partitioning for one match."""

from __future__ import annotations

from collections.abc import Mapping

from domain.ratings.common import InvariantViolation, MatchResult, Player, Team


class MatchRoster:
    """Resolves each participant to its side and its opposing roster.

    Built from a match result and the player snapshots fetched for it. The
    snapshot mapping must cover exactly the players of both teams.
    """

    def __init__(self, match_result: MatchResult, players: Mapping[str, Player]) -> None:
        self.match_result = match_result
        self._sides: dict[str, Team] = {}
        for team in Team:
            for player_id in match_result.roster(team):
                self._sides[player_id] = team

        unknown = sorted(set(players) - set(self._sides))
        if unknown:
            raise InvariantViolation(f"player ids {unknown} are not on either team")

        missing = [player_id for player_id in self._sides if player_id not in players]
        if missing:
            raise LookupError(f"no rating snapshot for player ids {missing}")

        self._players = {player_id: players[player_id] for player_id in self._sides}

    def assign_team(self, player_id: str) -> Team:
        try:
            return self._sides[player_id]
        except KeyError:
            raise InvariantViolation(f"player_id={player_id!r} is not on either team") from None

    def player(self, player_id: str) -> Player:
        self.assign_team(player_id)
        return self._players[player_id]

    def roster(self, team: Team) -> tuple[Player, ...]:
        return tuple(self._players[player_id] for player_id in self.match_result.roster(team))

    def teammates_of(self, player_id: str) -> tuple[Player, ...]:
        return self.roster(self.assign_team(player_id))

    def opponents_of(self, player_id: str) -> tuple[Player, ...]:
        return self.roster(self.assign_team(player_id).other)

    def participants(self) -> tuple[Player, ...]:
        return self.roster(Team.TEAM_1) + self.roster(Team.TEAM_2)
