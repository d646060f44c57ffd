"""Player-level Elo logic for team matches."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from math import floor, log10

from domain.ratings.common import EloChange, MatchResult, Player, Team
from domain.ratings.roster import MatchRoster


@dataclass(frozen=True)
class EloParameters:
    initial_elo: float = 1400.0
    scale_factor: float = 500.0
    stabilization_k: float = 50.0
    stabilization_games: float = 300.0
    margin_base: float = 2.0


@dataclass(frozen=True)
class PlayerEloEvent:
    player_id: str
    team: Team
    won: bool
    actual_score: float
    expected_score: float
    player_win_probability: float
    team_win_probability: float
    stabilization_factor: float
    margin_factor: float
    games_played: int
    pre_elo: float
    elo_delta: int
    post_elo: float


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score of one player against one opponent."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_stabilization_factor(games_played: int, *, k: float = 50.0, games: float = 300.0) -> float:
    """Per-player K-factor; shrinks as the player accumulates games."""
    return k / (1.0 + games_played / games)


def calculate_margin_factor(your_score: int, their_score: int, *, base: float = 2.0) -> float:
    """Margin-of-victory multiplier; equals ``base`` on a tie."""
    return base + log10(abs(your_score - their_score) + 1) ** 3


def round_half_away_from_zero(value: float) -> int:
    rounded = floor(abs(value) + 0.5)
    return int(rounded) if value >= 0.0 else -int(rounded)


class MatchEloCalculator:
    """Stateless match-by-match player Elo calculator.

    Every participant is rated against the whole opposing roster. The expected
    score blends the player's own win probability with the team average, so
    the weaker member of a winning team gains more than the stronger one.
    """

    def __init__(self, params: EloParameters | None = None) -> None:
        self.params = params or EloParameters()

    def pairwise_win_probability(self, player: Player, opponent: Player) -> float:
        return calculate_expected_score(
            rating=player.rating,
            opponent_rating=opponent.rating,
            scale_factor=self.params.scale_factor,
        )

    def player_win_probability(self, player: Player, opponents: Sequence[Player]) -> float:
        return sum(self.pairwise_win_probability(player, opponent) for opponent in opponents) / float(
            len(opponents)
        )

    def team_win_probability(self, roster: MatchRoster, team: Team) -> float:
        members = roster.roster(team)
        return sum(
            self.player_win_probability(member, roster.opponents_of(member.player_id))
            for member in members
        ) / float(len(members))

    def stabilization_factor(self, games_played: int) -> float:
        return calculate_stabilization_factor(
            games_played,
            k=self.params.stabilization_k,
            games=self.params.stabilization_games,
        )

    def margin_factor(self, your_score: int, their_score: int) -> float:
        return calculate_margin_factor(your_score, their_score, base=self.params.margin_base)

    def player_events(self, match_result: MatchResult, players: Mapping[str, Player]) -> list[PlayerEloEvent]:
        roster = MatchRoster(match_result, players)
        team_probabilities = {team: self.team_win_probability(roster, team) for team in Team}

        events: list[PlayerEloEvent] = []
        for player in roster.participants():
            team = roster.assign_team(player.player_id)
            actual = 1.0 if match_result.winner is team else 0.0
            player_probability = self.player_win_probability(
                player, roster.opponents_of(player.player_id)
            )
            expected = (team_probabilities[team] + player_probability) / 2.0
            stabilization = self.stabilization_factor(player.games_played)
            margin = self.margin_factor(match_result.score(team), match_result.score(team.other))
            delta = round_half_away_from_zero(stabilization * margin * (actual - expected))

            events.append(
                PlayerEloEvent(
                    player_id=player.player_id,
                    team=team,
                    won=bool(actual),
                    actual_score=actual,
                    expected_score=expected,
                    player_win_probability=player_probability,
                    team_win_probability=team_probabilities[team],
                    stabilization_factor=stabilization,
                    margin_factor=margin,
                    games_played=player.games_played,
                    pre_elo=player.rating,
                    elo_delta=delta,
                    post_elo=player.rating + delta,
                )
            )
        return events

    def process_match(self, match_result: MatchResult, players: Mapping[str, Player]) -> list[EloChange]:
        return [
            EloChange(player_id=event.player_id, elo_change=event.elo_delta)
            for event in self.player_events(match_result, players)
        ]


def compute_elo_changes(
    match_result: MatchResult,
    players: Mapping[str, Player],
    params: EloParameters | None = None,
) -> list[EloChange]:
    """Compute one signed rating delta per participant of a finished match."""
    return MatchEloCalculator(params).process_match(match_result, players)


def apply_elo_changes(players: Mapping[str, Player], changes: Iterable[EloChange]) -> list[Player]:
    """Return updated snapshots: rating moved by the delta, one more game played."""
    updated: list[Player] = []
    for change in changes:
        try:
            player = players[change.player_id]
        except KeyError:
            raise LookupError(f"no rating snapshot for player_id={change.player_id!r}") from None
        updated.append(
            replace(
                player,
                rating=player.rating + change.elo_change,
                games_played=player.games_played + 1,
            )
        )
    return updated
