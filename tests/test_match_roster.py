"""Unit tests for match validation and team/opponent partitioning."""

from __future__ import annotations

import pytest

from domain.ratings.common import InvariantViolation, MatchResult, Player, Team
from domain.ratings.roster import MatchRoster


def _players(*player_ids: str) -> dict[str, Player]:
    return {player_id: Player(player_id=player_id, rating=1400.0) for player_id in player_ids}


def _match(**overrides: object) -> MatchResult:
    fields: dict[str, object] = {
        "team_1": ("ana", "bo"),
        "team_2": ("cy", "di"),
        "team_1_score": 11,
        "team_2_score": 9,
        "winner": Team.TEAM_1,
    }
    fields.update(overrides)
    return MatchResult(**fields)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("team_1", Team.TEAM_1),
        ("team_2", Team.TEAM_2),
        ("Team 1", Team.TEAM_1),
        ("Team 2", Team.TEAM_2),
        ("My team", Team.TEAM_1),
        ("Their team", Team.TEAM_2),
        (Team.TEAM_2, Team.TEAM_2),
    ],
)
def test_team_parse_accepts_report_labels(label: str | Team, expected: Team) -> None:
    assert Team.parse(label) is expected


def test_team_parse_rejects_unknown_label() -> None:
    with pytest.raises(InvariantViolation, match=r"winner='draw'"):
        Team.parse("draw")


def test_team_other_side() -> None:
    assert Team.TEAM_1.other is Team.TEAM_2
    assert Team.TEAM_2.other is Team.TEAM_1


def test_match_result_normalizes_rosters_and_winner() -> None:
    match_result = _match(team_1=["ana", "bo"], winner="Their team")
    assert match_result.team_1 == ("ana", "bo")
    assert match_result.winner is Team.TEAM_2
    assert match_result.player_ids() == ("ana", "bo", "cy", "di")
    assert match_result.score(Team.TEAM_2) == 9
    assert match_result.roster(Team.TEAM_2) == ("cy", "di")


def test_empty_team_is_rejected() -> None:
    with pytest.raises(InvariantViolation, match=r"missing players"):
        _match(team_2=())


def test_overlapping_teams_are_rejected() -> None:
    with pytest.raises(InvariantViolation, match=r"both teams: \['bo'\]"):
        _match(team_2=("bo", "cy"))


def test_duplicate_player_within_team_is_rejected() -> None:
    with pytest.raises(InvariantViolation, match=r"more than once"):
        _match(team_1=("ana", "ana"))


def test_negative_score_is_rejected() -> None:
    with pytest.raises(InvariantViolation, match=r"scores must be >= 0"):
        _match(team_1_score=-1)


def test_invalid_match_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        _match(team_2=())


def test_roster_assigns_teams_and_opponents() -> None:
    roster = MatchRoster(_match(), _players("ana", "bo", "cy", "di"))

    assert roster.assign_team("ana") is Team.TEAM_1
    assert roster.assign_team("di") is Team.TEAM_2
    assert [player.player_id for player in roster.opponents_of("ana")] == ["cy", "di"]
    assert [player.player_id for player in roster.opponents_of("cy")] == ["ana", "bo"]
    assert [player.player_id for player in roster.teammates_of("bo")] == ["ana", "bo"]
    assert [player.player_id for player in roster.participants()] == ["ana", "bo", "cy", "di"]


def test_roster_assign_unknown_player_raises() -> None:
    roster = MatchRoster(_match(), _players("ana", "bo", "cy", "di"))
    with pytest.raises(InvariantViolation, match=r"player_id='zed'"):
        roster.assign_team("zed")


def test_roster_rejects_snapshot_for_player_outside_match() -> None:
    with pytest.raises(InvariantViolation, match=r"\['zed'\]"):
        MatchRoster(_match(), _players("ana", "bo", "cy", "di", "zed"))


def test_roster_missing_snapshot_raises_lookup_error() -> None:
    with pytest.raises(LookupError, match=r"\['di'\]"):
        MatchRoster(_match(), _players("ana", "bo", "cy"))


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"team_1_score": "2"}, r"scores must be ints"),
        ({"team_2_score": 1.5}, r"scores must be ints"),
        ({"team_1_score": True}, r"scores must be ints"),
        ({"team_1": "ab"}, r"team_1 must be a sequence of player ids"),
        ({"team_2": "cy"}, r"team_2 must be a sequence of player ids"),
    ],
)
def test_malformed_match_payload_is_rejected(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(InvariantViolation, match=message):
        _match(**overrides)


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"rating": float("nan")}, r"rating must be a finite number"),
        ({"rating": float("inf")}, r"rating must be a finite number"),
        ({"rating": "1400"}, r"rating must be a finite number"),
        ({"rating": 1400.0, "games_played": -300}, r"games_played must be an int >= 0"),
        ({"rating": 1400.0, "games_played": 2.5}, r"games_played must be an int >= 0"),
    ],
)
def test_malformed_player_snapshot_is_rejected(fields: dict[str, object], message: str) -> None:
    with pytest.raises(InvariantViolation, match=message):
        Player(player_id="ana", **fields)  # type: ignore[arg-type]


def test_player_snapshot_accepts_integer_rating() -> None:
    player = Player(player_id="ana", rating=1400, games_played=0)
    assert player.rating == 1400
    assert player.version is None
