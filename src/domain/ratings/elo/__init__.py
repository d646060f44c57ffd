"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    MatchEloCalculator,
    PlayerEloEvent,
    apply_elo_changes,
    calculate_expected_score,
    calculate_margin_factor,
    calculate_stabilization_factor,
    compute_elo_changes,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs

__all__ = [
    "EloParameters",
    "EloSystemConfig",
    "MatchEloCalculator",
    "PlayerEloEvent",
    "apply_elo_changes",
    "calculate_expected_score",
    "calculate_margin_factor",
    "calculate_stabilization_factor",
    "compute_elo_changes",
    "load_elo_system_configs",
]
