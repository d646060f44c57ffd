"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs
from domain.ratings.elo.calculator import EloParameters


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one ladder Elo system."""

    parameters: EloParameters


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    defaults = EloParameters()
    parameters = EloParameters(
        initial_elo=float(elo_raw.get("initial_elo", defaults.initial_elo)),
        scale_factor=float(elo_raw.get("scale_factor", defaults.scale_factor)),
        stabilization_k=float(elo_raw.get("stabilization_k", defaults.stabilization_k)),
        stabilization_games=float(elo_raw.get("stabilization_games", defaults.stabilization_games)),
        margin_base=float(elo_raw.get("margin_base", defaults.margin_base)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_elo <= 0.0:
        raise ValueError(f"{file_path}: [elo].initial_elo must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.stabilization_k <= 0.0:
        raise ValueError(f"{file_path}: [elo].stabilization_k must be > 0")
    if parameters.stabilization_games <= 0.0:
        raise ValueError(f"{file_path}: [elo].stabilization_games must be > 0")
    if parameters.margin_base <= 0.0:
        raise ValueError(f"{file_path}: [elo].margin_base must be > 0")
