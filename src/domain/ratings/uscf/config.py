"""Load US Chess parameter sets from TOML files."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_header
from domain.ratings.uscf.calculator import UscfParameters


@dataclass(frozen=True)
class UscfSystemConfig(BaseSystemConfig):
    """Configuration for one US Chess parameter set."""

    parameters: UscfParameters

    def as_config_json(self) -> dict[str, Any]:
        return asdict(self.parameters)


def load_uscf_system_configs(config_dir: Path) -> list[UscfSystemConfig]:
    """Load and validate all US Chess TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_uscf_system_config,
        duplicate_name_label="uscf",
    )


def _parse_uscf_system_config(raw: dict[str, Any], file_path: Path) -> UscfSystemConfig:
    name, description = parse_system_header(raw, file_path)
    uscf_raw = raw.get("uscf", {})
    defaults = UscfParameters()

    parameters = UscfParameters(
        scale_factor=float(uscf_raw.get("scale_factor", defaults.scale_factor)),
        effective_game_cap=int(uscf_raw.get("effective_game_cap", defaults.effective_game_cap)),
        provisional_game_limit=int(
            uscf_raw.get("provisional_game_limit", defaults.provisional_game_limit)
        ),
        provisional_k_base=float(uscf_raw.get("provisional_k_base", defaults.provisional_k_base)),
        master_rating_threshold=int(
            uscf_raw.get("master_rating_threshold", defaults.master_rating_threshold)
        ),
        expert_rating_threshold=int(
            uscf_raw.get("expert_rating_threshold", defaults.expert_rating_threshold)
        ),
        master_k_factor=float(uscf_raw.get("master_k_factor", defaults.master_k_factor)),
        expert_k_factor=float(uscf_raw.get("expert_k_factor", defaults.expert_k_factor)),
        standard_k_factor=float(uscf_raw.get("standard_k_factor", defaults.standard_k_factor)),
        apply_bonus=bool(uscf_raw.get("apply_bonus", defaults.apply_bonus)),
        bonus_threshold=float(uscf_raw.get("bonus_threshold", defaults.bonus_threshold)),
        bonus_min_games=int(uscf_raw.get("bonus_min_games", defaults.bonus_min_games)),
        bonus_max_games_per_opponent=int(
            uscf_raw.get("bonus_max_games_per_opponent", defaults.bonus_max_games_per_opponent)
        ),
        bonus_min_game_divisor=int(
            uscf_raw.get("bonus_min_game_divisor", defaults.bonus_min_game_divisor)
        ),
        default_initial_rating=int(
            uscf_raw.get("default_initial_rating", defaults.default_initial_rating)
        ),
        fide_conversion_factor=float(
            uscf_raw.get("fide_conversion_factor", defaults.fide_conversion_factor)
        ),
        fide_conversion_offset=float(
            uscf_raw.get("fide_conversion_offset", defaults.fide_conversion_offset)
        ),
        cfc_conversion_offset=int(
            uscf_raw.get("cfc_conversion_offset", defaults.cfc_conversion_offset)
        ),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return UscfSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: UscfParameters) -> None:
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [uscf].scale_factor must be > 0")
    if parameters.effective_game_cap <= 0:
        raise ValueError(f"{file_path}: [uscf].effective_game_cap must be > 0")
    if parameters.provisional_game_limit < 0:
        raise ValueError(f"{file_path}: [uscf].provisional_game_limit must be >= 0")
    if parameters.provisional_k_base <= 0.0:
        raise ValueError(f"{file_path}: [uscf].provisional_k_base must be > 0")
    if parameters.master_rating_threshold < parameters.expert_rating_threshold:
        raise ValueError(
            f"{file_path}: [uscf].master_rating_threshold must be >= expert_rating_threshold"
        )
    if parameters.master_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [uscf].master_k_factor must be > 0")
    if parameters.expert_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [uscf].expert_k_factor must be > 0")
    if parameters.standard_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [uscf].standard_k_factor must be > 0")
    if parameters.bonus_threshold < 0.0:
        raise ValueError(f"{file_path}: [uscf].bonus_threshold must be >= 0")
    if parameters.bonus_min_games <= 0:
        raise ValueError(f"{file_path}: [uscf].bonus_min_games must be > 0")
    if parameters.bonus_max_games_per_opponent <= 0:
        raise ValueError(f"{file_path}: [uscf].bonus_max_games_per_opponent must be > 0")
    if parameters.bonus_min_game_divisor <= 0:
        raise ValueError(f"{file_path}: [uscf].bonus_min_game_divisor must be > 0")
    if parameters.default_initial_rating <= 0:
        raise ValueError(f"{file_path}: [uscf].default_initial_rating must be > 0")
    if parameters.fide_conversion_factor <= 0.0:
        raise ValueError(f"{file_path}: [uscf].fide_conversion_factor must be > 0")
