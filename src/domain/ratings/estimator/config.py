"""Load rating-estimator parameter sets from TOML files."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_header
from domain.ratings.estimator.calculator import EstimatorParameters


@dataclass(frozen=True)
class EstimatorSystemConfig(BaseSystemConfig):
    """Configuration for one estimator parameter set."""

    parameters: EstimatorParameters

    def as_config_json(self) -> dict[str, Any]:
        return asdict(self.parameters)


def load_estimator_system_configs(config_dir: Path) -> list[EstimatorSystemConfig]:
    """Load and validate all estimator TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_estimator_system_config,
        duplicate_name_label="estimator",
    )


def _parse_estimator_system_config(raw: dict[str, Any], file_path: Path) -> EstimatorSystemConfig:
    name, description = parse_system_header(raw, file_path)
    estimator_raw = raw.get("estimator", {})
    defaults = EstimatorParameters()

    def read_int(key: str) -> int:
        return int(estimator_raw.get(key, getattr(defaults, key)))

    def read_float(key: str) -> float:
        return float(estimator_raw.get(key, getattr(defaults, key)))

    parameters = EstimatorParameters(
        extreme_score_offset=read_int("extreme_score_offset"),
        provisional_game_limit=read_int("provisional_game_limit"),
        provisional_k_factor=read_float("provisional_k_factor"),
        intermediate_game_limit=read_int("intermediate_game_limit"),
        intermediate_k_factor=read_float("intermediate_k_factor"),
        standard_k_factor=read_float("standard_k_factor"),
        use_high_rated_k_factors=bool(
            estimator_raw.get("use_high_rated_k_factors", defaults.use_high_rated_k_factors)
        ),
        high_rated_threshold=read_int("high_rated_threshold"),
        high_rated_k_factor=read_float("high_rated_k_factor"),
        top_rated_threshold=read_int("top_rated_threshold"),
        top_rated_k_factor=read_float("top_rated_k_factor"),
        bonus_threshold=read_float("bonus_threshold"),
        bonus_prior_game_limit=read_int("bonus_prior_game_limit"),
        bonus_unrated_multiplier=read_float("bonus_unrated_multiplier"),
        bonus_rated_multiplier=read_float("bonus_rated_multiplier"),
        bonus_divisor=read_float("bonus_divisor"),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EstimatorSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EstimatorParameters) -> None:
    if parameters.extreme_score_offset < 0:
        raise ValueError(f"{file_path}: [estimator].extreme_score_offset must be >= 0")
    if parameters.provisional_game_limit < 0:
        raise ValueError(f"{file_path}: [estimator].provisional_game_limit must be >= 0")
    if parameters.intermediate_game_limit < parameters.provisional_game_limit:
        raise ValueError(
            f"{file_path}: [estimator].intermediate_game_limit must be >= provisional_game_limit"
        )
    for key in (
        "provisional_k_factor",
        "intermediate_k_factor",
        "standard_k_factor",
        "high_rated_k_factor",
        "top_rated_k_factor",
    ):
        if getattr(parameters, key) <= 0.0:
            raise ValueError(f"{file_path}: [estimator].{key} must be > 0")
    if parameters.top_rated_threshold < parameters.high_rated_threshold:
        raise ValueError(
            f"{file_path}: [estimator].top_rated_threshold must be >= high_rated_threshold"
        )
    if parameters.bonus_threshold < 0.0:
        raise ValueError(f"{file_path}: [estimator].bonus_threshold must be >= 0")
    if parameters.bonus_prior_game_limit < 0:
        raise ValueError(f"{file_path}: [estimator].bonus_prior_game_limit must be >= 0")
    if parameters.bonus_divisor <= 0.0:
        raise ValueError(f"{file_path}: [estimator].bonus_divisor must be > 0")


__all__ = ["EstimatorSystemConfig", "load_estimator_system_configs"]
