"""Load FIDE parameter sets from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_header
from domain.ratings.fide.calculator import FideParameters
from domain.ratings.performance import PerformanceMethod


@dataclass(frozen=True)
class FideSystemConfig(BaseSystemConfig):
    """Configuration for one FIDE parameter set."""

    parameters: FideParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "scale_factor": self.parameters.scale_factor,
            "provisional_game_limit": self.parameters.provisional_game_limit,
            "new_player_game_limit": self.parameters.new_player_game_limit,
            "new_player_k_factor": self.parameters.new_player_k_factor,
            "high_rating_threshold": self.parameters.high_rating_threshold,
            "high_rating_k_factor": self.parameters.high_rating_k_factor,
            "standard_k_factor": self.parameters.standard_k_factor,
            "dynamic_k_cap": self.parameters.dynamic_k_cap,
            "performance_method": self.parameters.performance_method.value,
        }


def load_fide_system_configs(config_dir: Path) -> list[FideSystemConfig]:
    """Load and validate all FIDE TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_fide_system_config,
        duplicate_name_label="fide",
    )


def _parse_fide_system_config(raw: dict[str, Any], file_path: Path) -> FideSystemConfig:
    name, description = parse_system_header(raw, file_path)
    fide_raw = raw.get("fide", {})
    defaults = FideParameters()

    method_value = str(fide_raw.get("performance_method", defaults.performance_method.value))
    try:
        performance_method = PerformanceMethod(method_value)
    except ValueError as exc:
        allowed = ", ".join(method.value for method in PerformanceMethod)
        raise ValueError(
            f"{file_path}: [fide].performance_method must be one of: {allowed}"
        ) from exc

    parameters = FideParameters(
        scale_factor=float(fide_raw.get("scale_factor", defaults.scale_factor)),
        provisional_game_limit=int(
            fide_raw.get("provisional_game_limit", defaults.provisional_game_limit)
        ),
        new_player_game_limit=int(
            fide_raw.get("new_player_game_limit", defaults.new_player_game_limit)
        ),
        new_player_k_factor=float(fide_raw.get("new_player_k_factor", defaults.new_player_k_factor)),
        high_rating_threshold=int(
            fide_raw.get("high_rating_threshold", defaults.high_rating_threshold)
        ),
        high_rating_k_factor=float(
            fide_raw.get("high_rating_k_factor", defaults.high_rating_k_factor)
        ),
        standard_k_factor=float(fide_raw.get("standard_k_factor", defaults.standard_k_factor)),
        dynamic_k_cap=int(fide_raw.get("dynamic_k_cap", defaults.dynamic_k_cap)),
        performance_method=performance_method,
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return FideSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: FideParameters) -> None:
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [fide].scale_factor must be > 0")
    if parameters.provisional_game_limit < 0:
        raise ValueError(f"{file_path}: [fide].provisional_game_limit must be >= 0")
    if parameters.new_player_game_limit < parameters.provisional_game_limit:
        raise ValueError(
            f"{file_path}: [fide].new_player_game_limit must be >= provisional_game_limit"
        )
    if parameters.new_player_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [fide].new_player_k_factor must be > 0")
    if parameters.high_rating_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [fide].high_rating_k_factor must be > 0")
    if parameters.standard_k_factor <= 0.0:
        raise ValueError(f"{file_path}: [fide].standard_k_factor must be > 0")
    if parameters.dynamic_k_cap <= 0:
        raise ValueError(f"{file_path}: [fide].dynamic_k_cap must be > 0")
