"""Config selection and calculation glue for federations and the estimator."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, TypeVar

from domain.config_base import BaseSystemConfig
from domain.ratings.common import GameOutcome, PlayerContext, RatingResult
from domain.ratings.estimator.calculator import EstimateResult, RatingEstimator
from domain.ratings.estimator.config import EstimatorSystemConfig, load_estimator_system_configs
from domain.ratings.registry import ESTIMATOR_CONFIG_DIR, FederationDescriptor
from domain.ratings.validation import (
    validate_estimate_inputs,
    validate_games,
    validate_player,
)

DEFAULT_CONFIG_NAME = "default.toml"

ConfigT = TypeVar("ConfigT", bound=BaseSystemConfig)


@dataclass(frozen=True)
class CalculationSummary:
    """Outcome of one calculation run against one config file."""

    federation: str
    system_name: str
    config_file: str
    result: RatingResult


def select_system_config(
    descriptor: FederationDescriptor,
    *,
    config_dir: Path | None = None,
    config_name: str | None = None,
) -> BaseSystemConfig:
    """Load a descriptor's configs and pick one by file name."""
    target_config_dir = config_dir or descriptor.config_dir
    return pick_system_config(
        descriptor.load_configs(target_config_dir),
        config_dir=target_config_dir,
        config_name=config_name,
    )


def pick_system_config(
    configs: Sequence[ConfigT],
    *,
    config_dir: Path,
    config_name: str | None = None,
) -> ConfigT:
    """Pick ``config_name`` (default.toml when omitted) from already loaded configs.

    A directory holding a single config needs no name.
    """
    target_name = config_name or DEFAULT_CONFIG_NAME

    for config in configs:
        if config.file_path.name == target_name:
            return config
    if config_name is None and len(configs) == 1:
        return configs[0]

    raise ValueError(f"No config named '{target_name}' found in {config_dir}")


def with_parameter_overrides(
    system_config: BaseSystemConfig,
    overrides: dict[str, Any] | None,
) -> BaseSystemConfig:
    """Return a copy of ``system_config`` with some parameters replaced."""
    if not overrides:
        return system_config
    parameters = replace(getattr(system_config, "parameters"), **overrides)
    return replace(system_config, parameters=parameters)


def run_calculation(
    *,
    descriptor: FederationDescriptor,
    system_config: BaseSystemConfig,
    player: PlayerContext,
    games: Sequence[GameOutcome],
    parameter_overrides: dict[str, Any] | None = None,
    echo: Callable[[str], None] | None = None,
) -> CalculationSummary:
    """Validate inputs, build the calculator for one config and run it."""
    validate_player(player)
    validate_games(games)

    effective_config = with_parameter_overrides(system_config, parameter_overrides)
    calculator = descriptor.create_calculator(effective_config)
    result = calculator.calculate(player, games)

    if echo is not None:
        echo(
            f"federation={descriptor.federation.value} "
            f"system={effective_config.name} "
            f"config={effective_config.file_path.name} "
            f"games={len(games)} "
            f"current_rating={result.current_rating} "
            f"new_rating={result.new_rating} "
            f"rating_change={result.rating_change:+d} "
            f"provisional={result.is_provisional}"
        )

    return CalculationSummary(
        federation=descriptor.federation.value,
        system_name=effective_config.name,
        config_file=effective_config.file_path.name,
        result=result,
    )


def select_estimator_config(
    *,
    config_dir: Path | None = None,
    config_name: str | None = None,
) -> EstimatorSystemConfig:
    """Load the estimator configs and pick one by file name."""
    target_config_dir = config_dir or ESTIMATOR_CONFIG_DIR
    return pick_system_config(
        load_estimator_system_configs(target_config_dir),
        config_dir=target_config_dir,
        config_name=config_name,
    )


def run_estimate(
    *,
    system_config: EstimatorSystemConfig,
    opponent_ratings: Sequence[int],
    total_score: float,
    current_rating: int | None,
    prior_game_count: int,
    parameter_overrides: dict[str, Any] | None = None,
    echo: Callable[[str], None] | None = None,
) -> EstimateResult:
    """Validate inputs and run the performance-based estimate for one config."""
    validate_estimate_inputs(
        opponent_ratings,
        total_score,
        current_rating=current_rating,
        prior_game_count=prior_game_count,
    )

    effective_config = with_parameter_overrides(system_config, parameter_overrides)
    estimator = RatingEstimator(getattr(effective_config, "parameters"))
    result = estimator.estimate(
        opponent_ratings,
        total_score,
        current_rating=current_rating or 0,
        prior_game_count=prior_game_count,
    )

    if echo is not None:
        echo(
            f"system={effective_config.name} "
            f"config={effective_config.file_path.name} "
            f"games={result.game_count} "
            f"score={result.total_score:g} "
            f"performance_rating={result.performance_rating} "
            f"new_rating={result.new_rating} "
            f"unrated={result.is_unrated}"
        )

    return result


__all__ = [
    "CalculationSummary",
    "pick_system_config",
    "run_calculation",
    "run_estimate",
    "select_estimator_config",
    "select_system_config",
    "with_parameter_overrides",
]
