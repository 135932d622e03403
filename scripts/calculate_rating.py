#!/usr/bin/env python3
"""Command-line rating calculators for US Chess, FIDE and ECF, plus a quick estimate."""

from __future__ import annotations

import json
import sys
from functools import partial
from pathlib import Path
from typing import Annotated, Any, Callable, TypeVar

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.config_base import BaseSystemConfig
from domain.pipeline import (
    run_calculation,
    run_estimate,
    select_estimator_config,
    select_system_config,
)
from domain.ratings.common import GameOutcome, PlayerContext, RatingResult
from domain.ratings.estimator.config import load_estimator_system_configs
from domain.ratings.protocol import Federation
from domain.ratings.registry import ESTIMATOR_CONFIG_DIR, FederationDescriptor, get, get_all
from domain.ratings.validation import RatingInputError, parse_game_specs, validate_k_factor

GAME_HELP = "Game as RATING:RESULT or RATING:RESULT:OPPONENT_ID (result: win, draw, loss). Repeatable."

T = TypeVar("T")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Chess rating-change calculators.",
)


def _parse_games(game_specs: list[str] | None) -> list[GameOutcome]:
    try:
        return parse_game_specs(game_specs or [])
    except RatingInputError as exc:
        raise typer.BadParameter(str(exc), param_hint="--game") from exc


def _echo_payload(payload: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
        return
    for key, value in payload.items():
        if key == "games":
            continue
        typer.echo(f"{key}={value}")


def _load_selected_config(select: Callable[[], T]) -> T:
    try:
        return select()
    except OSError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-dir") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-name") from exc


def _select_config(
    descriptor: FederationDescriptor,
    config_dir: Path | None,
    config_name: str | None,
) -> BaseSystemConfig:
    return _load_selected_config(
        lambda: select_system_config(descriptor, config_dir=config_dir, config_name=config_name)
    )


def calculate_registered_federation(
    *,
    federation: Federation,
    player: PlayerContext,
    game_specs: list[str] | None,
    config_dir: Path | None,
    config_name: str | None,
    system_config: BaseSystemConfig | None = None,
    parameter_overrides: dict[str, Any] | None = None,
    as_json: bool = False,
) -> RatingResult:
    """Run one registered federation calculator and print its result."""
    games = _parse_games(game_specs)
    descriptor: FederationDescriptor = get(federation)
    if system_config is None:
        system_config = _select_config(descriptor, config_dir, config_name)

    try:
        summary = run_calculation(
            descriptor=descriptor,
            system_config=system_config,
            player=player,
            games=games,
            parameter_overrides=parameter_overrides,
            echo=None if as_json else typer.echo,
        )
    except RatingInputError as exc:
        raise typer.BadParameter(str(exc)) from exc

    _echo_payload(summary.result.as_json(), as_json=as_json)
    return summary.result


ConfigDirOption = Annotated[
    Path | None,
    typer.Option("--config-dir", help="Optional override for the federation config directory."),
]
ConfigNameOption = Annotated[
    str | None,
    typer.Option("--config-name", help="Config filename to use (default: default.toml)."),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON.")]


@app.command()
def uscf(
    current_rating: Annotated[int, typer.Argument(help="Current rating, 0 if unrated.")],
    prior_games: Annotated[int, typer.Argument(help="Rated games played before this event.")],
    game: Annotated[list[str] | None, typer.Option("--game", "-g", help=GAME_HELP)] = None,
    bonus: Annotated[
        bool,
        typer.Option("--bonus/--no-bonus", help="Apply bonus points for exceptional events."),
    ] = True,
    highest_rating: Annotated[
        int | None,
        typer.Option("--highest", help="Highest achieved rating (enables the rating floor)."),
    ] = None,
    age: Annotated[int | None, typer.Option("--age", help="Player age.")] = None,
    fide_rating: Annotated[
        int | None,
        typer.Option("--fide-rating", help="FIDE rating used to seed an unrated player."),
    ] = None,
    cfc_rating: Annotated[
        int | None,
        typer.Option("--cfc-rating", help="CFC rating used to seed an unrated player."),
    ] = None,
    life_master: Annotated[
        bool,
        typer.Option("--life-master", help="Player holds the Life Master title."),
    ] = False,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = None,
    as_json: JsonOption = False,
) -> None:
    """Estimate a US Chess rating after one event."""
    player = PlayerContext(
        current_rating=current_rating,
        prior_game_count=prior_games,
        highest_achieved_rating=highest_rating,
        age=age,
        fide_rating=fide_rating,
        cfc_rating=cfc_rating,
        is_life_master=life_master,
    )
    calculate_registered_federation(
        federation=Federation.USCF,
        player=player,
        game_specs=game,
        config_dir=config_dir,
        config_name=config_name,
        parameter_overrides=None if bonus else {"apply_bonus": False},
        as_json=as_json,
    )


@app.command()
def fide(
    current_rating: Annotated[int, typer.Argument(help="Current rating, 0 if unrated.")],
    prior_games: Annotated[int, typer.Argument(help="Rated games played before this period.")],
    game: Annotated[list[str] | None, typer.Option("--game", "-g", help=GAME_HELP)] = None,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = None,
    as_json: JsonOption = False,
) -> None:
    """Estimate a FIDE rating after one rating period."""
    calculate_registered_federation(
        federation=Federation.FIDE,
        player=PlayerContext(current_rating=current_rating, prior_game_count=prior_games),
        game_specs=game,
        config_dir=config_dir,
        config_name=config_name,
        as_json=as_json,
    )


@app.command()
def ecf(
    current_rating: Annotated[int, typer.Argument(help="Current ECF rating.")],
    game: Annotated[list[str] | None, typer.Option("--game", "-g", help=GAME_HELP)] = None,
    k_factor: Annotated[
        float | None,
        typer.Option("--k-factor", help="K-factor override (40 standard, 20 established)."),
    ] = None,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = None,
    as_json: JsonOption = False,
) -> None:
    """Estimate an ECF rating, applying each game in order."""
    system_config = _select_config(get(Federation.ECF), config_dir, config_name)

    overrides: dict[str, Any] | None = None
    if k_factor is not None:
        try:
            validate_k_factor(k_factor, getattr(system_config, "parameters").allowed_k_factors)
        except RatingInputError as exc:
            raise typer.BadParameter(str(exc), param_hint="--k-factor") from exc
        overrides = {"k_factor": k_factor}

    calculate_registered_federation(
        federation=Federation.ECF,
        player=PlayerContext(current_rating=current_rating),
        game_specs=game,
        config_dir=config_dir,
        config_name=config_name,
        system_config=system_config,
        parameter_overrides=overrides,
        as_json=as_json,
    )


@app.command()
def estimate(
    current_rating: Annotated[int, typer.Argument(help="Current rating, 0 if unrated.")],
    prior_games: Annotated[int, typer.Argument(help="Rated games played before this event.")],
    score: Annotated[float, typer.Option("--score", "-s", help="Total score in the event.")],
    opponent: Annotated[
        list[int] | None,
        typer.Option("--opponent", "-o", help="Opponent rating. Repeatable."),
    ] = None,
    high_rated: Annotated[
        bool,
        typer.Option("--high-rated", help="Use the reduced K-factors from 2100 and 2400."),
    ] = False,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Optional override for the estimator config directory."),
    ] = None,
    config_name: ConfigNameOption = None,
    as_json: JsonOption = False,
) -> None:
    """Estimate a US Chess rating from a performance rating and total score."""
    system_config = _load_selected_config(
        lambda: select_estimator_config(config_dir=config_dir, config_name=config_name)
    )

    try:
        result = run_estimate(
            system_config=system_config,
            opponent_ratings=opponent or [],
            total_score=score,
            current_rating=current_rating,
            prior_game_count=prior_games,
            parameter_overrides={"use_high_rated_k_factors": True} if high_rated else None,
            echo=None if as_json else typer.echo,
        )
    except RatingInputError as exc:
        raise typer.BadParameter(str(exc)) from exc

    _echo_payload(result.as_json(), as_json=as_json)


def _echo_configs(configs: list[BaseSystemConfig]) -> None:
    for config in configs:
        typer.echo(
            f"  {config.name} file={config.file_path.name} "
            f"parameters={json.dumps(config.as_config_json(), sort_keys=True)}"
        )


@app.command()
def list_systems(
    show_config: Annotated[
        bool,
        typer.Option("--show-config", help="Also print every config file and its parameters."),
    ] = False,
) -> None:
    """Print every registered federation, the estimator and their config directories."""
    descriptors: list[FederationDescriptor] = get_all()
    if not descriptors:
        typer.echo("no registered federations")

    for descriptor in descriptors:
        typer.echo(f"{descriptor.federation.value} config_dir={descriptor.config_dir}")
        if show_config:
            load = partial(descriptor.load_configs, descriptor.config_dir)
            _echo_configs(_load_selected_config(load))

    typer.echo(f"estimator config_dir={ESTIMATOR_CONFIG_DIR}")
    if show_config:
        load = partial(load_estimator_system_configs, ESTIMATOR_CONFIG_DIR)
        _echo_configs(_load_selected_config(load))


if __name__ == "__main__":
    app()
