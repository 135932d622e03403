"""ECF rating logic.

ECF ratings sit on a much narrower scale than Elo, so the expected score uses
a divisor of 50 instead of 400. Each game is rated on its own and a session
feeds every new rating into the next game.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from domain.ratings.common import GameOutcome, PlayerContext, RatingResult
from domain.ratings.protocol import Federation
from domain.ratings.scoring import calculate_expected_score, round_half_up


@dataclass(frozen=True)
class EcfParameters:
    scale_factor: float = 50.0
    k_factor: float = 40.0
    allowed_k_factors: tuple[float, ...] = (40.0, 20.0)


@dataclass(frozen=True)
class EcfRatingResult(RatingResult):
    federation: ClassVar[Federation] = Federation.ECF


@dataclass(frozen=True)
class EcfSessionResult(RatingResult):
    federation: ClassVar[Federation] = Federation.ECF

    games: tuple[EcfRatingResult, ...]

    def as_json(self) -> dict[str, Any]:
        payload = super().as_json()
        payload["games"] = [game.as_json() for game in self.games]
        return payload


def calculate_ecf_game(
    current_rating: int,
    game: GameOutcome,
    k_factor: float | None = None,
    params: EcfParameters = EcfParameters(),
) -> EcfRatingResult:
    """Rate one game; the change is rounded to the nearest point."""
    k = k_factor or params.k_factor
    expected_score = calculate_expected_score(current_rating, game.opponent_rating, params.scale_factor)
    base_rating_change = k * (game.score - expected_score)
    rating_change = round_half_up(base_rating_change)

    return EcfRatingResult(
        current_rating=current_rating,
        new_rating=current_rating + rating_change,
        rating_change=rating_change,
        base_rating_change=base_rating_change,
        expected_score=expected_score,
        actual_score=game.score,
        total_games=1,
        k_factor=k,
        is_provisional=False,
    )


class EcfCalculator:
    """Chains single-game ECF calculations across a session."""

    def __init__(self, params: EcfParameters = EcfParameters(), *, k_factor: float | None = None) -> None:
        self.params = params
        self.k_factor = k_factor or params.k_factor

    def calculate_game(self, current_rating: int, game: GameOutcome) -> EcfRatingResult:
        return calculate_ecf_game(current_rating, game, self.k_factor, self.params)

    def calculate(self, player: PlayerContext, games: Sequence[GameOutcome]) -> EcfSessionResult:
        running_rating = player.current_rating
        game_results: list[EcfRatingResult] = []
        for game in games:
            game_result = self.calculate_game(running_rating, game)
            game_results.append(game_result)
            running_rating = game_result.new_rating

        return EcfSessionResult(
            current_rating=player.current_rating,
            new_rating=running_rating,
            rating_change=running_rating - player.current_rating,
            base_rating_change=sum(result.base_rating_change for result in game_results),
            expected_score=sum(result.expected_score for result in game_results),
            actual_score=sum(result.actual_score for result in game_results),
            total_games=player.prior_game_count + len(game_results),
            k_factor=self.k_factor,
            is_provisional=False,
            games=tuple(game_results),
        )


def calculate_ecf_rating(
    current_rating: int,
    games: Sequence[GameOutcome],
    *,
    k_factor: float | None = None,
    params: EcfParameters = EcfParameters(),
) -> EcfSessionResult:
    """Plain-function entry point chaining a list of ECF games."""
    player = PlayerContext(current_rating=current_rating)
    return EcfCalculator(params, k_factor=k_factor).calculate(player, games)


__all__ = [
    "EcfCalculator",
    "EcfParameters",
    "EcfRatingResult",
    "EcfSessionResult",
    "calculate_ecf_game",
    "calculate_ecf_rating",
]
