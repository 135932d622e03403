"""FIDE rating logic."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import floor
from typing import ClassVar

from domain.ratings.common import GameOutcome, PlayerContext, RatingResult
from domain.ratings.performance import PerformanceMethod, calculate_performance_rating
from domain.ratings.protocol import Federation
from domain.ratings.scoring import (
    round_for_display,
    round_half_up,
    total_actual_score,
    total_expected_score,
)

PROVISIONAL_CLASSIFICATION = "Provisional"


@dataclass(frozen=True)
class FideParameters:
    scale_factor: float = 400.0
    provisional_game_limit: int = 5
    new_player_game_limit: int = 30
    new_player_k_factor: float = 40.0
    high_rating_threshold: int = 2400
    high_rating_k_factor: float = 10.0
    standard_k_factor: float = 20.0
    dynamic_k_cap: int = 700
    performance_method: PerformanceMethod = PerformanceMethod.LOGISTIC


@dataclass(frozen=True)
class FideRatingResult(RatingResult):
    federation: ClassVar[Federation] = Federation.FIDE

    performance_rating: int
    classification: str
    dynamic_k_factor: float


# (rating below, label); anything higher is the last tier
_CLASSIFICATIONS: tuple[tuple[int, str], ...] = (
    (1400, "Novice"),
    (1600, "Beginner to Intermediate"),
    (1800, "Intermediate"),
    (2000, "Strong Intermediate"),
    (2200, "Advanced"),
)
_TOP_CLASSIFICATION = "Expert to Professional"


def classify_rating(rating: float) -> str:
    for rating_below, label in _CLASSIFICATIONS:
        if rating < rating_below:
            return label
    return _TOP_CLASSIFICATION


def is_provisional(total_games: int, params: FideParameters = FideParameters()) -> bool:
    return total_games < params.provisional_game_limit


def calculate_fide_k_factor(
    rating: float,
    total_games: int,
    params: FideParameters = FideParameters(),
) -> float:
    """K-factor for a player with ``total_games`` including the current session.

    Provisional players have no published rating yet; they report the new
    player K-factor.
    """
    if total_games < params.new_player_game_limit:
        return params.new_player_k_factor
    if rating >= params.high_rating_threshold:
        return params.high_rating_k_factor
    return params.standard_k_factor


def calculate_dynamic_k_factor(
    k_factor: float,
    total_games: int,
    params: FideParameters = FideParameters(),
) -> float:
    """Cap ``K * games`` at 700 for display; never used in rating arithmetic."""
    if total_games > 0 and k_factor * total_games > params.dynamic_k_cap:
        return float(floor(params.dynamic_k_cap / total_games))
    return k_factor


class FideCalculator:
    """Stateless FIDE rating-period calculator."""

    def __init__(self, params: FideParameters = FideParameters()) -> None:
        self.params = params

    def calculate(self, player: PlayerContext, games: Sequence[GameOutcome]) -> FideRatingResult:
        total_games = player.prior_game_count + len(games)
        actual_score = total_actual_score(games)

        # no published rating yet, so no performance rating either
        if is_provisional(total_games, self.params):
            return FideRatingResult(
                current_rating=player.current_rating,
                new_rating=0,
                rating_change=0,
                base_rating_change=0.0,
                expected_score=0.0,
                actual_score=actual_score,
                total_games=total_games,
                k_factor=self.params.new_player_k_factor,
                is_provisional=True,
                performance_rating=0,
                classification=PROVISIONAL_CLASSIFICATION,
                dynamic_k_factor=self.params.new_player_k_factor,
            )

        rating = player.current_rating
        k_factor = calculate_fide_k_factor(rating, total_games, self.params)
        expected_score = total_expected_score(rating, games, self.params.scale_factor)
        base_rating_change = k_factor * (actual_score - expected_score)
        rating_change = round_half_up(base_rating_change)
        new_rating = rating + rating_change

        return FideRatingResult(
            current_rating=player.current_rating,
            new_rating=new_rating,
            rating_change=rating_change,
            base_rating_change=base_rating_change,
            expected_score=round_for_display(expected_score),
            actual_score=actual_score,
            total_games=total_games,
            k_factor=round_for_display(k_factor),
            is_provisional=False,
            performance_rating=calculate_performance_rating(games, self.params.performance_method),
            classification=classify_rating(new_rating),
            dynamic_k_factor=calculate_dynamic_k_factor(k_factor, total_games, self.params),
        )


def calculate_fide_rating(
    current_rating: int,
    prior_game_count: int,
    games: Sequence[GameOutcome],
    *,
    params: FideParameters = FideParameters(),
) -> FideRatingResult:
    """Plain-function entry point for one FIDE rating period."""
    player = PlayerContext(current_rating=current_rating, prior_game_count=prior_game_count)
    return FideCalculator(params).calculate(player, games)


__all__ = [
    "FideCalculator",
    "FideParameters",
    "FideRatingResult",
    "calculate_dynamic_k_factor",
    "calculate_fide_k_factor",
    "calculate_fide_rating",
    "classify_rating",
    "is_provisional",
]
