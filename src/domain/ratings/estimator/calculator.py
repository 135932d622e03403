"""Quick US Chess estimate from opponent ratings and a total score.

The estimate works from the event's performance rating instead of rating
each game: the player moves ``K / games`` of the way towards the
performance rating, and players with few rated games get a bonus when the
performance is well above their rating. Unrated players take the
performance rating directly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from domain.ratings.performance import calculate_simplified_performance_rating
from domain.ratings.scoring import round_half_up

ESTIMATE_RESULT_TYPE = "estimate"


@dataclass(frozen=True)
class EstimatorParameters:
    extreme_score_offset: int = 400
    provisional_game_limit: int = 8
    provisional_k_factor: float = 32.0
    intermediate_game_limit: int = 20
    intermediate_k_factor: float = 24.0
    standard_k_factor: float = 16.0
    use_high_rated_k_factors: bool = False
    high_rated_threshold: int = 2100
    high_rated_k_factor: float = 12.0
    top_rated_threshold: int = 2400
    top_rated_k_factor: float = 8.0
    bonus_threshold: float = 14.0
    bonus_prior_game_limit: int = 26
    bonus_unrated_multiplier: float = 1.0
    bonus_rated_multiplier: float = 1.3
    bonus_divisor: float = 25.0


@dataclass(frozen=True)
class EstimateResult:
    current_rating: int
    prior_game_count: int
    game_count: int
    total_score: float
    performance_rating: int
    new_rating: int
    rating_change: int
    k_factor: float | None
    bonus: int
    is_unrated: bool

    def as_json(self) -> dict[str, Any]:
        return {"type": ESTIMATE_RESULT_TYPE, **asdict(self)}


def estimate_performance_rating(
    opponent_ratings: Sequence[int],
    total_score: float,
    params: EstimatorParameters = EstimatorParameters(),
) -> int:
    """Average opponent rating plus ``400 * log10(S / (1 - S))``.

    A perfect score is measured against the strongest opponent and a zero
    score against the weakest.
    """
    if not opponent_ratings:
        return 0

    game_count = len(opponent_ratings)
    if total_score == game_count:
        return max(opponent_ratings) + params.extreme_score_offset
    if total_score == 0:
        return min(opponent_ratings) - params.extreme_score_offset

    average_rating = sum(opponent_ratings) / game_count
    return int(calculate_simplified_performance_rating(average_rating, total_score, game_count))


def estimate_k_factor(
    rating: int,
    prior_game_count: int,
    params: EstimatorParameters = EstimatorParameters(),
) -> float:
    if prior_game_count < params.provisional_game_limit:
        return params.provisional_k_factor
    if prior_game_count < params.intermediate_game_limit:
        return params.intermediate_k_factor

    if params.use_high_rated_k_factors:
        if rating >= params.top_rated_threshold:
            return params.top_rated_k_factor
        if rating >= params.high_rated_threshold:
            return params.high_rated_k_factor

    return params.standard_k_factor


def estimate_bonus(
    performance_rating: int,
    current_rating: int,
    prior_game_count: int,
    params: EstimatorParameters = EstimatorParameters(),
) -> int:
    """Bonus that shrinks linearly with prior games and disappears at 26."""
    if prior_game_count >= params.bonus_prior_game_limit:
        return 0

    difference = performance_rating - current_rating
    if difference <= params.bonus_threshold:
        return 0

    multiplier = (
        params.bonus_unrated_multiplier
        if prior_game_count == 0
        else params.bonus_rated_multiplier
    )
    games_factor = (
        multiplier * (params.bonus_prior_game_limit - prior_game_count) / params.bonus_divisor
    )
    return round_half_up((difference - params.bonus_threshold) * games_factor)


class RatingEstimator:
    """Stateless performance-based rating estimator."""

    def __init__(self, params: EstimatorParameters = EstimatorParameters()) -> None:
        self.params = params

    def estimate(
        self,
        opponent_ratings: Sequence[int],
        total_score: float,
        *,
        current_rating: int = 0,
        prior_game_count: int = 0,
    ) -> EstimateResult:
        performance_rating = estimate_performance_rating(opponent_ratings, total_score, self.params)

        if prior_game_count == 0:
            return EstimateResult(
                current_rating=current_rating,
                prior_game_count=prior_game_count,
                game_count=len(opponent_ratings),
                total_score=total_score,
                performance_rating=performance_rating,
                new_rating=performance_rating,
                rating_change=performance_rating - current_rating,
                k_factor=None,
                bonus=0,
                is_unrated=True,
            )

        k_factor = estimate_k_factor(current_rating, prior_game_count, self.params)
        rating_change = round_half_up(
            k_factor * (performance_rating - current_rating) / len(opponent_ratings)
        )
        bonus = estimate_bonus(performance_rating, current_rating, prior_game_count, self.params)
        new_rating = current_rating + rating_change + bonus

        return EstimateResult(
            current_rating=current_rating,
            prior_game_count=prior_game_count,
            game_count=len(opponent_ratings),
            total_score=total_score,
            performance_rating=performance_rating,
            new_rating=new_rating,
            rating_change=new_rating - current_rating,
            k_factor=k_factor,
            bonus=bonus,
            is_unrated=False,
        )


def estimate_rating(
    opponent_ratings: Sequence[int],
    total_score: float,
    *,
    current_rating: int = 0,
    prior_game_count: int = 0,
    params: EstimatorParameters = EstimatorParameters(),
) -> EstimateResult:
    """Plain-function entry point for one estimate."""
    return RatingEstimator(params).estimate(
        opponent_ratings,
        total_score,
        current_rating=current_rating,
        prior_game_count=prior_game_count,
    )


__all__ = [
    "EstimateResult",
    "EstimatorParameters",
    "RatingEstimator",
    "estimate_bonus",
    "estimate_k_factor",
    "estimate_performance_rating",
    "estimate_rating",
]
