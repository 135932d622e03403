"""Expected-score formulas and the rounding rules the calculators share."""

from __future__ import annotations

from collections.abc import Iterable
from math import ceil, floor

from domain.ratings.common import GameOutcome

PROVISIONAL_RATING_SPREAD = 400.0


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the logistic Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_provisional_expected_score(rating: float, opponent_rating: float) -> float:
    """Piecewise-linear winning expectancy used for provisional US Chess players.

    Differences of 400 points or more in either direction are clamped to a
    certain win or loss; in between the expectancy moves linearly from 0.5.
    """
    rating_difference = opponent_rating - rating
    if rating_difference <= -PROVISIONAL_RATING_SPREAD:
        return 1.0
    if rating_difference >= PROVISIONAL_RATING_SPREAD:
        return 0.0
    return 0.5 + rating_difference / (2.0 * PROVISIONAL_RATING_SPREAD)


def total_expected_score(rating: float, games: Iterable[GameOutcome], scale_factor: float) -> float:
    """Sum expected scores with the player's rating held fixed for the session."""
    return sum(
        calculate_expected_score(rating, game.opponent_rating, scale_factor) for game in games
    )


def total_actual_score(games: Iterable[GameOutcome]) -> float:
    return sum(game.score for game in games)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going towards positive infinity."""
    return int(floor(value + 0.5))


def round_away_from_zero(value: float) -> int:
    """Ceil non-negative changes and floor negative ones."""
    if value >= 0.0:
        return int(ceil(value))
    return int(floor(value))


def round_for_display(value: float, digits: int = 2) -> float:
    scale = 10**digits
    return floor(value * scale + 0.5) / scale


__all__ = [
    "calculate_expected_score",
    "calculate_provisional_expected_score",
    "round_away_from_zero",
    "round_for_display",
    "round_half_up",
    "total_actual_score",
    "total_expected_score",
]
