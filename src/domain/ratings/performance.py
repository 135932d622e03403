"""Performance-rating estimators.

Most estimators read a game list and return a rounded integer rating. They
are informational: no federation calculator feeds them back into a new
rating. An empty game list yields 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from math import log10

from domain.ratings.common import GameOutcome, GameResult
from domain.ratings.scoring import round_half_up, total_actual_score

PERFECT_SCORE_DIFFERENCE = 800


class PerformanceMethod(str, Enum):
    """Performance-rating formula a FIDE calculation reports."""

    LOGISTIC = "logistic"
    DP_TABLE = "dp_table"


def _average_opponent_rating(games: Sequence[GameOutcome]) -> float:
    return sum(game.opponent_rating for game in games) / len(games)


def calculate_fide_performance_rating(games: Sequence[GameOutcome]) -> int:
    """Average opponent rating plus ``400 * log10(S / (1 - S))``.

    A perfect score adds 800 and a zero score subtracts 800, which keeps the
    logarithm away from 0 and division by zero.
    """
    if not games:
        return 0

    score_fraction = total_actual_score(games) / len(games)
    if score_fraction >= 1.0:
        rating_difference = PERFECT_SCORE_DIFFERENCE
    elif score_fraction <= 0.0:
        rating_difference = -PERFECT_SCORE_DIFFERENCE
    else:
        rating_difference = round_half_up(400.0 * log10(score_fraction / (1.0 - score_fraction)))

    return round_half_up(_average_opponent_rating(games) + rating_difference)


def calculate_linear_performance_rating(games: Sequence[GameOutcome]) -> int:
    """Average opponent rating plus eight points per percentage point above 50%."""
    if not games:
        return 0

    percentage_score = total_actual_score(games) / len(games) * 100.0
    return round_half_up(_average_opponent_rating(games) + 8.0 * (percentage_score - 50.0))


def calculate_algorithm400_performance_rating(games: Sequence[GameOutcome]) -> int:
    """``(sum of opponent ratings + 400 * (wins - losses)) / games``; draws count for neither."""
    if not games:
        return 0

    wins = sum(1 for game in games if game.result is GameResult.WIN)
    losses = sum(1 for game in games if game.result is GameResult.LOSS)
    total_opponent_rating = sum(game.opponent_rating for game in games)
    return round_half_up((total_opponent_rating + 400 * (wins - losses)) / len(games))


# (lower percentage bound, difference at that bound, points per percentage above it)
_DP_TABLE: tuple[tuple[float, float, float], ...] = (
    (90.0, 366.0, 28.0),
    (80.0, 240.0, 12.6),
    (70.0, 149.0, 9.1),
    (60.0, 72.0, 7.7),
    (50.0, 0.0, 7.2),
    (40.0, -72.0, 7.2),
    (30.0, -149.0, 7.7),
    (20.0, -240.0, 9.1),
    (10.0, -366.0, 12.6),
    (1.0, -677.0, 34.6),
)


def rating_difference_for_percentage(score_percentage: float) -> float:
    """Piecewise-linear approximation of the FIDE dp table."""
    if score_percentage >= 100.0:
        return float(PERFECT_SCORE_DIFFERENCE)
    if score_percentage >= 99.0:
        return 677.0
    for lower_bound, base_difference, slope in _DP_TABLE:
        if score_percentage >= lower_bound:
            return base_difference + (score_percentage - lower_bound) * slope
    return float(-PERFECT_SCORE_DIFFERENCE)


def calculate_dp_table_performance_rating(games: Sequence[GameOutcome]) -> int:
    if not games:
        return 0

    score_percentage = total_actual_score(games) / len(games) * 100.0
    return round_half_up(
        _average_opponent_rating(games) + rating_difference_for_percentage(score_percentage)
    )


def calculate_simplified_performance_rating(
    average_opponent_rating: float,
    score: float,
    game_count: int,
) -> float:
    """Performance from an average opponent rating alone; perfect and zero scores give +/-400."""
    if game_count == 0:
        return 0

    score_fraction = score / game_count
    if score_fraction == 1.0:
        return average_opponent_rating + 400
    if score_fraction == 0.0:
        return average_opponent_rating - 400

    rating_difference = round_half_up(400.0 * log10(score_fraction / (1.0 - score_fraction)))
    return round_half_up(average_opponent_rating + rating_difference)


def calculate_performance_rating(
    games: Sequence[GameOutcome],
    method: PerformanceMethod = PerformanceMethod.LOGISTIC,
) -> int:
    if method is PerformanceMethod.DP_TABLE:
        return calculate_dp_table_performance_rating(games)
    return calculate_fide_performance_rating(games)


__all__ = [
    "PerformanceMethod",
    "calculate_algorithm400_performance_rating",
    "calculate_dp_table_performance_rating",
    "calculate_fide_performance_rating",
    "calculate_linear_performance_rating",
    "calculate_performance_rating",
    "calculate_simplified_performance_rating",
    "rating_difference_for_percentage",
]
