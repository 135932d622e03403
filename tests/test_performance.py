"""Unit tests for performance-rating estimators."""

from __future__ import annotations

import pytest

from domain.ratings.common import GameOutcome, GameResult
from domain.ratings.performance import (
    PerformanceMethod,
    calculate_algorithm400_performance_rating,
    calculate_dp_table_performance_rating,
    calculate_fide_performance_rating,
    calculate_linear_performance_rating,
    calculate_performance_rating,
    rating_difference_for_percentage,
)


def _games(*pairs: tuple[int, GameResult]) -> list[GameOutcome]:
    return [GameOutcome(opponent_rating=rating, result=result) for rating, result in pairs]


def test_perfect_score_adds_800_to_average() -> None:
    games = _games((1500, GameResult.WIN), (1600, GameResult.WIN))
    assert calculate_fide_performance_rating(games) == 1550 + 800


def test_zero_score_subtracts_800_from_average() -> None:
    games = _games((1500, GameResult.LOSS), (1600, GameResult.LOSS))
    assert calculate_fide_performance_rating(games) == 1550 - 800


def test_fide_method_uses_log_odds() -> None:
    games = _games(
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.LOSS),
    )
    # 400 * log10(0.75 / 0.25) = 190.8...
    assert calculate_fide_performance_rating(games) == 1691


def test_even_score_returns_average_for_every_estimator() -> None:
    games = _games((1450, GameResult.WIN), (1500, GameResult.DRAW), (1380, GameResult.LOSS))
    assert calculate_fide_performance_rating(games) == 1443
    assert calculate_linear_performance_rating(games) == 1443
    assert calculate_algorithm400_performance_rating(games) == 1443


def test_linear_performance_rating() -> None:
    games = _games(
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.LOSS),
    )
    assert calculate_linear_performance_rating(games) == 1500 + 8 * 25


def test_algorithm400_ignores_draws() -> None:
    games = _games((1500, GameResult.WIN), (1600, GameResult.DRAW))
    assert calculate_algorithm400_performance_rating(games) == (3100 + 400) // 2


def test_estimators_return_zero_without_games() -> None:
    assert calculate_fide_performance_rating([]) == 0
    assert calculate_linear_performance_rating([]) == 0
    assert calculate_algorithm400_performance_rating([]) == 0
    assert calculate_dp_table_performance_rating([]) == 0


def test_dp_table_boundaries() -> None:
    assert rating_difference_for_percentage(100.0) == pytest.approx(800.0)
    assert rating_difference_for_percentage(99.5) == pytest.approx(677.0)
    assert rating_difference_for_percentage(50.0) == pytest.approx(0.0)
    assert rating_difference_for_percentage(80.0) == pytest.approx(240.0)
    assert rating_difference_for_percentage(30.0) == pytest.approx(-149.0)
    assert rating_difference_for_percentage(0.5) == pytest.approx(-800.0)


def test_dp_table_performance_rating() -> None:
    games = _games(
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.WIN),
        (1500, GameResult.LOSS),
    )
    assert calculate_dp_table_performance_rating(games) == 1740
    assert calculate_performance_rating(games, PerformanceMethod.DP_TABLE) == 1740


def test_default_method_is_log_odds() -> None:
    games = _games((1600, GameResult.WIN))
    assert calculate_performance_rating(games) == 2400
