"""Unit tests for ECF rating calculations."""

from __future__ import annotations

import pytest

from domain.ratings.common import GameOutcome, GameResult, PlayerContext
from domain.ratings.ecf.calculator import (
    EcfCalculator,
    EcfParameters,
    calculate_ecf_game,
    calculate_ecf_rating,
)
from domain.ratings.protocol import Federation


def test_documented_single_game_example() -> None:
    result = calculate_ecf_game(150, GameOutcome(opponent_rating=100, result=GameResult.WIN), 40)

    assert result.expected_score == pytest.approx(0.909, abs=1e-3)
    assert result.rating_change == 4
    assert result.new_rating == 154
    assert result.k_factor == pytest.approx(40.0)
    assert result.total_games == 1
    assert result.is_provisional is False
    assert result.federation is Federation.ECF


def test_default_k_factor_is_40() -> None:
    result = calculate_ecf_game(150, GameOutcome(opponent_rating=150, result=GameResult.LOSS))
    assert result.k_factor == pytest.approx(40.0)
    assert result.rating_change == -20


def test_reduced_k_factor_halves_change() -> None:
    game = GameOutcome(opponent_rating=150, result=GameResult.WIN)
    assert calculate_ecf_game(150, game, 20).rating_change == 10
    assert calculate_ecf_game(150, game, 40).rating_change == 20


def test_upset_win_gains_most_points() -> None:
    result = calculate_ecf_game(150, GameOutcome(opponent_rating=200, result=GameResult.WIN))
    assert result.expected_score == pytest.approx(1.0 / 11.0)
    assert result.rating_change == 36
    assert result.new_rating == 186


def test_draw_against_weaker_opponent_loses_points() -> None:
    result = calculate_ecf_game(150, GameOutcome(opponent_rating=100, result=GameResult.DRAW))
    assert result.rating_change == -16


def test_session_feeds_rating_forward() -> None:
    games = [
        GameOutcome(opponent_rating=100, result=GameResult.WIN),
        GameOutcome(opponent_rating=100, result=GameResult.WIN),
    ]
    result = calculate_ecf_rating(150, games)

    assert len(result.games) == 2
    assert result.games[0].new_rating == 154
    assert result.games[1].current_rating == 154
    assert result.games[1].rating_change == 3
    assert result.new_rating == 157
    assert result.rating_change == 7
    assert result.total_games == 2
    assert result.actual_score == pytest.approx(2.0)


def test_session_differs_from_fixed_rating_sum() -> None:
    games = [GameOutcome(opponent_rating=100, result=GameResult.WIN) for _ in range(2)]
    chained = calculate_ecf_rating(150, games)
    single = calculate_ecf_game(150, games[0])
    assert chained.rating_change != 2 * single.rating_change


def test_calculator_k_factor_override() -> None:
    calculator = EcfCalculator(EcfParameters(), k_factor=20)
    result = calculator.calculate(
        PlayerContext(current_rating=150),
        [GameOutcome(opponent_rating=150, result=GameResult.WIN)],
    )
    assert result.k_factor == pytest.approx(20.0)
    assert result.rating_change == 10


def test_empty_session_keeps_rating() -> None:
    result = calculate_ecf_rating(150, [])
    assert result.new_rating == 150
    assert result.rating_change == 0
    assert result.games == ()


def test_session_json_includes_games() -> None:
    payload = calculate_ecf_rating(
        150, [GameOutcome(opponent_rating=100, result=GameResult.WIN)]
    ).as_json()
    assert payload["type"] == "ecf"
    assert payload["games"][0]["type"] == "ecf"
    assert payload["games"][0]["new_rating"] == 154
