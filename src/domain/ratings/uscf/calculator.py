"""US Chess rating logic."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from math import sqrt
from typing import ClassVar

from domain.ratings.common import GameOutcome, PlayerContext, RatingResult
from domain.ratings.performance import (
    calculate_algorithm400_performance_rating,
    calculate_fide_performance_rating,
    calculate_linear_performance_rating,
)
from domain.ratings.protocol import Federation
from domain.ratings.scoring import (
    calculate_expected_score,
    calculate_provisional_expected_score,
    round_away_from_zero,
    round_for_display,
    round_half_up,
    total_actual_score,
)
from domain.ratings.uscf.floor import apply_rating_floor, calculate_rating_floor, is_senior_age


@dataclass(frozen=True)
class UscfParameters:
    scale_factor: float = 400.0
    effective_game_cap: int = 50
    provisional_game_limit: int = 8
    provisional_k_base: float = 32.0
    master_rating_threshold: int = 2100
    expert_rating_threshold: int = 1800
    master_k_factor: float = 16.0
    expert_k_factor: float = 24.0
    standard_k_factor: float = 32.0
    apply_bonus: bool = True
    # Lowered from 14 in October 2023.
    bonus_threshold: float = 12.0
    bonus_min_games: int = 3
    bonus_max_games_per_opponent: int = 2
    bonus_min_game_divisor: int = 4
    default_initial_rating: int = 1300
    fide_conversion_factor: float = 1.02
    fide_conversion_offset: float = 100.0
    cfc_conversion_offset: int = 50


@dataclass(frozen=True)
class UscfRatingResult(RatingResult):
    federation: ClassVar[Federation] = Federation.USCF

    bonus: float
    fide_performance_rating: int
    linear_performance_rating: int
    algorithm400_performance_rating: int
    rating_without_floor: int
    rating_floor: int
    initial_rating: int


# (age below, initial rating)
_AGE_INITIAL_RATINGS: tuple[tuple[int, int], ...] = (
    (10, 600),
    (15, 750),
    (20, 900),
)


def effective_game_count(prior_game_count: int, params: UscfParameters = UscfParameters()) -> int:
    return min(prior_game_count, params.effective_game_cap)


def is_provisional(prior_game_count: int, params: UscfParameters = UscfParameters()) -> bool:
    return effective_game_count(prior_game_count, params) <= params.provisional_game_limit


def calculate_uscf_k_factor(
    rating: float,
    prior_game_count: int,
    params: UscfParameters = UscfParameters(),
) -> float:
    """K-factor used for every game of one event."""
    effective_games = effective_game_count(prior_game_count, params)
    if effective_games <= params.provisional_game_limit:
        return params.provisional_k_base * (4.0 + effective_games / 2.0) / 6.0
    if rating > params.master_rating_threshold:
        return params.master_k_factor
    if rating > params.expert_rating_threshold:
        return params.expert_k_factor
    return params.standard_k_factor


def calculate_winning_expectancy(
    rating: float,
    opponent_rating: float,
    prior_game_count: int,
    params: UscfParameters = UscfParameters(),
) -> float:
    if is_provisional(prior_game_count, params):
        return calculate_provisional_expected_score(rating, opponent_rating)
    return calculate_expected_score(rating, opponent_rating, params.scale_factor)


def initialize_rating(
    *,
    age: int | None = None,
    fide_rating: int | None = None,
    cfc_rating: int | None = None,
    params: UscfParameters = UscfParameters(),
) -> int:
    """Starting rating for a player with no rating and no rated games.

    A FIDE rating wins over a CFC rating, which wins over an age bucket. Zero
    values count as "not supplied".
    """
    if fide_rating:
        return round_half_up(
            fide_rating * params.fide_conversion_factor + params.fide_conversion_offset
        )
    if cfc_rating:
        return cfc_rating + params.cfc_conversion_offset
    if age:
        for age_below, initial_rating in _AGE_INITIAL_RATINGS:
            if age < age_below:
                return initial_rating
    return params.default_initial_rating


def qualifies_for_bonus(games: Sequence[GameOutcome], params: UscfParameters = UscfParameters()) -> bool:
    """Bonus needs enough games and no opponent faced more than the allowed number of times."""
    if len(games) < params.bonus_min_games:
        return False
    opponent_counts = Counter(game.opponent_key for game in games)
    return max(opponent_counts.values()) <= params.bonus_max_games_per_opponent


def calculate_bonus(
    base_rating_change: float,
    session_game_count: int,
    params: UscfParameters = UscfParameters(),
) -> float:
    """``max(0, K(S - E) - B * sqrt(m'))`` with ``m' = max(games, 4)``."""
    m_prime = max(session_game_count, params.bonus_min_game_divisor)
    return max(0.0, base_rating_change - params.bonus_threshold * sqrt(m_prime))


class UscfCalculator:
    """Stateless US Chess event calculator."""

    def __init__(self, params: UscfParameters = UscfParameters()) -> None:
        self.params = params

    def starting_rating(self, player: PlayerContext) -> int:
        if player.current_rating == 0 and player.prior_game_count == 0:
            return initialize_rating(
                age=player.age,
                fide_rating=player.fide_rating,
                cfc_rating=player.cfc_rating,
                params=self.params,
            )
        return player.current_rating

    def calculate(
        self,
        player: PlayerContext,
        games: Sequence[GameOutcome],
        *,
        apply_bonus: bool | None = None,
    ) -> UscfRatingResult:
        if apply_bonus is None:
            apply_bonus = self.params.apply_bonus

        rating = self.starting_rating(player)
        provisional = is_provisional(player.prior_game_count, self.params)
        k_factor = calculate_uscf_k_factor(rating, player.prior_game_count, self.params)

        expected_score = sum(
            calculate_winning_expectancy(
                rating, game.opponent_rating, player.prior_game_count, self.params
            )
            for game in games
        )
        actual_score = total_actual_score(games)
        base_rating_change = k_factor * (actual_score - expected_score)

        bonus = 0.0
        if apply_bonus and qualifies_for_bonus(games, self.params):
            bonus = calculate_bonus(base_rating_change, len(games), self.params)

        rating_change = round_away_from_zero(base_rating_change + bonus)
        rating_without_floor = rating + rating_change

        rating_floor = 0
        new_rating = rating_without_floor
        if player.highest_achieved_rating:
            rating_floor = calculate_rating_floor(
                player.highest_achieved_rating,
                is_life_master=player.is_life_master,
                is_senior=is_senior_age(player.age),
            )
            new_rating = apply_rating_floor(rating_without_floor, rating_floor)

        return UscfRatingResult(
            current_rating=player.current_rating,
            new_rating=new_rating,
            rating_change=rating_change,
            base_rating_change=base_rating_change,
            expected_score=round_for_display(expected_score),
            actual_score=actual_score,
            total_games=player.prior_game_count + len(games),
            k_factor=round_for_display(k_factor),
            is_provisional=provisional,
            bonus=round_for_display(bonus),
            fide_performance_rating=calculate_fide_performance_rating(games),
            linear_performance_rating=calculate_linear_performance_rating(games),
            algorithm400_performance_rating=calculate_algorithm400_performance_rating(games),
            rating_without_floor=rating_without_floor,
            rating_floor=rating_floor,
            initial_rating=rating,
        )


def calculate_uscf_rating(
    current_rating: int,
    prior_game_count: int,
    games: Sequence[GameOutcome],
    *,
    apply_bonus: bool = True,
    highest_achieved_rating: int | None = None,
    age: int | None = None,
    fide_rating: int | None = None,
    cfc_rating: int | None = None,
    is_life_master: bool = False,
    params: UscfParameters = UscfParameters(),
) -> UscfRatingResult:
    """Plain-function entry point for one US Chess event."""
    player = PlayerContext(
        current_rating=current_rating,
        prior_game_count=prior_game_count,
        highest_achieved_rating=highest_achieved_rating,
        age=age,
        fide_rating=fide_rating,
        cfc_rating=cfc_rating,
        is_life_master=is_life_master,
    )
    return UscfCalculator(params).calculate(player, games, apply_bonus=apply_bonus)


__all__ = [
    "UscfCalculator",
    "UscfParameters",
    "UscfRatingResult",
    "calculate_bonus",
    "calculate_uscf_k_factor",
    "calculate_uscf_rating",
    "calculate_winning_expectancy",
    "effective_game_count",
    "initialize_rating",
    "is_provisional",
    "qualifies_for_bonus",
]
