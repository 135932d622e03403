"""US Chess rating floors."""

from __future__ import annotations

LIFE_MASTER_FLOOR = 2000
SENIOR_AGE = 65
SENIOR_FLOOR_REDUCTION = 100
MINIMUM_SENIOR_FLOOR = 100

# (highest achieved rating at least, floor), checked top-down
_FLOOR_STEPS: tuple[tuple[int, int], ...] = (
    (2200, 2000),
    (2000, 1800),
    (1800, 1600),
    (1600, 1400),
    (1400, 1200),
    (1200, 1000),
)


def calculate_rating_floor(
    highest_achieved_rating: int,
    is_life_master: bool = False,
    is_senior: bool = False,
) -> int:
    """Return the floor implied by a player's peak rating and status."""
    floor = 0
    for threshold, step_floor in _FLOOR_STEPS:
        if highest_achieved_rating >= threshold:
            floor = step_floor
            break

    if is_life_master and floor < LIFE_MASTER_FLOOR:
        floor = LIFE_MASTER_FLOOR

    if is_senior and floor > 0:
        floor = max(MINIMUM_SENIOR_FLOOR, floor - SENIOR_FLOOR_REDUCTION)

    return floor


def is_senior_age(age: int | None) -> bool:
    return age is not None and age >= SENIOR_AGE


def apply_rating_floor(calculated_rating: int, rating_floor: int) -> int:
    return max(calculated_rating, rating_floor)


__all__ = [
    "apply_rating_floor",
    "calculate_rating_floor",
    "is_senior_age",
]
