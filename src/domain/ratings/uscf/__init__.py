"""US Chess rating modules."""

from domain.ratings.uscf.calculator import (
    UscfCalculator,
    UscfParameters,
    UscfRatingResult,
    calculate_bonus,
    calculate_uscf_k_factor,
    calculate_uscf_rating,
    calculate_winning_expectancy,
    initialize_rating,
    qualifies_for_bonus,
)
from domain.ratings.uscf.config import UscfSystemConfig, load_uscf_system_configs
from domain.ratings.uscf.floor import apply_rating_floor, calculate_rating_floor

__all__ = [
    "UscfCalculator",
    "UscfParameters",
    "UscfRatingResult",
    "UscfSystemConfig",
    "apply_rating_floor",
    "calculate_bonus",
    "calculate_rating_floor",
    "calculate_uscf_k_factor",
    "calculate_uscf_rating",
    "calculate_winning_expectancy",
    "initialize_rating",
    "load_uscf_system_configs",
    "qualifies_for_bonus",
]
