"""FIDE rating modules."""

from domain.ratings.fide.calculator import (
    FideCalculator,
    FideParameters,
    FideRatingResult,
    calculate_dynamic_k_factor,
    calculate_fide_k_factor,
    calculate_fide_rating,
    classify_rating,
)
from domain.ratings.fide.config import FideSystemConfig, load_fide_system_configs

__all__ = [
    "FideCalculator",
    "FideParameters",
    "FideRatingResult",
    "FideSystemConfig",
    "calculate_dynamic_k_factor",
    "calculate_fide_k_factor",
    "calculate_fide_rating",
    "classify_rating",
    "load_fide_system_configs",
]
