"""ECF rating modules."""

from domain.ratings.ecf.calculator import (
    EcfCalculator,
    EcfParameters,
    EcfRatingResult,
    EcfSessionResult,
    calculate_ecf_game,
    calculate_ecf_rating,
)
from domain.ratings.ecf.config import EcfSystemConfig, load_ecf_system_configs

__all__ = [
    "EcfCalculator",
    "EcfParameters",
    "EcfRatingResult",
    "EcfSessionResult",
    "EcfSystemConfig",
    "calculate_ecf_game",
    "calculate_ecf_rating",
    "load_ecf_system_configs",
]
