"""Performance-based US Chess rating estimator."""

from domain.ratings.estimator.calculator import (
    EstimateResult,
    EstimatorParameters,
    RatingEstimator,
    estimate_bonus,
    estimate_k_factor,
    estimate_performance_rating,
    estimate_rating,
)
from domain.ratings.estimator.config import EstimatorSystemConfig, load_estimator_system_configs

__all__ = [
    "EstimateResult",
    "EstimatorParameters",
    "EstimatorSystemConfig",
    "RatingEstimator",
    "estimate_bonus",
    "estimate_k_factor",
    "estimate_performance_rating",
    "estimate_rating",
    "load_estimator_system_configs",
]
