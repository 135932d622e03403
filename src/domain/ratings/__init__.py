"""Federation rating domain modules."""

from domain.ratings.common import GameOutcome, GameResult, PlayerContext, RatingResult
from domain.ratings.protocol import Federation, RatingCalculator

__all__ = [
    "Federation",
    "GameOutcome",
    "GameResult",
    "PlayerContext",
    "RatingCalculator",
    "RatingResult",
]
