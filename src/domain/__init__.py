"""Chess rating domain modules."""

from domain.ratings.common import GameOutcome, GameResult, PlayerContext
from domain.ratings.protocol import Federation

__all__ = ["Federation", "GameOutcome", "GameResult", "PlayerContext"]
