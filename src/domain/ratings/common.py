"""Shared types for federation rating calculators."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar

from domain.ratings.protocol import Federation


class GameResult(str, Enum):
    """Outcome of one game from the rated player's point of view."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"

    @property
    def score(self) -> float:
        return _RESULT_SCORES[self]


_RESULT_SCORES: dict[GameResult, float] = {
    GameResult.WIN: 1.0,
    GameResult.DRAW: 0.5,
    GameResult.LOSS: 0.0,
}


@dataclass(frozen=True)
class GameOutcome:
    """One played game supplied by the caller."""

    opponent_rating: int
    result: GameResult
    opponent_id: str | None = None

    @property
    def score(self) -> float:
        return self.result.score

    @property
    def opponent_key(self) -> str | int:
        """Identity used to detect repeated opponents within a session."""
        return self.opponent_id if self.opponent_id is not None else self.opponent_rating


@dataclass(frozen=True)
class PlayerContext:
    """The rated player's state before the session.

    ``current_rating == 0`` means unrated. The optional fields are only read by
    the US Chess calculator (initial rating and rating floor rules).
    """

    current_rating: int
    prior_game_count: int = 0
    highest_achieved_rating: int | None = None
    age: int | None = None
    fide_rating: int | None = None
    cfc_rating: int | None = None
    is_life_master: bool = False


@dataclass(frozen=True)
class RatingResult:
    """Fields every federation result carries."""

    federation: ClassVar[Federation]

    current_rating: int
    new_rating: int
    rating_change: int
    base_rating_change: float
    expected_score: float
    actual_score: float
    total_games: int
    k_factor: float
    is_provisional: bool

    def as_json(self) -> dict[str, Any]:
        return {"type": self.federation.value, **asdict(self)}


__all__ = [
    "GameOutcome",
    "GameResult",
    "PlayerContext",
    "RatingResult",
]
