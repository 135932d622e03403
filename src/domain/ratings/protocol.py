"""Shared protocols and enums for federation rating calculators."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from domain.ratings.common import GameOutcome, PlayerContext


class Federation(str, Enum):
    """Which federation's rules a calculation follows."""

    USCF = "uscf"
    FIDE = "fide"
    ECF = "ecf"


R = TypeVar("R", covariant=True)


@runtime_checkable
class RatingCalculator(Protocol[R]):
    """Base contract all federation calculators satisfy."""

    def calculate(self, player: PlayerContext, games: Sequence[GameOutcome]) -> R: ...


__all__ = [
    "Federation",
    "RatingCalculator",
]
