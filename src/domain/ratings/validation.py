"""Input checks the calling layer runs before handing values to a calculator.

Calculators assume validated numbers and never raise on their own; anything
that reaches them through user input goes through these helpers first.
"""

from __future__ import annotations

from collections.abc import Sequence

from domain.ratings.common import GameOutcome, GameResult, PlayerContext

_RESULT_ALIASES: dict[str, GameResult] = {
    "win": GameResult.WIN,
    "w": GameResult.WIN,
    "1": GameResult.WIN,
    "draw": GameResult.DRAW,
    "d": GameResult.DRAW,
    "0.5": GameResult.DRAW,
    "=": GameResult.DRAW,
    "loss": GameResult.LOSS,
    "l": GameResult.LOSS,
    "0": GameResult.LOSS,
}


class RatingInputError(ValueError):
    """User-supplied calculator input failed validation."""


def parse_result(value: str) -> GameResult:
    try:
        return _RESULT_ALIASES[value.strip().lower()]
    except KeyError as exc:
        raise RatingInputError(
            f"Unknown game result '{value}'. Use win, draw or loss."
        ) from exc


def parse_game_spec(spec: str) -> GameOutcome:
    """Parse ``RATING:RESULT`` or ``RATING:RESULT:OPPONENT_ID``."""
    parts = spec.split(":")
    if len(parts) not in (2, 3):
        raise RatingInputError(
            f"Game '{spec}' must look like RATING:RESULT or RATING:RESULT:OPPONENT_ID"
        )

    rating_text = parts[0].strip()
    try:
        opponent_rating = int(rating_text)
    except ValueError as exc:
        raise RatingInputError(f"Opponent rating '{rating_text}' is not a whole number") from exc
    if opponent_rating < 0:
        raise RatingInputError(f"Opponent rating must be >= 0, got {opponent_rating}")

    opponent_id = parts[2].strip() if len(parts) == 3 else None
    return GameOutcome(
        opponent_rating=opponent_rating,
        result=parse_result(parts[1]),
        opponent_id=opponent_id or None,
    )


def parse_game_specs(specs: Sequence[str]) -> list[GameOutcome]:
    games = [parse_game_spec(spec) for spec in specs]
    validate_games(games)
    return games


def validate_games(games: Sequence[GameOutcome]) -> None:
    if not games:
        raise RatingInputError("Please enter at least one opponent with a valid rating")
    for game in games:
        if game.opponent_rating < 0:
            raise RatingInputError(
                f"All opponent ratings must be >= 0, got {game.opponent_rating}"
            )


def validate_player(player: PlayerContext) -> None:
    if player.current_rating < 0:
        raise RatingInputError(f"Current rating must be >= 0, got {player.current_rating}")
    if player.prior_game_count < 0:
        raise RatingInputError(
            f"Prior game count must be >= 0, got {player.prior_game_count}"
        )
    for label, value in (
        ("Highest achieved rating", player.highest_achieved_rating),
        ("FIDE rating", player.fide_rating),
        ("CFC rating", player.cfc_rating),
    ):
        if value is not None and value < 0:
            raise RatingInputError(f"{label} must be >= 0, got {value}")
    if player.age is not None and player.age <= 0:
        raise RatingInputError(f"Age must be > 0, got {player.age}")


def validate_estimate_inputs(
    opponent_ratings: Sequence[int],
    total_score: float,
    *,
    current_rating: int | None,
    prior_game_count: int,
) -> None:
    """Checks for the performance-based estimate.

    ``current_rating`` may be omitted only for a player with no prior games.
    """
    if not opponent_ratings:
        raise RatingInputError("Please enter at least one opponent rating")
    for rating in opponent_ratings:
        if rating < 0:
            raise RatingInputError(f"All opponent ratings must be >= 0, got {rating}")
    if total_score < 0 or total_score > len(opponent_ratings):
        raise RatingInputError(f"Score must be between 0 and {len(opponent_ratings)}")
    if prior_game_count < 0:
        raise RatingInputError(f"Prior game count must be >= 0, got {prior_game_count}")
    if current_rating is None:
        if prior_game_count > 0:
            raise RatingInputError("Please enter your current rating")
    elif current_rating < 0:
        raise RatingInputError(f"Current rating must be >= 0, got {current_rating}")


def validate_k_factor(k_factor: float, allowed_k_factors: Sequence[float]) -> None:
    if k_factor not in allowed_k_factors:
        allowed = ", ".join(f"{value:g}" for value in allowed_k_factors)
        raise RatingInputError(f"K-factor must be one of: {allowed}")


__all__ = [
    "RatingInputError",
    "parse_game_spec",
    "parse_game_specs",
    "parse_result",
    "validate_estimate_inputs",
    "validate_games",
    "validate_k_factor",
    "validate_player",
]
