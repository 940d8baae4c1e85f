"""Chess rules engine for terminal game sessions."""

from termchess.core import (
    GameState,
    apply_move,
    is_in_check,
    legal_moves,
    new_game,
)

__version__ = "0.1.0"

__all__ = [
    "GameState",
    "apply_move",
    "is_in_check",
    "legal_moves",
    "new_game",
]
