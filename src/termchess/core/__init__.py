"""Core domain layer: pure chess rules with no external dependencies.

Quick start::

    from termchess.core import apply_move, legal_moves, new_game
    from termchess.core.types import E2, E4

    state = new_game()
    assert E4 in legal_moves(state, E2)
    state = apply_move(state, E2, E4)
"""

from termchess.core.attacks import is_in_check, is_square_attacked
from termchess.core.board import Board
from termchess.core.enums import (
    CastlingRights,
    Color,
    GameEndReason,
    GameStatus,
    MoveFlag,
    PieceType,
    Winner,
)
from termchess.core.errors import (
    ChessError,
    EmptySquareError,
    GameOverError,
    IllegalMoveError,
    OutOfBoundsError,
    SerializationError,
    WrongSideToMoveError,
)
from termchess.core.history import castling_rights, position_key
from termchess.core.move import Move
from termchess.core.move_generator import (
    MoveGenerator,
    castling_moves,
    legal_moves,
    pseudo_legal_moves,
)
from termchess.core.piece import Piece
from termchess.core.policy import DEFAULT_POLICY, RulesPolicy
from termchess.core.rules import Outcome, Rules
from termchess.core.serde import (
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
from termchess.core.state import GameState, apply_move, new_game, select_piece
from termchess.core.types import (
    Square,
    in_bounds,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameEndReason",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    "Winner",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Errors
    "ChessError",
    "EmptySquareError",
    "GameOverError",
    "IllegalMoveError",
    "OutOfBoundsError",
    "SerializationError",
    "WrongSideToMoveError",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "Outcome",
    "Piece",
    "Rules",
    "RulesPolicy",
    "DEFAULT_POLICY",
    # Engine entry points
    "apply_move",
    "castling_moves",
    "castling_rights",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "new_game",
    "position_key",
    "pseudo_legal_moves",
    "select_piece",
    # Persistence
    "state_from_dict",
    "state_from_json",
    "state_to_dict",
    "state_to_json",
]
