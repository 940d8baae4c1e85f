"""Exceptions raised by the rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termchess.core.types import square_name

if TYPE_CHECKING:
    from termchess.core.enums import Color, GameStatus
    from termchess.core.types import Square


class ChessError(ValueError):
    """Base class for every local validation failure."""


class OutOfBoundsError(ChessError):
    """A coordinate lies outside 0–7."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Square ({row}, {col}) is off the board")
        self.row = row
        self.col = col


class EmptySquareError(ChessError):
    """No piece stands on the selected square."""

    def __init__(self, square: Square) -> None:
        super().__init__(f"No piece on {square_name(square)}")
        self.square = square


class WrongSideToMoveError(ChessError):
    """The selected piece does not belong to the side to move."""

    def __init__(self, square: Square, turn: Color) -> None:
        super().__init__(
            f"Piece on {square_name(square)} cannot move: {turn.label} to move"
        )
        self.square = square
        self.turn = turn


class IllegalMoveError(ChessError):
    """The destination is not in the piece's legal-move set."""

    def __init__(self, from_sq: Square, to_sq: Square) -> None:
        super().__init__(
            f"Illegal move {square_name(from_sq)}-{square_name(to_sq)}"
        )
        self.from_sq = from_sq
        self.to_sq = to_sq


class SerializationError(ChessError):
    """A persisted game state could not be decoded."""


class GameOverError(ChessError):
    """The game has already ended; no further moves are accepted."""

    def __init__(self, status: GameStatus) -> None:
        super().__init__(f"Game is over: {status.value}")
        self.status = status
