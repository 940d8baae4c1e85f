"""Move value object and classification of special moves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from termchess.core.enums import Color, MoveFlag, PieceType
from termchess.core.move_generator import is_en_passant_capture
from termchess.core.types import Square, square_name

if TYPE_CHECKING:
    from termchess.core.board import Board
    from termchess.core.piece import Piece

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of one move as it was played."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @classmethod
    def classify(
        cls,
        board: Board,
        from_sq: Square,
        to_sq: Square,
        en_passant: Square | None,
        promotion: PieceType | None = None,
    ) -> Move:
        """Describe moving the piece on *from_sq* to *to_sq* on *board*.

        *promotion* is only kept when the move actually promotes.
        """
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(from_sq)}")
        captured = board[to_sq]
        flag = MoveFlag.NORMAL

        if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
            flag = (
                MoveFlag.CASTLE_KINGSIDE
                if to_sq.col > from_sq.col
                else MoveFlag.CASTLE_QUEENSIDE
            )
        elif is_en_passant_capture(piece, from_sq, to_sq, en_passant):
            flag = MoveFlag.EN_PASSANT
            captured = board[Square(from_sq.row, to_sq.col)]
        elif piece.piece_type == PieceType.PAWN:
            if abs(to_sq.row - from_sq.row) == 2:
                flag = MoveFlag.DOUBLE_PAWN
            elif to_sq.row == _last_row(piece.color):
                flag = MoveFlag.PROMOTION

        return cls(
            from_sq,
            to_sq,
            piece,
            captured,
            flag,
            promotion if flag == MoveFlag.PROMOTION else None,
        )

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def resets_clock(self) -> bool:
        """Pawn moves and captures reset the half-move clock."""
        return self.piece.piece_type == PieceType.PAWN or self.is_capture

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic coordinates, e.g. ``e7e8q``."""
        return str(self)


def _last_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7
