"""Canonical position keys and the repetition history.

The key covers piece placement, the side to move, en passant availability
and the castling rights. Castling rights are derived from the king and rook
`has_moved` flags explicitly, so two boards with identical placement but
different rights never share a key. Moved flags of other pieces do not
take part.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from termchess.core.enums import CastlingRights, Color, PieceType
from termchess.core.move_generator import KING_HOME_COL
from termchess.core.zobrist import (
    castling_key,
    en_passant_key,
    piece_key,
    side_to_move_key,
)

if TYPE_CHECKING:
    from termchess.core.board import Board
    from termchess.core.types import Square

_RIGHTS_BY_CORNER: tuple[tuple[Color, int, CastlingRights], ...] = (
    (Color.WHITE, 7, CastlingRights.WHITE_KINGSIDE),
    (Color.WHITE, 0, CastlingRights.WHITE_QUEENSIDE),
    (Color.BLACK, 7, CastlingRights.BLACK_KINGSIDE),
    (Color.BLACK, 0, CastlingRights.BLACK_QUEENSIDE),
)


def _unmoved(board: Board, color: Color, row: int, col: int, ptype: PieceType) -> bool:
    piece = board.at(row, col)
    return (
        piece is not None
        and piece.color == color
        and piece.piece_type == ptype
        and not piece.has_moved
    )


def castling_rights(board: Board) -> CastlingRights:
    """Rights still open: unmoved king at home plus unmoved rook in the corner.

    Whether the squares between are empty or attacked is a question of the
    current move, not of the rights.
    """
    rights = CastlingRights.NONE
    for color, rook_col, right in _RIGHTS_BY_CORNER:
        home = color.home_row
        if _unmoved(board, color, home, KING_HOME_COL, PieceType.KING) and _unmoved(
            board, color, home, rook_col, PieceType.ROOK
        ):
            rights |= right
    return rights


def en_passant_available(board: Board, turn: Color, en_passant: Square | None) -> bool:
    """Whether a pawn of *turn* stands ready to capture on *en_passant*."""
    if en_passant is None:
        return False
    ep_row, ep_col = en_passant
    row = ep_row - turn.forward
    for col in (ep_col - 1, ep_col + 1):
        if 0 <= row < 8 and 0 <= col < 8:
            piece = board.at(row, col)
            if (
                piece is not None
                and piece.color == turn
                and piece.piece_type == PieceType.PAWN
            ):
                return True
    return False


def position_key(board: Board, turn: Color, en_passant: Square | None) -> str:
    """Canonical repetition key as 16 hex digits.

    The en passant square only counts while some pawn could use it.
    """
    key = castling_key(castling_rights(board))
    if turn == Color.BLACK:
        key ^= side_to_move_key()
    if en_passant is not None and en_passant_available(board, turn, en_passant):
        key ^= en_passant_key(en_passant)
    for sq, piece in board.pieces():
        key ^= piece_key(piece, sq)
    return f"{key:016x}"


def record_position(history: Mapping[str, int], key: str) -> dict[str, int]:
    """New history mapping with *key* counted once more."""
    updated = dict(history)
    updated[key] = updated.get(key, 0) + 1
    return updated


def repetition_count(history: Mapping[str, int], key: str) -> int:
    return history.get(key, 0)
