"""Pseudo-legal and legal move generation, including castling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termchess.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_in_check,
)
from termchess.core.enums import Color, PieceType
from termchess.core.errors import OutOfBoundsError
from termchess.core.types import Square, in_bounds

if TYPE_CHECKING:
    from termchess.core.board import Board
    from termchess.core.piece import Piece
    from termchess.core.state import GameState

KING_HOME_COL = 4

# (rook column, squares that must be empty, squares the king must cross safely)
_CASTLING_PATHS: tuple[tuple[int, tuple[int, ...], tuple[int, ...]], ...] = (
    (7, (5, 6), (5, 6)),
    (0, (1, 2, 3), (3, 2)),
)


# -- Pseudo-legal generation -----------------------------------------------


def pseudo_legal_moves(
    board: Board, sq: Square, en_passant: Square | None = None
) -> set[Square]:
    """Destinations allowed by the movement pattern of the piece on *sq*.

    King safety is not considered; castling is not included.
    """
    piece = board[sq]
    if piece is None:
        return set()

    row, col = sq
    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return _pawn_moves(board, sq, piece.color, en_passant)
    if ptype == PieceType.KNIGHT:
        return _jump_moves(board, KNIGHT_TARGETS[row][col], piece.color)
    if ptype == PieceType.BISHOP:
        return _slide_moves(board, BISHOP_RAYS[row][col], piece.color)
    if ptype == PieceType.ROOK:
        return _slide_moves(board, ROOK_RAYS[row][col], piece.color)
    if ptype == PieceType.QUEEN:
        return _slide_moves(board, QUEEN_RAYS[row][col], piece.color)
    if ptype == PieceType.KING:
        return _jump_moves(board, KING_TARGETS[row][col], piece.color)
    raise AssertionError(f"Unhandled piece type: {ptype!r}")


def _pawn_moves(
    board: Board, sq: Square, color: Color, en_passant: Square | None
) -> set[Square]:
    moves: set[Square] = set()
    row, col = sq
    step = color.forward
    start_row = 6 if color == Color.WHITE else 1

    ahead = row + step
    if not 0 <= ahead < 8:
        return moves

    if board.at(ahead, col) is None:
        moves.add(Square(ahead, col))
        if row == start_row and board.at(ahead + step, col) is None:
            moves.add(Square(ahead + step, col))

    for cap_col in (col - 1, col + 1):
        if not 0 <= cap_col < 8:
            continue
        target = board.at(ahead, cap_col)
        if target is not None:
            if target.color != color:
                moves.add(Square(ahead, cap_col))
        elif en_passant == (ahead, cap_col):
            # The double-stepped pawn stands beside us on the target's file.
            victim = board.at(row, cap_col)
            if (
                victim is not None
                and victim.color != color
                and victim.piece_type == PieceType.PAWN
            ):
                moves.add(Square(ahead, cap_col))
    return moves


def _jump_moves(
    board: Board, targets: tuple[Square, ...], color: Color
) -> set[Square]:
    moves: set[Square] = set()
    for to_sq in targets:
        target = board.at(*to_sq)
        if target is None or target.color != color:
            moves.add(to_sq)
    return moves


def _slide_moves(
    board: Board, rays: tuple[tuple[Square, ...], ...], color: Color
) -> set[Square]:
    moves: set[Square] = set()
    for ray in rays:
        for to_sq in ray:
            target = board.at(*to_sq)
            if target is None:
                moves.add(to_sq)
                continue
            if target.color != color:
                moves.add(to_sq)
            break
    return moves


# -- Legality --------------------------------------------------------------


def is_en_passant_capture(
    piece: Piece, from_sq: Square, to_sq: Square, en_passant: Square | None
) -> bool:
    """Whether moving *piece* from *from_sq* to *to_sq* captures en passant."""
    return (
        piece.piece_type == PieceType.PAWN
        and en_passant is not None
        and to_sq == en_passant
        and from_sq.col != to_sq.col
    )


def _king_safe_after(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    en_passant: Square | None,
) -> bool:
    trial = board.copy()
    trial.move_piece(from_sq, to_sq)
    if is_en_passant_capture(piece, from_sq, to_sq, en_passant):
        trial[Square(from_sq.row, to_sq.col)] = None
    return not is_in_check(trial, piece.color)


def castling_moves(board: Board, sq: Square) -> set[Square]:
    """King destinations for castling from *sq*; empty unless *sq* holds a king.

    Requires an unmoved king on its home square that is not in check, an
    unmoved rook in the matching corner, empty squares in between, and a
    safe transit and destination square for the king.
    """
    piece = board[sq]
    if piece is None or piece.piece_type != PieceType.KING or piece.has_moved:
        return set()

    color = piece.color
    home = color.home_row
    if sq != (home, KING_HOME_COL) or is_in_check(board, color):
        return set()

    moves: set[Square] = set()
    for rook_col, between, path in _CASTLING_PATHS:
        rook = board.at(home, rook_col)
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != color
            or rook.has_moved
        ):
            continue
        if any(board.at(home, c) is not None for c in between):
            continue
        if all(
            _king_safe_after(board, sq, Square(home, c), piece, None) for c in path
        ):
            moves.add(Square(home, path[-1]))
    return moves


class MoveGenerator:
    """Legal-move queries over one board snapshot.

    Every hypothetical move is played on a copy; the wrapped board is never
    modified.
    """

    __slots__ = ("_board", "_turn", "_en_passant")

    def __init__(
        self, board: Board, turn: Color, en_passant: Square | None = None
    ) -> None:
        self._board = board
        self._turn = turn
        self._en_passant = en_passant

    @classmethod
    def for_state(cls, state: GameState) -> MoveGenerator:
        return cls(state.board, state.turn, state.en_passant)

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> set[Square]:
        """Legal destinations for the piece on *sq*.

        Empty for an empty square or a piece of the side not to move.
        """
        board = self._board
        sq = Square(*sq)
        piece = board[sq]
        if piece is None or piece.color != self._turn:
            return set()

        legal = {
            to_sq
            for to_sq in pseudo_legal_moves(board, sq, self._en_passant)
            if _king_safe_after(board, sq, to_sq, piece, self._en_passant)
        }
        if piece.piece_type == PieceType.KING:
            legal |= castling_moves(board, sq)
        return legal

    def all_legal_moves(self) -> dict[Square, set[Square]]:
        """Origin → legal destinations, for every piece that can move."""
        result: dict[Square, set[Square]] = {}
        for sq, _piece in self._board.pieces(self._turn):
            moves = self.legal_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_legal_move(self) -> bool:
        return any(self.legal_moves(sq) for sq, _ in self._board.pieces(self._turn))

    def is_in_check(self) -> bool:
        return is_in_check(self._board, self._turn)


def legal_moves(state: GameState, sq: Square) -> set[Square]:
    """Legal destinations for the piece on *sq* in *state*."""
    row, col = sq
    if not in_bounds(row, col):
        raise OutOfBoundsError(row, col)
    return MoveGenerator.for_state(state).legal_moves(Square(row, col))
