"""Attack detection and the precomputed geometry shared with move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termchess.core.enums import Color, PieceType
from termchess.core.types import Square, in_bounds

if TYPE_CHECKING:
    from termchess.core.board import Board


# (row delta, col delta)
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------

Targets = tuple[tuple[tuple[Square, ...], ...], ...]
Rays = tuple[tuple[tuple[tuple[Square, ...], ...], ...], ...]


def _build_targets(offsets: tuple[tuple[int, int], ...]) -> Targets:
    """[row][col] -> on-board squares one offset away."""
    return tuple(
        tuple(
            tuple(
                Square(row + dr, col + dc)
                for dr, dc in offsets
                if in_bounds(row + dr, col + dc)
            )
            for col in range(8)
        )
        for row in range(8)
    )


def _build_rays(directions: tuple[tuple[int, int], ...]) -> Rays:
    """[row][col] -> one ray per direction, nearest square first."""
    table: list[tuple[tuple[tuple[Square, ...], ...], ...]] = []
    for row in range(8):
        row_rays: list[tuple[tuple[Square, ...], ...]] = []
        for col in range(8):
            square_rays: list[tuple[Square, ...]] = []
            for dr, dc in directions:
                r, c = row + dr, col + dc
                ray: list[Square] = []
                while in_bounds(r, c):
                    ray.append(Square(r, c))
                    r += dr
                    c += dc
                square_rays.append(tuple(ray))
            row_rays.append(tuple(square_rays))
        table.append(tuple(row_rays))
    return tuple(table)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Attack detection ------------------------------------------------------


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    attackers: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for r, c in ray:
            piece = board.at(r, c)
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in attackers:
                return True
            break
    return False


def _jump_hits(
    board: Board,
    targets: tuple[Square, ...],
    by_color: Color,
    attacker: PieceType,
) -> bool:
    for r, c in targets:
        piece = board.at(r, c)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == attacker
        ):
            return True
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    row, col = sq

    if _ray_hits(board, ROOK_RAYS[row][col], by_color, _ORTHOGONAL_ATTACKERS):
        return True
    if _ray_hits(board, BISHOP_RAYS[row][col], by_color, _DIAGONAL_ATTACKERS):
        return True
    if _jump_hits(board, KNIGHT_TARGETS[row][col], by_color, PieceType.KNIGHT):
        return True

    # An attacking pawn sits one step "behind" sq from its own point of view.
    pawn_row = row - by_color.forward
    for pawn_col in (col - 1, col + 1):
        if in_bounds(pawn_row, pawn_col):
            piece = board.at(pawn_row, pawn_col)
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.PAWN
            ):
                return True

    return _jump_hits(board, KING_TARGETS[row][col], by_color, PieceType.KING)


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without a king for *color* is never in check.
    """
    king_sq = board.find_king(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
