"""Zobrist keys for the repetition history.

Keys are drawn in a fixed order from one splitmix64 stream, so every process
builds the same tables and persisted history keys stay comparable.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice
from typing import Final

from termchess.core.enums import CastlingRights, Color, PieceType
from termchess.core.piece import Piece
from termchess.core.types import Square

_SEED: Final = 0xA5B3C7D9E1F23412
_GOLDEN_GAMMA: Final = 0x9E3779B97F4A7C15
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _splitmix64(seed: int) -> Iterator[int]:
    """Endless deterministic sequence of 64-bit values."""
    state = seed
    while True:
        state = (state + _GOLDEN_GAMMA) & _MASK_64
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
        yield z ^ (z >> 31)


def _take(stream: Iterator[int], n: int) -> tuple[int, ...]:
    return tuple(islice(stream, n))


_stream = _splitmix64(_SEED)

# One key per square (row * 8 + col) for every colour / piece type pair.
_PIECE_KEYS: Final = {
    (color, ptype): _take(_stream, 64) for color in Color for ptype in PieceType
}
_BLACK_TO_MOVE_KEY: Final = next(_stream)
_CASTLING_KEYS: Final = _take(_stream, 16)
_EN_PASSANT_KEYS: Final = _take(_stream, 64)

del _stream


def piece_key(piece: Piece, sq: Square) -> int:
    row, col = sq
    return _PIECE_KEYS[piece.color, piece.piece_type][row * 8 + col]


def side_to_move_key() -> int:
    """Toggled in when Black is to move."""
    return _BLACK_TO_MOVE_KEY


def castling_key(castling: CastlingRights) -> int:
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square) -> int:
    row, col = ep_square
    return _EN_PASSANT_KEYS[row * 8 + col]
