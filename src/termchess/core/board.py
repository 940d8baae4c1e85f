"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from termchess.core.enums import Color, PieceType
from termchess.core.errors import OutOfBoundsError
from termchess.core.piece import Piece
from termchess.core.types import FILES, Square, in_bounds

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of ``Piece | None``.

    Rule code never mutates a board it does not own: hypothetical moves are
    played on a :meth:`copy` and thrown away.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: tuple[int, int]) -> Piece | None:
        row, col = sq
        if not in_bounds(row, col):
            raise OutOfBoundsError(row, col)
        return self._grid[row][col]

    def __setitem__(self, sq: tuple[int, int], piece: Piece | None) -> None:
        row, col = sq
        if not in_bounds(row, col):
            raise OutOfBoundsError(row, col)
        self._grid[row][col] = piece

    def at(self, row: int, col: int) -> Piece | None:
        """Unchecked access for callers that already validated the coordinate."""
        return self._grid[row][col]

    def is_empty(self, sq: tuple[int, int]) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one *color*."""
        for row, rank in enumerate(self._grid):
            for col, piece in enumerate(rank):
                if piece is not None and (color is None or piece.color == color):
                    yield Square(row, col), piece

    def find_king(self, color: Color) -> Square | None:
        """First square holding *color*'s king, or None if it is missing."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def rows(self) -> list[list[Piece | None]]:
        """Rank-major copy of the grid (row 0 = eighth rank)."""
        return [rank.copy() for rank in self._grid]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [rank.copy() for rank in self._grid]
        return b

    def move_piece(self, from_sq: Square, to_sq: Square) -> None:
        """Relocate whatever stands on *from_sq*, overwriting *to_sq*."""
        self[to_sq] = self[from_sq]
        self[from_sq] = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._grid[0][col] = Piece(Color.BLACK, pt)
            b._grid[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._grid[6][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._grid[7][col] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_diagram(cls, diagram: str) -> Board:
        """Build a board from eight text rows, eighth rank first.

        Uppercase letters are white, lowercase black, ``.`` is empty;
        whitespace inside a row is ignored. Every piece starts unmoved::

            Board.from_diagram('''
                ....k...
                ........
                ........
                ........
                ........
                ........
                ........
                ....K..R
            ''')
        """
        lines = ["".join(line.split()) for line in diagram.strip().splitlines()]
        lines = [line for line in lines if line]
        if len(lines) != 8 or any(len(line) != 8 for line in lines):
            raise ValueError("Board diagram must have 8 rows of 8 squares")
        b = cls()
        for row, line in enumerate(lines):
            for col, ch in enumerate(line):
                if ch != ".":
                    b._grid[row][col] = Piece.from_char(ch)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        lines: list[str] = []
        for row, rank in enumerate(self._grid):
            cells = [str(p) if p else "." for p in rank]
            lines.append(f"{8 - row} {' '.join(cells)}")
        lines.append("  " + " ".join(FILES))
        return "\n".join(lines)
