"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from termchess.core.enums import Color, PieceType

# Type code used by the persisted board ("K", "Q", ...).
TYPE_CODES: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
    PieceType.PAWN: "P",
}
CODE_TYPES: dict[str, PieceType] = {v: k for k, v in TYPE_CODES.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` only matters for kings and rooks (castling), but it is
    tracked for every piece.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    def moved(self) -> Piece:
        """Copy of this piece with ``has_moved`` set."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    def promoted(self, piece_type: PieceType) -> Piece:
        return replace(self, piece_type=piece_type)

    # ── Serialisation ────────────────────────────────────────────────────

    @property
    def code(self) -> str:
        """Type code, independent of color."""
        return TYPE_CODES[self.piece_type]

    def __str__(self) -> str:
        """Diagram character (uppercase = white, lowercase = black)."""
        return self.code if self.color == Color.WHITE else self.code.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from diagram character, e.g. 'N' → white knight."""
        try:
            ptype = CODE_TYPES[char.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype)
