"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def label(self) -> str:
        """Side label used by the persisted representation."""
        return self.name.capitalize()

    @property
    def home_row(self) -> int:
        """Row of the back rank (row 7 is the first rank)."""
        return 7 if self == Color.WHITE else 0

    @property
    def forward(self) -> int:
        """Row delta of a pawn step."""
        return -1 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameStatus(Enum):
    """Lifecycle of a game; everything but PLAYING is terminal."""

    PLAYING = "playing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.PLAYING


class Winner(Enum):
    """Outcome label. NONE while the game is still being played."""

    WHITE = "White"
    BLACK = "Black"
    DRAW = "Draw"
    NONE = ""

    @classmethod
    def of(cls, color: Color) -> Winner:
        return cls.WHITE if color == Color.WHITE else cls.BLACK


class GameEndReason(Enum):
    """Which rule ended the game."""

    NONE = ""
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    FIFTY_MOVE_RULE = "fifty_move_rule"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    REPETITION = "repetition"
