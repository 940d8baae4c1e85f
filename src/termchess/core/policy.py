"""Rule policy: draw thresholds and the promotion default."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from termchess.core.enums import PieceType
from termchess.core.piece import CODE_TYPES

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

PromotionChoice = PieceType | str | None


@dataclass(slots=True, frozen=True)
class RulesPolicy:
    """Thresholds applied by the terminal-condition evaluator.

    Args:
        fifty_move_halfmoves: Half-move clock value that draws the game.
        repetition_limit: Occurrences of one position that draw the game.
        default_promotion: Piece a pawn becomes when the caller gives no
            choice or an invalid one. This is a documented policy, the
            engine never raises for a bad promotion choice.
    """

    fifty_move_halfmoves: int = 100
    repetition_limit: int = 3
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.fifty_move_halfmoves < 1:
            raise ValueError("fifty_move_halfmoves must be positive")
        if self.repetition_limit < 2:
            raise ValueError("repetition_limit must be at least 2")
        if self.default_promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {self.default_promotion.name}")

    # Presets
    @classmethod
    def standard(cls) -> RulesPolicy:
        """Fifty-move rule and threefold repetition end the game at once."""
        return cls()

    @classmethod
    def fide_automatic(cls) -> RulesPolicy:
        """Only the draws an arbiter applies without a claim (75 moves, fivefold)."""
        return cls(fifty_move_halfmoves=150, repetition_limit=5)

    def promotion_for(self, choice: PromotionChoice) -> PieceType:
        """Resolve a caller's promotion choice to a piece type.

        Accepts a :class:`PieceType` or its letter (``"Q"``, ``"n"``, ...).
        Anything else resolves to :attr:`default_promotion`.
        """
        ptype: PieceType | None
        if isinstance(choice, PieceType):
            ptype = choice
        elif isinstance(choice, str):
            ptype = CODE_TYPES.get(choice.strip().upper())
        else:
            ptype = None

        if ptype in PROMOTION_TYPES:
            return ptype
        if choice is not None:
            _LOGGER.debug(
                "Invalid promotion choice %r, using %s",
                choice,
                self.default_promotion.name,
            )
        return self.default_promotion


DEFAULT_POLICY = RulesPolicy.standard()
