"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from termchess.core.enums import Color, GameEndReason, GameStatus, PieceType, Winner
from termchess.core.history import position_key, repetition_count
from termchess.core.move_generator import MoveGenerator
from termchess.core.policy import DEFAULT_POLICY, RulesPolicy

if TYPE_CHECKING:
    from termchess.core.board import Board
    from termchess.core.state import GameState

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Outcome(NamedTuple):
    """Result of evaluating a position for the side to move."""

    status: GameStatus
    winner: Winner
    reason: GameEndReason


ONGOING = Outcome(GameStatus.PLAYING, Winner.NONE, GameEndReason.NONE)


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    # Policy:
    # - Checkmate and stalemate are decided by the side to move having no
    #   legal move; checkmate wins over any draw rule firing on the same ply.
    # - Fifty-move rule, repetition and insufficient material draw at once,
    #   no claim needed. Thresholds come from RulesPolicy.

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return MoveGenerator.for_state(state).is_in_check()

    @staticmethod
    def has_legal_move(state: GameState) -> bool:
        return MoveGenerator.for_state(state).has_legal_move()

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        gen = MoveGenerator.for_state(state)
        return gen.is_in_check() and not gen.has_legal_move()

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        gen = MoveGenerator.for_state(state)
        return not gen.is_in_check() and not gen.has_legal_move()

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        minors: list[tuple[Color, PieceType, int]] = []
        for sq, piece in board.pieces():
            if piece.piece_type == PieceType.KING:
                continue
            if piece.piece_type not in _MINOR_PIECES:
                return False
            minors.append((piece.color, piece.piece_type, (sq.row + sq.col) % 2))
            if len(minors) > 2:
                return False

        if len(minors) <= 1:
            return True

        (c1, t1, shade1), (c2, t2, shade2) = minors
        return (
            c1 != c2
            and t1 == PieceType.BISHOP
            and t2 == PieceType.BISHOP
            and shade1 == shade2
        )

    @staticmethod
    def is_fifty_move_rule(
        state: GameState, policy: RulesPolicy = DEFAULT_POLICY
    ) -> bool:
        return state.halfmove_clock >= policy.fifty_move_halfmoves

    @staticmethod
    def is_threefold_repetition(
        state: GameState, policy: RulesPolicy = DEFAULT_POLICY
    ) -> bool:
        """Whether the current position has occurred often enough to draw."""
        key = position_key(state.board, state.turn, state.en_passant)
        return repetition_count(state.history, key) >= policy.repetition_limit

    @staticmethod
    def evaluate(state: GameState, policy: RulesPolicy = DEFAULT_POLICY) -> Outcome:
        """Classify the position for the side to move."""
        gen = MoveGenerator.for_state(state)
        if not gen.has_legal_move():
            if gen.is_in_check():
                return Outcome(
                    GameStatus.CHECKMATE,
                    Winner.of(state.turn.opposite),
                    GameEndReason.CHECKMATE,
                )
            return Outcome(GameStatus.STALEMATE, Winner.DRAW, GameEndReason.STALEMATE)

        if Rules.is_insufficient_material(state.board):
            return _draw(GameEndReason.INSUFFICIENT_MATERIAL)
        if Rules.is_fifty_move_rule(state, policy):
            return _draw(GameEndReason.FIFTY_MOVE_RULE)
        if Rules.is_threefold_repetition(state, policy):
            return _draw(GameEndReason.REPETITION)
        return ONGOING


def _draw(reason: GameEndReason) -> Outcome:
    return Outcome(GameStatus.DRAW, Winner.DRAW, reason)
