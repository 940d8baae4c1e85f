"""GameState value and the move applicator.

A :class:`GameState` is never changed after construction; :func:`apply_move`
returns the next state and leaves its input untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from termchess.core.board import Board
from termchess.core.enums import (
    Color,
    GameEndReason,
    GameStatus,
    MoveFlag,
    Winner,
)
from termchess.core.errors import (
    EmptySquareError,
    GameOverError,
    IllegalMoveError,
    OutOfBoundsError,
    WrongSideToMoveError,
)
from termchess.core.history import position_key, record_position, repetition_count
from termchess.core.move import Move
from termchess.core.move_generator import legal_moves
from termchess.core.piece import Piece
from termchess.core.policy import DEFAULT_POLICY, PromotionChoice, RulesPolicy
from termchess.core.rules import Rules
from termchess.core.types import Square, in_bounds

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameState:
    """Everything needed to continue a game from this point."""

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    history: dict[str, int] = field(default_factory=dict)
    status: GameStatus = GameStatus.PLAYING
    winner: Winner = Winner.NONE
    end_reason: GameEndReason = GameEndReason.NONE

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    @property
    def position_key(self) -> str:
        """Canonical repetition key of the current position."""
        return position_key(self.board, self.turn, self.en_passant)

    def repetition_count(self) -> int:
        """How many times the current position occurred in this game."""
        return repetition_count(self.history, self.position_key)


def new_game() -> GameState:
    """Standard starting position, White to move, empty history."""
    return GameState()


def as_square(sq: tuple[int, int]) -> Square:
    """Validate a (row, col) pair and return it as a :class:`Square`."""
    row, col = sq
    if not in_bounds(row, col):
        raise OutOfBoundsError(row, col)
    return Square(row, col)


def select_piece(state: GameState, sq: tuple[int, int]) -> Piece:
    """The side-to-move's piece on *sq*, or the matching selection error."""
    square = as_square(sq)
    piece = state.board[square]
    if piece is None:
        raise EmptySquareError(square)
    if piece.color != state.turn:
        raise WrongSideToMoveError(square, state.turn)
    return piece


# ── Move application ─────────────────────────────────────────────────────


def apply_move(
    state: GameState,
    from_sq: tuple[int, int],
    to_sq: tuple[int, int],
    promotion: PromotionChoice = None,
    *,
    policy: RulesPolicy = DEFAULT_POLICY,
) -> GameState:
    """Play a legal move and return the resulting state.

    Raises :class:`GameOverError` once the game has ended, otherwise
    :class:`OutOfBoundsError`, :class:`EmptySquareError`,
    :class:`WrongSideToMoveError` or :class:`IllegalMoveError`; on error the
    input state is unchanged. *promotion* is resolved through
    :meth:`RulesPolicy.promotion_for`, so a missing or invalid choice
    promotes to the policy default (Queen).
    """
    move = prepare_move(state, from_sq, to_sq, promotion, policy=policy)
    return play_move(state, move, policy=policy)


def prepare_move(
    state: GameState,
    from_sq: tuple[int, int],
    to_sq: tuple[int, int],
    promotion: PromotionChoice = None,
    *,
    policy: RulesPolicy = DEFAULT_POLICY,
) -> Move:
    """Validate a move against *state* and describe it, without playing it."""
    if state.is_over:
        raise GameOverError(state.status)
    origin = as_square(from_sq)
    target = as_square(to_sq)
    select_piece(state, origin)
    if target not in legal_moves(state, origin):
        raise IllegalMoveError(origin, target)

    move = Move.classify(state.board, origin, target, state.en_passant)
    if move.flag == MoveFlag.PROMOTION:
        move = replace(move, promotion=policy.promotion_for(promotion))
    return move


def play_move(
    state: GameState, move: Move, *, policy: RulesPolicy = DEFAULT_POLICY
) -> GameState:
    """Commit an already classified and validated *move*."""
    if state.is_over:
        raise GameOverError(state.status)
    board = state.board.copy()

    # 1. Relocate the piece
    board[move.to_sq] = move.piece.moved()
    board[move.from_sq] = None

    # 2./3. Rook slide for castling, victim removal for en passant
    row = move.from_sq.row
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        _slide_rook(board, Square(row, 7), Square(row, 5))
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        _slide_rook(board, Square(row, 0), Square(row, 3))
    elif move.flag == MoveFlag.EN_PASSANT:
        board[Square(row, move.to_sq.col)] = None

    # 4. En passant target for the opponent
    en_passant: Square | None = None
    if move.flag == MoveFlag.DOUBLE_PAWN:
        en_passant = Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)

    # 5. Promotion
    if move.flag == MoveFlag.PROMOTION:
        promoted = board[move.to_sq]
        assert promoted is not None
        board[move.to_sq] = promoted.promoted(
            move.promotion or policy.default_promotion
        )

    # 6./7. Clocks and turn
    halfmove_clock = 0 if move.resets_clock else state.halfmove_clock + 1
    fullmove_number = state.fullmove_number
    if state.turn == Color.BLACK:
        fullmove_number += 1
    turn = state.turn.opposite

    # 8./9. History and terminal conditions
    history = record_position(state.history, position_key(board, turn, en_passant))
    next_state = GameState(
        board=board,
        turn=turn,
        en_passant=en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
        history=history,
    )
    _LOGGER.debug("Applied %s (%s)", move, move.flag.name)

    outcome = Rules.evaluate(next_state, policy)
    if outcome.status.is_terminal:
        _LOGGER.info(
            "Game over after %s: %s, winner=%s (%s)",
            move,
            outcome.status.value,
            outcome.winner.value or "-",
            outcome.reason.value,
        )
        next_state = replace(
            next_state,
            status=outcome.status,
            winner=outcome.winner,
            end_reason=outcome.reason,
        )
    return next_state


def _slide_rook(board: Board, rook_from: Square, rook_to: Square) -> None:
    rook = board[rook_from]
    assert rook is not None
    board[rook_to] = rook.moved()
    board[rook_from] = None
