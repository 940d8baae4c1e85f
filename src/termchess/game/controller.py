"""GameController: single-writer owner of one game's current state.

Turns cursor-style input (select a square, then a destination) into engine
calls and notifies listeners through simple callbacks, so a terminal
session or a test can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from termchess.core.errors import ChessError
from termchess.core.move import Move
from termchess.core.move_generator import legal_moves
from termchess.core.policy import DEFAULT_POLICY, PromotionChoice, RulesPolicy
from termchess.core.state import (
    GameState,
    as_square,
    new_game,
    play_move,
    prepare_move,
)
from termchess.core.types import Square, square_name

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # move, state after
GameOverCallback = Callable[[GameState], None]
SelectionCallback = Callable[[Square | None, frozenset[Square]], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Holds the authoritative :class:`GameState` of one game.

    Thread-safety: one controller per game, called from one thread. The
    engine functions it wraps are pure, so concurrent games need nothing
    more than one controller each.
    """

    __slots__ = (
        "_state",
        "_policy",
        "_selected",
        "_targets",
        "_undo_stack",
        "_move_log",
        "events",
    )

    def __init__(
        self,
        state: GameState | None = None,
        policy: RulesPolicy = DEFAULT_POLICY,
    ) -> None:
        self._state = state if state is not None else new_game()
        self._policy = policy
        self._selected: Square | None = None
        self._targets: frozenset[Square] = frozenset()
        self._undo_stack: list[GameState] = []
        self._move_log: list[Move] = []
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def policy(self) -> RulesPolicy:
        return self._policy

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def targets(self) -> frozenset[Square]:
        """Legal destinations of the selected piece (for highlighting)."""
        return self._targets

    @property
    def move_log(self) -> list[Move]:
        return list(self._move_log)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Start over from the standard position."""
        self.load(new_game())

    def load(self, state: GameState) -> None:
        """Replace the current state, e.g. after a remote update."""
        self._state = state
        self._undo_stack.clear()
        self._move_log.clear()
        self._set_selection(None, frozenset())

    # ── Input ────────────────────────────────────────────────────────────

    def select(self, square: tuple[int, int]) -> frozenset[Square]:
        """Select, switch or clear the selection at *square*.

        Selecting the selected square again deselects it; a friendly piece
        of the side to move becomes the new selection; anything else clears
        the selection. Returns the highlighted destinations.
        """
        sq = as_square(square)
        if sq == self._selected:
            self._set_selection(None, frozenset())
            return self._targets

        piece = self._state.board[sq]
        if self._state.is_over or piece is None or piece.color != self._state.turn:
            self._set_selection(None, frozenset())
            return self._targets

        targets = frozenset(legal_moves(self._state, sq))
        _LOGGER.debug(
            "Selected %s: %d legal moves", square_name(sq), len(targets)
        )
        self._set_selection(sq, targets)
        return self._targets

    def move_to(
        self, square: tuple[int, int], promotion: PromotionChoice = None
    ) -> bool:
        """Move the selected piece to *square*, or reselect when not a target."""
        sq = as_square(square)
        if self._selected is None or sq not in self._targets:
            self.select(sq)
            return False
        return self.submit(self._selected, sq, promotion)

    def submit(
        self,
        from_sq: tuple[int, int],
        to_sq: tuple[int, int],
        promotion: PromotionChoice = None,
    ) -> bool:
        """Submit a move. Returns True if legal and applied."""
        if self._state.is_over:
            _LOGGER.warning("Move rejected: game is over")
            return False

        before = self._state
        try:
            move = prepare_move(
                before, from_sq, to_sq, promotion, policy=self._policy
            )
        except ChessError as exc:
            _LOGGER.warning("Move rejected: %s", exc)
            return False

        after = play_move(before, move, policy=self._policy)
        self._undo_stack.append(before)
        self._move_log.append(move)
        self._state = after
        self._set_selection(None, frozenset())

        self._emit_move(move)
        if after.is_over:
            self._emit_game_over()
        return True

    def undo(self) -> bool:
        """Take back the last move. Returns True on success."""
        if not self._undo_stack:
            return False
        self._state = self._undo_stack.pop()
        self._move_log.pop()
        self._set_selection(None, frozenset())
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _set_selection(self, sq: Square | None, targets: frozenset[Square]) -> None:
        if sq == self._selected and targets == self._targets:
            return
        self._selected = sq
        self._targets = targets
        for cb in self.events.on_selection_changed:
            cb(sq, targets)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._state)
