"""Tests for GameController: selection, submission, events."""

import logging

import pytest

from termchess.core.enums import Color, GameStatus, MoveFlag, PieceType, Winner
from termchess.core.errors import OutOfBoundsError
from termchess.core.move import Move
from termchess.core.policy import RulesPolicy
from termchess.core.state import GameState, new_game
from termchess.core.types import D2, D3, D4, D7, E2, E3, E4, E5, E7, G1, parse_square
from termchess.game.controller import GameController


def _play(ctrl: GameController, *moves: str) -> None:
    for text in moves:
        assert ctrl.submit(parse_square(text[:2]), parse_square(text[2:4]), text[4:] or None)


class TestInit:
    def test_default_state(self) -> None:
        ctrl = GameController()
        assert ctrl.state == new_game()
        assert ctrl.selected is None
        assert ctrl.targets == frozenset()
        assert ctrl.move_log == []

    def test_custom_state_and_policy(self) -> None:
        state = GameState(turn=Color.BLACK)
        policy = RulesPolicy.fide_automatic()
        ctrl = GameController(state, policy)
        assert ctrl.state is state
        assert ctrl.policy is policy


class TestSelection:
    def test_select_own_piece(self) -> None:
        ctrl = GameController()
        targets = ctrl.select(E2)
        assert ctrl.selected == E2
        assert targets == frozenset({E3, E4})
        assert ctrl.targets == targets

    def test_reselect_clears(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        assert ctrl.select(E2) == frozenset()
        assert ctrl.selected is None

    def test_switch_selection(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        ctrl.select(D2)
        assert ctrl.selected == D2
        assert ctrl.targets == frozenset({D3, D4})

    def test_opponent_piece_clears(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        ctrl.select(E7)
        assert ctrl.selected is None

    def test_empty_square_clears(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        ctrl.select(E5)
        assert ctrl.selected is None

    def test_out_of_bounds(self) -> None:
        ctrl = GameController()
        with pytest.raises(OutOfBoundsError):
            ctrl.select((8, 8))

    def test_selection_event(self) -> None:
        ctrl = GameController()
        seen: list = []
        ctrl.events.on_selection_changed.append(lambda sq, targets: seen.append((sq, targets)))
        ctrl.select(E2)
        ctrl.select(E5)
        ctrl.select(E5)
        assert seen == [(E2, frozenset({E3, E4})), (None, frozenset())]


class TestMoveTo:
    def test_select_then_move(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        assert ctrl.move_to(E4)
        assert ctrl.state.turn == Color.BLACK
        assert ctrl.selected is None
        assert ctrl.move_log[0].flag == MoveFlag.DOUBLE_PAWN

    def test_without_selection(self) -> None:
        ctrl = GameController()
        assert not ctrl.move_to(E4)
        assert ctrl.state == new_game()

    def test_non_target_reselects(self) -> None:
        ctrl = GameController()
        ctrl.select(E2)
        assert not ctrl.move_to(G1)
        assert ctrl.selected == G1
        assert ctrl.state.turn == Color.WHITE

    def test_promotion_choice(self) -> None:
        ctrl = GameController()
        _play(ctrl, "h2h4", "g7g5", "h4g5", "g8f6", "g5g6", "f6e4", "g6g7", "e4d6")
        ctrl.select(parse_square("g7"))
        assert ctrl.move_to(parse_square("h8"), "N")
        piece = ctrl.state.board[parse_square("h8")]
        assert piece is not None and piece.piece_type == PieceType.KNIGHT


class TestSubmit:
    def test_legal(self) -> None:
        ctrl = GameController()
        assert ctrl.submit(E2, E4)
        assert ctrl.state.en_passant == E3
        assert [str(m) for m in ctrl.move_log] == ["e2e4"]

    def test_illegal_is_rejected_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        with caplog.at_level(logging.WARNING, logger="termchess.game.controller"):
            assert not ctrl.submit(E2, E5)
        assert ctrl.state == new_game()
        assert "Move rejected" in caplog.text

    def test_wrong_side(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit(D7, parse_square("d5"))
        assert ctrl.move_log == []

    def test_out_of_bounds_is_rejected(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit((9, 9), E4)

    def test_move_event(self) -> None:
        ctrl = GameController()
        seen: list[tuple[Move, GameState]] = []
        ctrl.events.on_move.append(lambda move, state: seen.append((move, state)))
        ctrl.submit(E2, E4)
        assert len(seen) == 1
        assert seen[0][0].to_sq == E4
        assert seen[0][1] is ctrl.state


class TestGameOver:
    def test_fools_mate(self) -> None:
        ctrl = GameController()
        finished: list[GameState] = []
        ctrl.events.on_game_over.append(finished.append)
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert ctrl.state.status == GameStatus.CHECKMATE
        assert ctrl.state.winner == Winner.BLACK
        assert finished == [ctrl.state]

    def test_no_moves_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        final = ctrl.state
        assert not ctrl.submit(E2, E4)
        assert ctrl.state is final

    def test_no_selection_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert ctrl.select(E2) == frozenset()
        assert ctrl.selected is None


class TestUndoAndReset:
    def test_undo(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "e7e5")
        assert ctrl.undo()
        assert ctrl.state.turn == Color.BLACK
        assert len(ctrl.move_log) == 1
        assert ctrl.undo()
        assert ctrl.state == new_game()
        assert not ctrl.undo()

    def test_undo_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert ctrl.undo()
        assert ctrl.state.status == GameStatus.PLAYING

    def test_reset(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        ctrl.select(E7)
        ctrl.reset()
        assert ctrl.state == new_game()
        assert ctrl.move_log == []
        assert ctrl.selected is None
        assert not ctrl.undo()

    def test_load(self) -> None:
        ctrl = GameController()
        state = GameState(turn=Color.BLACK)
        ctrl.load(state)
        assert ctrl.state is state
        assert ctrl.select(E7) == frozenset({parse_square("e6"), E5})
