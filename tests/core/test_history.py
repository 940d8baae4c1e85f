"""Tests for position keys and the repetition history."""

import re

from termchess.core.board import Board
from termchess.core.enums import CastlingRights, Color, PieceType
from termchess.core.history import (
    castling_rights,
    en_passant_available,
    position_key,
    record_position,
    repetition_count,
)
from termchess.core.piece import Piece
from termchess.core.types import B1, E3, H1


class TestPositionKey:
    def test_format(self) -> None:
        key = position_key(Board.initial(), Color.WHITE, None)
        assert re.fullmatch(r"[0-9a-f]{16}", key)

    def test_deterministic(self) -> None:
        a = position_key(Board.initial(), Color.WHITE, None)
        b = position_key(Board.initial(), Color.WHITE, None)
        assert a == b

    def test_side_to_move_matters(self) -> None:
        board = Board.initial()
        assert position_key(board, Color.WHITE, None) != position_key(board, Color.BLACK, None)

    def test_placement_matters(self) -> None:
        board = Board.initial()
        moved = board.copy()
        moved.move_piece(B1, (5, 2))
        assert position_key(board, Color.WHITE, None) != position_key(moved, Color.WHITE, None)

    def test_rook_moved_flag_changes_key(self) -> None:
        board = Board.initial()
        moved = board.copy()
        moved[H1] = Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert position_key(board, Color.WHITE, None) != position_key(moved, Color.WHITE, None)

    def test_knight_moved_flag_ignored(self) -> None:
        board = Board.initial()
        moved = board.copy()
        moved[B1] = Piece(Color.WHITE, PieceType.KNIGHT, has_moved=True)
        assert position_key(board, Color.WHITE, None) == position_key(moved, Color.WHITE, None)

    def test_unusable_en_passant_ignored(self, start, play) -> None:
        state = play(start, "e2e4")
        assert state.en_passant == E3
        assert state.position_key == position_key(state.board, Color.BLACK, None)

    def test_usable_en_passant_counts(self, start, play) -> None:
        state = play(start, "d2d4", "a7a6", "d4d5", "e7e5")
        assert en_passant_available(state.board, state.turn, state.en_passant)
        assert state.position_key != position_key(state.board, state.turn, None)


class TestCastlingRights:
    def test_initial(self) -> None:
        assert castling_rights(Board.initial()) == CastlingRights.ALL

    def test_empty_board(self) -> None:
        assert castling_rights(Board()) == CastlingRights.NONE

    def test_moved_rook(self) -> None:
        board = Board.initial()
        board[H1] = Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert castling_rights(board) == CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_BOTH

    def test_moved_king(self) -> None:
        board = Board.initial()
        board[(0, 4)] = Piece(Color.BLACK, PieceType.KING, has_moved=True)
        assert castling_rights(board) == CastlingRights.WHITE_BOTH


class TestHistory:
    def test_record_returns_new_mapping(self) -> None:
        history: dict[str, int] = {}
        updated = record_position(history, "abc")
        assert history == {}
        assert updated == {"abc": 1}
        assert record_position(updated, "abc") == {"abc": 2}

    def test_repetition_count(self) -> None:
        assert repetition_count({"abc": 2}, "abc") == 2
        assert repetition_count({"abc": 2}, "def") == 0

    def test_initial_position_not_recorded(self, start) -> None:
        assert start.repetition_count() == 0
