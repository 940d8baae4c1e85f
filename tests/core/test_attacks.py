"""Tests for attack detection."""

from termchess.core.attacks import KNIGHT_TARGETS, QUEEN_RAYS, is_in_check, is_square_attacked
from termchess.core.board import Board
from termchess.core.enums import Color
from termchess.core.types import A1, A3, A4, D3, D5, E1, E4, F3, F5, F6, H8


class TestTables:
    def test_corner_knight(self) -> None:
        assert len(KNIGHT_TARGETS[0][0]) == 2

    def test_centre_knight(self) -> None:
        assert len(KNIGHT_TARGETS[4][4]) == 8

    def test_queen_rays_from_corner(self) -> None:
        # Three non-empty rays of seven squares each
        lengths = sorted(len(ray) for ray in QUEEN_RAYS[7][0])
        assert lengths == [0, 0, 0, 0, 0, 7, 7, 7]


class TestIsSquareAttacked:
    def test_initial_position(self) -> None:
        board = Board.initial()
        assert is_square_attacked(board, F3, Color.WHITE)
        assert not is_square_attacked(board, E4, Color.WHITE)
        assert is_square_attacked(board, F6, Color.BLACK)
        assert not is_square_attacked(board, F3, Color.BLACK)

    def test_pawn_attacks_forward_only(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ....P...
            ........
            ........
            ........
            """
        )
        assert is_square_attacked(board, D5, Color.WHITE)
        assert is_square_attacked(board, F5, Color.WHITE)
        assert not is_square_attacked(board, D3, Color.WHITE)

    def test_black_pawn_attacks_downward(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ....p...
            ........
            ........
            ........
            """
        )
        assert is_square_attacked(board, D3, Color.BLACK)
        assert not is_square_attacked(board, D5, Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ........
            ........
            p.......
            R.......
            """
        )
        assert not is_square_attacked(board, A3, Color.WHITE)

    def test_long_diagonal(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ........
            ........
            ........
            B.......
            """
        )
        assert is_square_attacked(board, H8, Color.WHITE)

    def test_king_attacks_adjacent(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ........
            ........
            K.......
            ........
            """
        )
        assert is_square_attacked(board, A1, Color.WHITE)
        assert not is_square_attacked(board, A4, Color.WHITE)


class TestIsInCheck:
    def test_initial_not_in_check(self) -> None:
        board = Board.initial()
        assert not is_in_check(board, Color.WHITE)
        assert not is_in_check(board, Color.BLACK)

    def test_rook_check(self) -> None:
        board = Board.from_diagram(
            """
            ....r...
            ........
            ........
            ........
            ........
            ........
            ........
            ....K...
            """
        )
        assert is_in_check(board, Color.WHITE)

    def test_knight_check(self) -> None:
        board = Board.from_diagram(
            """
            ........
            ........
            ........
            ........
            ........
            .....n..
            ........
            ....K...
            """
        )
        assert is_in_check(board, Color.WHITE)
        assert board.find_king(Color.WHITE) == E1

    def test_missing_king_is_never_in_check(self) -> None:
        assert not is_in_check(Board(), Color.WHITE)
