"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from termchess.core.state import GameState, apply_move, new_game
from termchess.core.types import parse_square


def play_moves(state: GameState, *moves: str) -> GameState:
    """Apply coordinate moves such as ``"e2e4"`` or ``"a7a8n"`` in order."""
    for text in moves:
        promotion = text[4:] or None
        state = apply_move(
            state, parse_square(text[:2]), parse_square(text[2:4]), promotion
        )
    return state


@pytest.fixture
def start() -> GameState:
    return new_game()


@pytest.fixture
def play() -> Callable[..., GameState]:
    return play_moves
