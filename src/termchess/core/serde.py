"""Persisted representation of a :class:`GameState`.

The layout is what the synchronisation layer stores per room::

    {
      "board": [[{"type": "R", "isWhite": false, "hasMoved": false}, ...], ...],
      "turn": "White",
      "enPassantTarget": {"row": 5, "col": 4} | null,
      "halfMoveClock": 0,
      "fullMoveNumber": 1,
      "status": "playing",
      "winner": "",
      "endReason": "",
      "history": {"<key>": 1, ...}
    }

Empty squares are ``{"type": "", "isWhite": false, "hasMoved": false}``.
The board is rank-major, row 0 being the eighth rank.
"""

from __future__ import annotations

import json
from typing import Any

from termchess.core.board import Board
from termchess.core.enums import Color, GameEndReason, GameStatus, Winner
from termchess.core.errors import SerializationError
from termchess.core.piece import CODE_TYPES, Piece
from termchess.core.state import GameState
from termchess.core.types import Square, in_bounds

_EMPTY: dict[str, Any] = {"type": "", "isWhite": False, "hasMoved": False}
_TURNS: dict[str, Color] = {c.label: c for c in Color}


# ── Encoding ─────────────────────────────────────────────────────────────────


def _piece_to_dict(piece: Piece | None) -> dict[str, Any]:
    if piece is None:
        return dict(_EMPTY)
    return {
        "type": piece.code,
        "isWhite": piece.color == Color.WHITE,
        "hasMoved": piece.has_moved,
    }


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Plain, JSON-compatible mapping of *state*."""
    ep = state.en_passant
    return {
        "board": [[_piece_to_dict(p) for p in rank] for rank in state.board.rows()],
        "turn": state.turn.label,
        "enPassantTarget": None if ep is None else {"row": ep.row, "col": ep.col},
        "halfMoveClock": state.halfmove_clock,
        "fullMoveNumber": state.fullmove_number,
        "status": state.status.value,
        "winner": state.winner.value,
        "endReason": state.end_reason.value,
        "history": dict(state.history),
    }


def state_to_json(state: GameState) -> str:
    return json.dumps(state_to_dict(state), separators=(",", ":"), sort_keys=True)


# ── Decoding ─────────────────────────────────────────────────────────────────


def _piece_from_dict(data: Any) -> Piece | None:
    if not isinstance(data, dict):
        raise SerializationError(f"Invalid piece record: {data!r}")
    code = data.get("type", "")
    if code == "":
        return None
    try:
        ptype = CODE_TYPES[code]
    except (KeyError, TypeError):
        raise SerializationError(f"Unknown piece type: {code!r}") from None
    color = Color.WHITE if data.get("isWhite") else Color.BLACK
    return Piece(color, ptype, bool(data.get("hasMoved", False)))


def _board_from_rows(rows: Any) -> Board:
    if not isinstance(rows, list) or len(rows) != 8:
        raise SerializationError("Board must have 8 ranks")
    board = Board()
    for row, rank in enumerate(rows):
        if not isinstance(rank, list) or len(rank) != 8:
            raise SerializationError(f"Rank {8 - row} must have 8 squares")
        for col, cell in enumerate(rank):
            board[Square(row, col)] = _piece_from_dict(cell)
    return board


def _square_from_dict(data: Any) -> Square | None:
    if data is None:
        return None
    try:
        row, col = int(data["row"]), int(data["col"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationError(f"Invalid square: {data!r}") from exc
    if not in_bounds(row, col):
        raise SerializationError(f"Square off the board: {data!r}")
    return Square(row, col)


def _counter(data: dict[str, Any], name: str, minimum: int) -> int:
    value = data.get(name, minimum)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise SerializationError(f"{name} must be an integer >= {minimum}")
    return value


_DRAW_REASONS = frozenset(
    {
        GameEndReason.FIFTY_MOVE_RULE,
        GameEndReason.INSUFFICIENT_MATERIAL,
        GameEndReason.REPETITION,
    }
)

# Winners and end reasons each status may be stored with.
_OUTCOMES: dict[GameStatus, tuple[frozenset[Winner], frozenset[GameEndReason]]] = {
    GameStatus.PLAYING: (frozenset({Winner.NONE}), frozenset({GameEndReason.NONE})),
    GameStatus.CHECKMATE: (
        frozenset({Winner.WHITE, Winner.BLACK}),
        frozenset({GameEndReason.NONE, GameEndReason.CHECKMATE}),
    ),
    GameStatus.STALEMATE: (
        frozenset({Winner.DRAW}),
        frozenset({GameEndReason.NONE, GameEndReason.STALEMATE}),
    ),
    GameStatus.DRAW: (
        frozenset({Winner.DRAW}),
        _DRAW_REASONS | {GameEndReason.NONE},
    ),
}


def _check_outcome(status: GameStatus, winner: Winner, reason: GameEndReason) -> None:
    winners, reasons = _OUTCOMES[status]
    if winner not in winners or reason not in reasons:
        raise SerializationError(
            f"Inconsistent outcome: status={status.value!r}, "
            f"winner={winner.value!r}, endReason={reason.value!r}"
        )


def state_from_dict(data: dict[str, Any]) -> GameState:
    """Rebuild a :class:`GameState` from :func:`state_to_dict` output."""
    if not isinstance(data, dict):
        raise SerializationError("Game state must be a mapping")
    if "board" not in data:
        raise SerializationError("Missing board")

    turn_label = data.get("turn", Color.WHITE.label)
    try:
        turn = _TURNS[turn_label]
    except (KeyError, TypeError):
        raise SerializationError(f"Invalid turn: {turn_label!r}") from None

    try:
        status = GameStatus(data.get("status", GameStatus.PLAYING.value))
        winner = Winner(data.get("winner", Winner.NONE.value))
        end_reason = GameEndReason(data.get("endReason", GameEndReason.NONE.value))
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc
    _check_outcome(status, winner, end_reason)

    history = data.get("history") or {}
    if not isinstance(history, dict) or not all(
        isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool) and v > 0
        for k, v in history.items()
    ):
        raise SerializationError("history must map keys to positive counts")

    return GameState(
        board=_board_from_rows(data["board"]),
        turn=turn,
        en_passant=_square_from_dict(data.get("enPassantTarget")),
        halfmove_clock=_counter(data, "halfMoveClock", 0),
        fullmove_number=_counter(data, "fullMoveNumber", 1),
        history=dict(history),
        status=status,
        winner=winner,
        end_reason=end_reason,
    )


def state_from_json(text: str) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON: {exc.msg}") from exc
    return state_from_dict(data)
