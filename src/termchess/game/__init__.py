"""Game management layer: one controller per game, driving the core engine.

Quick start::

    from termchess.core.types import E2, E4
    from termchess.game import GameController

    ctrl = GameController()
    ctrl.select(E2)
    ctrl.move_to(E4)
"""

from termchess.game.controller import GameController, GameEvents

__all__ = [
    "GameController",
    "GameEvents",
]
