"""Game layer — intent handling and presentation events.

Quick start::

    from chess_scene.core import parse_square, square_to_tile
    from chess_scene.game import GameController

    ctrl = GameController()
    ctrl.events.on_piece_moved.append(print)
    ctrl.on_select(parse_square("e2"))
    ctrl.on_target(square_to_tile(parse_square("e4")))
"""

from chess_scene.game.controller import GameController, PromotionChooser
from chess_scene.game.events import (
    GameEnded,
    GameEvents,
    PieceMoved,
    Promoted,
    SecondaryMoved,
    SelectionChanged,
)
from chess_scene.game.interfaces import IGameController

__all__ = [
    # Interfaces
    "IGameController",
    "PromotionChooser",
    # Concrete
    "GameController",
    "GameEvents",
    # Events
    "GameEnded",
    "PieceMoved",
    "Promoted",
    "SecondaryMoved",
    "SelectionChanged",
]
