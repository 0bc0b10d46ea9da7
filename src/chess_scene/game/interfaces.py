"""Abstract interfaces for the game layer.

The presentation depends on this ABC rather than on the concrete
controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chess_scene.core.enums import PieceKind
    from chess_scene.core.position import Position
    from chess_scene.core.types import Square


class IGameController(ABC):
    """Interface for the intent handler driving one board."""

    @abstractmethod
    def new_game(self, position: Position | None = None) -> Position:
        """Reset to the initial (or a given) position and return it."""

    @abstractmethod
    def on_select(self, sq: Square) -> None:
        """A piece standing on *sq* was picked."""

    @abstractmethod
    def on_target(self, tile: int, promotion: PieceKind | None = None) -> bool:
        """Move the selected piece to *tile* (0–63). True if applied."""

    @abstractmethod
    def highlight(self, from_sq: Square) -> list[bool]:
        """Legal destination tiles for the piece on *from_sq* (read-only)."""
