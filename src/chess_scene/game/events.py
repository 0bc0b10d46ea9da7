"""Events published to the presentation layer after intents are handled."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from chess_scene.core.enums import GameResult, PieceKind
from chess_scene.core.types import Square


@dataclass(frozen=True, slots=True)
class PieceMoved:
    """The mover went from *from_sq* to *to_sq*. Fires for every applied move."""

    from_sq: Square
    to_sq: Square
    piece: int


@dataclass(frozen=True, slots=True)
class SecondaryMoved:
    """A second piece was displaced by the same move.

    Castling rook: *to_sq* is its destination. Captured piece (including en
    passant): *to_sq* is None and *slot* counts earlier captures of the same
    color, so the presentation can line pieces up beside the board.
    """

    from_sq: Square
    to_sq: Square | None
    piece: int
    slot: int | None = None

    @property
    def offboard(self) -> bool:
        return self.to_sq is None


@dataclass(frozen=True, slots=True)
class Promoted:
    at_sq: Square
    to_kind: PieceKind


@dataclass(frozen=True, slots=True)
class GameEnded:
    outcome: GameResult


@dataclass(frozen=True, slots=True)
class SelectionChanged:
    """Selection set (*from_sq*) or cleared (None) with its destination mask."""

    from_sq: Square | None
    mask: tuple[bool, ...]


PieceMovedCallback = Callable[[PieceMoved], None]
SecondaryMovedCallback = Callable[[SecondaryMoved], None]
PromotedCallback = Callable[[Promoted], None]
GameEndedCallback = Callable[[GameEnded], None]
SelectionCallback = Callable[[SelectionChanged], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_piece_moved: list[PieceMovedCallback] = field(default_factory=list)
    on_secondary_moved: list[SecondaryMovedCallback] = field(default_factory=list)
    on_promoted: list[PromotedCallback] = field(default_factory=list)
    on_game_ended: list[GameEndedCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
