"""User-configurable settings shared by the controller and the board scene."""

from __future__ import annotations

from dataclasses import dataclass

from chess_scene.core.enums import PieceKind


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Rules
    strict_castling: bool = True  # refuse castling out of / through check
    default_promotion: PieceKind = PieceKind.QUEEN

    # Board
    board_theme: str = "Classic"
    show_legal_moves: bool = True
    animate_moves: bool = True
    move_duration_ms: int = 1000
    hop_height: float = 0.14  # fraction of a tile
