"""Core domain layer — 0x88 chess rules with zero external dependencies.

Quick start::

    from chess_scene.core import MoveGenerator, Rules, new_board, parse_square

    pos = new_board()
    gen = MoveGenerator(pos)
    e2, e4 = parse_square("e2"), parse_square("e4")
    if gen.is_legal(e2, e4):
        pos.make_move(e2, e4)
        Rules.recompute_terminal(pos)
"""

from chess_scene.core.board import Board
from chess_scene.core.enums import CastlingRights, Color, GameResult, MoveKind, PieceKind
from chess_scene.core.move import MoveRecord
from chess_scene.core.move_generator import MoveGenerator
from chess_scene.core.piece import (
    EMPTY,
    color_of,
    kind_of,
    make_piece,
    piece_char,
    piece_from_char,
    piece_name,
    piece_symbol,
    slides,
)
from chess_scene.core.position import Position
from chess_scene.core.rules import Rules
from chess_scene.core.types import (
    Square,
    file_of,
    make_square,
    on_board,
    parse_square,
    rank_of,
    square_name,
    square_to_tile,
    tile_to_square,
)


def new_board() -> Position:
    """Initial position: White to move, all castle rights."""
    return Position.initial()


__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveKind",
    "PieceKind",
    # Types / helpers
    "EMPTY",
    "Square",
    "color_of",
    "file_of",
    "kind_of",
    "make_piece",
    "make_square",
    "on_board",
    "parse_square",
    "piece_char",
    "piece_from_char",
    "piece_name",
    "piece_symbol",
    "rank_of",
    "slides",
    "square_name",
    "square_to_tile",
    "tile_to_square",
    # Domain objects
    "Board",
    "MoveGenerator",
    "MoveRecord",
    "Position",
    "Rules",
    "new_board",
]
