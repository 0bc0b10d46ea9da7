"""Scene geometry for the board: squares, off-board slots, hop arcs.

Kept free of Qt so it can be reasoned about (and tested) on its own.
Coordinates are scene pixels; the board occupies ``[0, 8*tile)`` on both
axes with rank index 0 (chess rank 8) at the top.
"""

from __future__ import annotations

import math

from chess_scene.core.enums import Color
from chess_scene.core.types import Square, file_of, make_square, rank_of

TILE = 80  # px per square

# Captured pieces sit this many tiles from the board centre, stacked in
# rows alternating above and below the centre line.
_OFFBOARD_DISTANCE = 4.7
_OFFBOARD_SPACING = 0.63

# Scene margin (in tiles) around the board to make room for captures.
MARGIN_TILES = 1.5


def square_origin(sq: Square, tile: int = TILE) -> tuple[float, float]:
    """Top-left scene point of *sq*."""
    return float(file_of(sq) * tile), float(rank_of(sq) * tile)


def point_to_square(x: float, y: float, tile: int = TILE) -> Square | None:
    """Scene point → board square, None outside the board."""
    col = math.floor(x / tile)
    row = math.floor(y / tile)
    if not (0 <= col < 8 and 0 <= row < 8):
        return None
    return make_square(col, row)


def offboard_origin(
    captured_color: Color, slot: int, tile: int = TILE
) -> tuple[float, float]:
    """Top-left scene point for the *slot*-th captured piece of a color.

    White's lost pieces line up right of the board, Black's on the left.
    Slot 0 sits on the centre line; later slots alternate below and above it.
    """
    centre = 4.0 * tile
    side = 1.0 if captured_color == Color.WHITE else -1.0
    x = centre + side * _OFFBOARD_DISTANCE * tile
    sign = 1.0 if slot % 2 else -1.0
    y = centre + _OFFBOARD_SPACING * tile * ((slot + 1) // 2) * sign
    return x - tile / 2, y - tile / 2


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def hop_offset(t: float, height: float) -> float:
    """Lift of a moving piece at progress *t* (0 → 1): a half sine arc."""
    return math.sin(t * math.pi) * height


def scene_bounds(tile: int = TILE) -> tuple[float, float, float, float]:
    """``(x, y, width, height)`` covering the board and capture margins."""
    margin = MARGIN_TILES * tile
    size = 8 * tile
    return -margin - tile, -margin, size + 2 * (margin + tile), size + 2 * margin
