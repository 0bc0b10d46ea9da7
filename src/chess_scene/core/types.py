"""Square type alias and 0x88 coordinate helpers.

Board layout (0x88, rank-major from Black's side):
    a8=0x00, b8=0x01, ..., h8=0x07
    a7=0x10, ...
    ...
    a1=0x70, b1=0x71, ..., h1=0x77

Indices with ``sq & 0x88 != 0`` are off the board.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int  # 0–127, valid when (sq & 0x88) == 0

OFFBOARD_MASK = 0x88
RANK_MASK = 0x70
FILE_MASK = 0x07

# Ray and leaper offsets
RAY_STEPS = (1, 15, 16, 17)
KNIGHT_STEPS = (14, 18, 31, 33)


def on_board(sq: int) -> bool:
    """Whether *sq* is a real square (one bitwise AND)."""
    return (sq & OFFBOARD_MASK) == 0


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & FILE_MASK


def rank_of(sq: Square) -> int:
    """Rank index 0–7; 0 is Black's back rank."""
    return (sq >> 4) & 7


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank index (0–7)."""
    return rank * 16 + file


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0x74 → 'e1'."""
    return chr(ord("a") + file_of(sq)) + str(8 - rank_of(sq))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 0x44."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(ord(name[0]) - ord("a"), 8 - int(name[1]))


def tile_to_square(tile: int) -> Square:
    """Map a 0–63 tile index (``file + 8 * rank``) to its 0x88 square."""
    if not 0 <= tile < 64:
        raise ValueError(f"Tile index out of range: {tile}")
    return (tile % 8) + (tile // 8) * 16


def square_to_tile(sq: Square) -> int:
    """Inverse of :func:`tile_to_square`."""
    return file_of(sq) + 8 * rank_of(sq)


def valid_squares() -> list[Square]:
    """The 64 on-board squares in tile order."""
    return [tile_to_square(t) for t in range(64)]


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0x00, 0x08)
A7, B7, C7, D7, E7, F7, G7, H7 = range(0x10, 0x18)
A6, B6, C6, D6, E6, F6, G6, H6 = range(0x20, 0x28)
A5, B5, C5, D5, E5, F5, G5, H5 = range(0x30, 0x38)
A4, B4, C4, D4, E4, F4, G4, H4 = range(0x40, 0x48)
A3, B3, C3, D3, E3, F3, G3, H3 = range(0x50, 0x58)
A2, B2, C2, D2, E2, F2, G2, H2 = range(0x60, 0x68)
A1, B1, C1, D1, E1, F1, G1, H1 = range(0x70, 0x78)
