"""Core enumerations and flags for the chess rules core."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color, stored as the color bit of a piece code."""

    WHITE = 0x0
    BLACK = 0x8

    @property
    def opposite(self) -> Color:
        return Color(self.value ^ 0x8)

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Piece kinds. Bit ``0x4`` marks the sliding pieces."""

    PAWN = 1
    KNIGHT = 2
    KING = 3
    BISHOP = 5
    ROOK = 6
    QUEEN = 7


class CastlingRights(IntFlag):
    """Bitmask for castling availability.

    The pair for a side starts at bit ``color >> 2``; bit 0 of the pair is
    queenside (a-file rook), bit 1 kingside (h-file rook).
    """

    NONE = 0
    WHITE_QUEENSIDE = 0x1
    WHITE_KINGSIDE = 0x2
    BLACK_QUEENSIDE = 0x4
    BLACK_KINGSIDE = 0x8

    WHITE_BOTH = WHITE_QUEENSIDE | WHITE_KINGSIDE
    BLACK_BOTH = BLACK_QUEENSIDE | BLACK_KINGSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: int, kingside: bool) -> CastlingRights:
        """Single right for *color* on the requested wing."""
        return cls(1 << ((color >> 2) + int(kingside)))

    @classmethod
    def both(cls, color: int) -> CastlingRights:
        return cls(0x3 << (color >> 2))


class MoveKind(IntEnum):
    """Classification recorded by make for undo and presentation."""

    PLAIN = 0
    CAPTURE = 1
    CASTLE = 2


class GameResult(IntEnum):
    """Terminal tag of a position."""

    PLAYING = 0
    WHITE_WINS_BY_MATE = 1
    BLACK_WINS_BY_MATE = 2
    DRAW_BY_STALEMATE = 3

    @property
    def is_over(self) -> bool:
        return self is not GameResult.PLAYING
