"""Piece codes: one byte holding color bit and kind.

``0x8`` is the color bit (0 White, 8 Black), ``0x7`` the kind and ``0x4``
doubles as the sliding marker. Code 0 is an empty square.
"""

from __future__ import annotations

from chess_scene.core.enums import Color, PieceKind

EMPTY = 0

COLOR_MASK = 0x8
KIND_MASK = 0x7
SLIDE_MASK = 0x4

PROMOTION_KINDS = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

_KIND_CHARS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.KING: "k",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}

_CHAR_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_CHARS.items()}

_UNICODE: dict[PieceKind, tuple[str, str]] = {
    PieceKind.PAWN: ("♙", "♟"),
    PieceKind.KNIGHT: ("♘", "♞"),
    PieceKind.KING: ("♔", "♚"),
    PieceKind.BISHOP: ("♗", "♝"),
    PieceKind.ROOK: ("♖", "♜"),
    PieceKind.QUEEN: ("♕", "♛"),
}


def make_piece(color: Color, kind: PieceKind) -> int:
    return int(color) | int(kind)


def color_of(piece: int) -> Color:
    return Color(piece & COLOR_MASK)


def kind_of(piece: int) -> int:
    """Kind bits of *piece* (0 for an empty square)."""
    return piece & KIND_MASK


def slides(piece: int) -> bool:
    return (piece & SLIDE_MASK) != 0


def piece_char(piece: int) -> str:
    """FEN-style letter (uppercase = white), '.' for empty."""
    if piece == EMPTY:
        return "."
    char = _KIND_CHARS[PieceKind(kind_of(piece))]
    return char if piece & COLOR_MASK else char.upper()


def piece_from_char(char: str) -> int:
    """Create a piece code from a FEN-style letter, e.g. 'N' → white knight."""
    try:
        kind = _CHAR_KINDS[char.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None
    color = Color.WHITE if char.isupper() else Color.BLACK
    return make_piece(color, kind)


def piece_symbol(piece: int) -> str:
    """Unicode chess symbol, e.g. ♞."""
    white, black = _UNICODE[PieceKind(kind_of(piece))]
    return black if piece & COLOR_MASK else white


def piece_name(piece: int) -> str:
    """Display name of the kind, "Undefined" for anything else."""
    try:
        return PieceKind(kind_of(piece)).name.capitalize()
    except ValueError:
        return "Undefined"
