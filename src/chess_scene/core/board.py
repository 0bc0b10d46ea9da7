"""Board - piece placement on a 128-cell 0x88 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chess_scene.core.enums import Color, PieceKind
from chess_scene.core.piece import EMPTY, make_piece, piece_char
from chess_scene.core.types import Square, make_square, on_board

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable 0x88 grid of piece codes.

    Cells whose index has ``0x88`` set are sentinels and always hold 0.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid = bytearray(128)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> int:
        return self._grid[sq]

    def __setitem__(self, sq: Square, piece: int) -> None:
        if not on_board(sq):
            if piece != EMPTY:
                raise IndexError(f"Cannot place a piece on off-board index {sq:#04x}")
            return
        self._grid[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq] == EMPTY

    @property
    def grid(self) -> bytes:
        """Read-only copy of all 128 cells."""
        return bytes(self._grid)

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, int]]:
        """``(square, piece)`` for every non-empty cell in index order."""
        for sq, piece in enumerate(self._grid):
            if piece:
                yield sq, piece

    def pieces_of(self, color: Color) -> list[Square]:
        """Squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if (piece & 0x8) == color]

    def find(self, piece: int) -> Square | None:
        """First square holding exactly *piece*, or None."""
        idx = self._grid.find(piece) if piece else -1
        return idx if idx >= 0 else None

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        sq = self.find(make_piece(color, PieceKind.KING))
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def sentinels_clear(self) -> bool:
        """Whether every off-board cell still holds 0."""
        return all(
            self._grid[i] == EMPTY for i in range(128) if not on_board(i)
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = bytearray(self._grid)
        return b

    def clear(self) -> None:
        self._grid = bytearray(128)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (White on ranks 1–2 = indices 7 and 6)."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = make_piece(Color.BLACK, kind)
            b[make_square(f, 1)] = make_piece(Color.BLACK, PieceKind.PAWN)
            b[make_square(f, 6)] = make_piece(Color.WHITE, PieceKind.PAWN)
            b[make_square(f, 7)] = make_piece(Color.WHITE, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = [piece_char(self[make_square(f, rank)]) for f in range(8)]
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
