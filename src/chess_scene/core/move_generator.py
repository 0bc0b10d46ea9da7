"""Pseudo-legal move oracle, king-safety filter and legal-move queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chess_scene.core.enums import CastlingRights, Color, PieceKind
from chess_scene.core.piece import COLOR_MASK, EMPTY, KIND_MASK, slides
from chess_scene.core.position import castle_rook_squares
from chess_scene.core.types import (
    FILE_MASK,
    KNIGHT_STEPS,
    RANK_MASK,
    RAY_STEPS,
    Square,
    on_board,
    tile_to_square,
    valid_squares,
)

if TYPE_CHECKING:
    from chess_scene.core.position import Position


_KNIGHT_DIFFS = frozenset(KNIGHT_STEPS)
_KING_DIFFS = frozenset(RAY_STEPS)
# Tried in this order: a file move (16k) never divides by 15 or 17 on the
# board, and a diagonal never divides by 16.
_SLIDE_STEPS = (17, 15, 16, 1)

_PAWN_START_RANK = {Color.WHITE: 0x60, Color.BLACK: 0x10}

_ALL_SQUARES = tuple(valid_squares())


def _on_diagonal(diff: int) -> bool:
    return diff % 15 == 0 or diff % 17 == 0


def _on_line(from_sq: Square, to_sq: Square) -> bool:
    return (from_sq & FILE_MASK) == (to_sq & FILE_MASK) or (
        from_sq & RANK_MASK
    ) == (to_sq & RANK_MASK)


class MoveGenerator:
    """Answers move-legality questions for a given :class:`Position`.

    King-safety queries mutate the position via ``make_move`` /
    ``undo_move`` internally but always restore it before returning.

    Args:
        position: Position to query.
        strict_castling: Also refuse castling out of check or across an
            attacked square. With ``False`` only the king's final square
            is tested.
    """

    __slots__ = ("_pos", "_board", "_strict_castling")

    def __init__(self, position: Position, *, strict_castling: bool = True) -> None:
        self._pos = position
        self._board = position.board
        self._strict_castling = strict_castling

    # -- Pseudo-legal oracle ------------------------------------------------

    def is_pseudo_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Does moving the piece on *from_sq* to *to_sq* follow its movement
        rules, ignoring king safety? Side-effect free."""
        if not on_board(to_sq):
            return False

        board = self._board
        side = self._pos.side_to_move
        piece = board[from_sq]
        if piece == EMPTY or (piece & COLOR_MASK) != side:
            return False
        target = board[to_sq]
        if target != EMPTY and (target & COLOR_MASK) == side:
            return False

        diff = abs(from_sq - to_sq)
        kind = piece & KIND_MASK

        if kind == PieceKind.PAWN:
            can_move = self._pawn_can_move(piece, from_sq, to_sq, target)
        elif kind == PieceKind.KNIGHT:
            can_move = diff in _KNIGHT_DIFFS
        elif kind == PieceKind.KING:
            can_move = diff in _KING_DIFFS or (
                diff == 2 and self._castle_path_clear(from_sq, to_sq)
            )
        elif kind == PieceKind.BISHOP:
            can_move = _on_diagonal(diff)
        elif kind == PieceKind.ROOK:
            can_move = _on_line(from_sq, to_sq)
        elif kind == PieceKind.QUEEN:
            can_move = _on_diagonal(diff) or _on_line(from_sq, to_sq)
        else:
            return False

        if can_move and slides(piece):
            can_move = self._path_clear(from_sq, to_sq)
        return can_move

    def _pawn_can_move(
        self, piece: int, from_sq: Square, to_sq: Square, target: int
    ) -> bool:
        # White pawns move toward lower indices.
        direction = Color.WHITE if from_sq > to_sq else Color.BLACK
        if (piece & COLOR_MASK) != direction:
            return False

        diff = abs(from_sq - to_sq)
        if diff == 16:
            return target == EMPTY
        if diff in (15, 17) and target != EMPTY:
            return True
        if diff == 32:
            forward = -16 if direction == Color.WHITE else 16
            return (
                target == EMPTY
                and (from_sq & RANK_MASK) == _PAWN_START_RANK[direction]
                and self._board[from_sq + forward] == EMPTY
            )

        ep_sq = self._pos.en_passant_sq
        if ep_sq and target == EMPTY:
            # Capture toward the file of the pawn that just double-stepped.
            toward_lower = 15 if direction == Color.BLACK else 17
            toward_higher = 17 if direction == Color.BLACK else 15
            if diff == toward_lower and from_sq - 1 == ep_sq:
                return True
            if diff == toward_higher and from_sq + 1 == ep_sq:
                return True
        return False

    def _castle_path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        """Castling right held and the rook's slide to the king's side is
        itself pseudo-legal (which checks every square between them)."""
        side = self._pos.side_to_move
        right = CastlingRights.for_side(side, kingside=to_sq > from_sq)
        if not self._pos.castle_rights & right:
            return False
        rook_from, rook_to = castle_rook_squares(from_sq, to_sq)
        if self._board[rook_to] != EMPTY:
            return False
        return self.is_pseudo_legal(rook_from, rook_to)

    def _path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        delta = to_sq - from_sq
        step = next(s for s in _SLIDE_STEPS if delta % s == 0)
        if delta < 0:
            step = -step
        board = self._board
        return all(
            board[from_sq + step * i] == EMPTY for i in range(1, delta // step)
        )

    # -- King safety ---------------------------------------------------------

    def king_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        The side to move is switched to the opponent for the duration of the
        query and restored afterwards.
        """
        pos = self._pos
        king_sq = self._board.king_square(color)
        saved = pos.side_to_move
        pos.side_to_move = color.opposite
        try:
            return any(
                self.is_pseudo_legal(sq, king_sq) for sq, _ in self._board.occupied()
            )
        finally:
            pos.side_to_move = saved

    def leaves_own_king_safe(self, from_sq: Square, to_sq: Square) -> bool:
        """Make the move, test the mover's king, undo."""
        pos = self._pos
        mover = pos.side_to_move
        record = pos.make_move(from_sq, to_sq)
        try:
            return not self.king_in_check(mover)
        finally:
            pos.undo_move(from_sq, to_sq, record)

    def is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Pseudo-legal and the mover's king is not attacked afterwards."""
        if not self.is_pseudo_legal(from_sq, to_sq):
            return False
        if self._strict_castling and self.is_castle(from_sq, to_sq):
            if self.king_in_check(self._pos.side_to_move):
                return False
            transit = from_sq + (1 if to_sq > from_sq else -1)
            if not self.leaves_own_king_safe(from_sq, transit):
                return False
        return self.leaves_own_king_safe(from_sq, to_sq)

    def is_castle(self, from_sq: Square, to_sq: Square) -> bool:
        piece = self._board[from_sq]
        return (piece & KIND_MASK) == PieceKind.KING and abs(from_sq - to_sq) == 2

    # -- Enumeration ---------------------------------------------------------

    def legal_moves(self) -> list[tuple[Square, Square]]:
        """All legal ``(from_sq, to_sq)`` pairs for the side to move."""
        side = self._pos.side_to_move
        return [
            (from_sq, to_sq)
            for from_sq in self._board.pieces_of(side)
            for to_sq in _ALL_SQUARES
            if self.is_legal(from_sq, to_sq)
        ]

    def count_legal_moves(self) -> int:
        return len(self.legal_moves())

    def has_legal_move(self) -> bool:
        side = self._pos.side_to_move
        return any(
            self.is_legal(from_sq, to_sq)
            for from_sq in self._board.pieces_of(side)
            for to_sq in _ALL_SQUARES
        )

    def highlight_destinations(self, from_sq: Square) -> list[bool]:
        """Legal destinations from *from_sq*, indexed by ``file + 8 * rank``."""
        return [self.is_legal(from_sq, tile_to_square(tile)) for tile in range(64)]
