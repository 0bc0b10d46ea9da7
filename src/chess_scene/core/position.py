"""Position — complete rules state (board + metadata) with make/undo."""

from __future__ import annotations

from chess_scene.core.board import Board
from chess_scene.core.enums import CastlingRights, Color, GameResult, MoveKind, PieceKind
from chess_scene.core.move import MoveRecord
from chess_scene.core.piece import COLOR_MASK, EMPTY, PROMOTION_KINDS, kind_of
from chess_scene.core.types import FILE_MASK, RANK_MASK, Square, square_name

_NO_EN_PASSANT = 0


def castle_rook_squares(from_sq: Square, to_sq: Square) -> tuple[Square, Square]:
    """Rook origin and destination for a king moving two files.

    The rook starts on the corner of the king's rank on the castling side
    and lands next to the king's origin square.
    """
    rank = from_sq & RANK_MASK
    if to_sq < from_sq:
        return rank, from_sq - 1
    return rank | 7, from_sq + 1


class Position:
    """Full chess position: board + side to move + castling + en passant.

    ``en_passant_sq`` holds the square of the pawn that just advanced two
    ranks (0 when none), not the square behind it.

    Supports :meth:`make_move` / :meth:`undo_move` through explicit
    :class:`MoveRecord` values.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castle_rights",
        "en_passant_sq",
        "move_count",
        "white_captured",
        "black_captured",
        "terminal",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castle_rights: CastlingRights = CastlingRights.ALL,
        en_passant_sq: Square = _NO_EN_PASSANT,
        move_count: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castle_rights = castle_rights
        self.en_passant_sq = en_passant_sq
        self.move_count = move_count
        self.white_captured = 0
        self.black_captured = 0
        self.terminal = GameResult.PLAYING

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, White to move, all castle rights."""
        return cls()

    @classmethod
    def empty(cls, side_to_move: Color = Color.WHITE) -> Position:
        """Empty board without castle rights, for composing positions."""
        return cls(Board(), side_to_move, CastlingRights.NONE)

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind = PieceKind.QUEEN,
    ) -> MoveRecord:
        """Apply the move *from_sq* → *to_sq* and return its undo record.

        Legality is the caller's concern. *promotion* is only used when a
        pawn reaches the last rank.
        """
        if promotion not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {promotion!r}")
        board = self.board
        piece = board[from_sq]
        if piece == EMPTY:
            raise ValueError(f"No piece on {square_name(from_sq)}")
        mover = self.side_to_move
        kind = kind_of(piece)
        diff = abs(from_sq - to_sq)

        captured = board[to_sq]
        record = MoveRecord(
            kind=MoveKind.CAPTURE if captured else MoveKind.PLAIN,
            captured=captured,
            capture_sq=to_sq,
            prior_castle_rights=self.castle_rights,
            prior_en_passant=self.en_passant_sq,
        )

        if kind == PieceKind.KING:
            self.castle_rights &= ~CastlingRights.both(mover)
            if diff == 2:
                rook_from, rook_to = castle_rook_squares(from_sq, to_sq)
                board[rook_to] = board[rook_from]
                board[rook_from] = EMPTY
                record.kind = MoveKind.CASTLE
                record.rook_from = rook_from

        if kind == PieceKind.ROOK:
            self._revoke_corner(from_sq, mover)

        if kind_of(captured) == PieceKind.ROOK:
            self._revoke_corner(to_sq, mover.opposite)

        if kind == PieceKind.PAWN:
            if diff == 32:
                self.en_passant_sq = to_sq
            elif diff in (15, 17) and captured == EMPTY:
                ep_sq = self.en_passant_sq
                record.kind = MoveKind.CAPTURE
                record.capture_sq = ep_sq
                record.captured = board[ep_sq]
                board[ep_sq] = EMPTY
                self.en_passant_sq = _NO_EN_PASSANT
            else:
                self.en_passant_sq = _NO_EN_PASSANT
        else:
            self.en_passant_sq = _NO_EN_PASSANT

        placed = piece
        if kind == PieceKind.PAWN and (to_sq & RANK_MASK) in (0x00, 0x70):
            placed = (piece & COLOR_MASK) | int(promotion)
            record.promotion = int(promotion)

        board[to_sq] = placed
        board[from_sq] = EMPTY

        self.side_to_move = mover.opposite
        self.move_count += 1
        return record

    def undo_move(self, from_sq: Square, to_sq: Square, record: MoveRecord) -> None:
        """Revert the move described by *record*."""
        board = self.board
        board[from_sq] = board[to_sq]
        board[to_sq] = EMPTY
        board[record.capture_sq] = record.captured

        self.castle_rights = record.prior_castle_rights
        self.en_passant_sq = record.prior_en_passant

        if record.kind == MoveKind.CASTLE:
            rook_from, rook_to = castle_rook_squares(from_sq, to_sq)
            board[rook_from] = board[rook_to]
            board[rook_to] = EMPTY

        if record.promotion:
            board[from_sq] = (board[from_sq] & COLOR_MASK) | PieceKind.PAWN

        self.side_to_move = self.side_to_move.opposite
        self.move_count -= 1

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _revoke_corner(self, sq: Square, color: Color) -> None:
        """Clear *color*'s right tied to the rook corner *sq*, if it is one."""
        home = 0x70 if color == Color.WHITE else 0x00
        if (sq & RANK_MASK) != home:
            return
        file = sq & FILE_MASK
        if file == 0:
            self.castle_rights &= ~CastlingRights.for_side(color, kingside=False)
        elif file == 7:
            self.castle_rights &= ~CastlingRights.for_side(color, kingside=True)

    # ── Utilities ────────────────────────────────────────────────────────

    def record_capture(self, captured: int) -> int:
        """Bump the off-board counter for *captured*'s color.

        Returns the slot index the piece occupies beside the board.
        """
        if captured & COLOR_MASK:
            slot = self.black_captured
            self.black_captured += 1
        else:
            slot = self.white_captured
            self.white_captured += 1
        return slot

    def copy(self) -> Position:
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castle_rights=self.castle_rights,
            en_passant_sq=self.en_passant_sq,
            move_count=self.move_count,
        )
        pos.white_captured = self.white_captured
        pos.black_captured = self.black_captured
        pos.terminal = self.terminal
        return pos

    def state_key(self) -> tuple[object, ...]:
        """Every rules field, for exact comparisons."""
        return (
            self.board.grid,
            int(self.side_to_move),
            int(self.castle_rights),
            self.en_passant_sq,
            self.move_count,
            self.white_captured,
            self.black_captured,
            int(self.terminal),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.state_key() == other.state_key()

    def __repr__(self) -> str:
        ep = square_name(self.en_passant_sq) if self.en_passant_sq else "-"
        return (
            f"{self.board!r}\n"
            f"{self.side_to_move} to move, castle={int(self.castle_rights):#x}, "
            f"ep={ep}, moves={self.move_count}, {self.terminal.name.lower()}"
        )
