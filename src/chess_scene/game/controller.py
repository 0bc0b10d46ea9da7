"""GameController — turns select/target intents into applied moves.

Coordinates: Position, MoveGenerator, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from chess_scene.core.enums import Color, GameResult, MoveKind, PieceKind
from chess_scene.core.move import MoveRecord
from chess_scene.core.move_generator import MoveGenerator
from chess_scene.core.piece import COLOR_MASK, EMPTY, PROMOTION_KINDS, kind_of
from chess_scene.core.position import Position, castle_rook_squares
from chess_scene.core.rules import Rules
from chess_scene.core.types import RANK_MASK, Square, square_name, tile_to_square
from chess_scene.game.events import (
    GameEnded,
    GameEvents,
    PieceMoved,
    Promoted,
    SecondaryMoved,
    SelectionChanged,
)
from chess_scene.game.interfaces import IGameController
from chess_scene.settings import AppSettings

_LOGGER = logging.getLogger(__name__)

PromotionChooser = Callable[[Color], PieceKind]

_NO_HIGHLIGHT: tuple[bool, ...] = (False,) * 64


class GameController(IGameController):
    """Owns one position and applies the moves the input layer asks for.

    Illegal intents are silently ignored. Thread-safety: call from a single
    thread (the UI thread); legality checks mutate the position transiently.

    Args:
        settings: Rules settings (castling strictness, default promotion).
        promotion_chooser: Optional hook asked for the promotion kind when
            ``on_target`` was not given one.
    """

    __slots__ = (
        "_position",
        "_settings",
        "_selected_from",
        "_legal_move_mask",
        "promotion_chooser",
        "events",
    )

    def __init__(
        self,
        settings: AppSettings | None = None,
        promotion_chooser: PromotionChooser | None = None,
    ) -> None:
        self._settings = settings if settings is not None else AppSettings()
        self._position = Position.initial()
        self._selected_from: Square | None = None
        self._legal_move_mask: tuple[bool, ...] = _NO_HIGHLIGHT
        self.promotion_chooser = promotion_chooser
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def selected_from(self) -> Square | None:
        return self._selected_from

    @property
    def legal_move_mask(self) -> tuple[bool, ...]:
        return self._legal_move_mask

    @property
    def result(self) -> GameResult:
        return self._position.terminal

    @property
    def is_game_over(self) -> bool:
        return self._position.terminal.is_over

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, position: Position | None = None) -> Position:
        """Start over from the initial position (or a composed *position*)."""
        self._position = position if position is not None else Position.initial()
        self._clear_selection()
        return self._position

    def highlight(self, from_sq: Square) -> list[bool]:
        return self._generator().highlight_destinations(from_sq)

    def on_select(self, sq: Square) -> None:
        if self.is_game_over:
            return
        piece = self._position.board[sq]
        if piece == EMPTY:
            _LOGGER.debug("Ignoring selection of empty square %s", square_name(sq))
            return

        if (piece & COLOR_MASK) == self._position.side_to_move:
            self._selected_from = sq
            self._legal_move_mask = tuple(self.highlight(sq))
            self._emit_selection()
        elif self._selected_from is not None:
            # Clicking an opponent piece with a selection means "capture it".
            self._try_move(sq, None)

    def on_target(self, tile: int, promotion: PieceKind | None = None) -> bool:
        if self.is_game_over or self._selected_from is None:
            return False
        if not 0 <= tile < 64:
            _LOGGER.debug("Ignoring out-of-range tile %d", tile)
            return False
        if promotion is not None and promotion not in PROMOTION_KINDS:
            _LOGGER.debug("Ignoring promotion to %r", promotion)
            return False
        return self._try_move(tile_to_square(tile), promotion)

    def clear_selection(self) -> None:
        """Drop the current selection (e.g. a click outside the board)."""
        if self._selected_from is not None:
            self._clear_selection()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(
            self._position, strict_castling=self._settings.strict_castling
        )

    def _try_move(self, to_sq: Square, promotion: PieceKind | None) -> bool:
        from_sq = self._selected_from
        assert from_sq is not None
        if not self._generator().is_legal(from_sq, to_sq):
            _LOGGER.debug(
                "Ignoring illegal move %s%s", square_name(from_sq), square_name(to_sq)
            )
            return False

        pos = self._position
        mover = pos.side_to_move
        piece = pos.board[from_sq]
        if self._is_promotion(piece, to_sq):
            promotion = self._promotion_kind(mover, promotion)
        else:
            promotion = PieceKind.QUEEN

        record = pos.make_move(from_sq, to_sq, promotion)
        result = Rules.recompute_terminal(
            pos, strict_castling=self._settings.strict_castling
        )
        _LOGGER.debug(
            "%s played %s%s (%s)", mover, square_name(from_sq), square_name(to_sq), record
        )

        self._emit_move(from_sq, to_sq, piece, record)
        self._clear_selection()
        if result.is_over:
            _LOGGER.info("Game over after %d plies: %s", pos.move_count, result.name)
            self._emit(self.events.on_game_ended, GameEnded(result))
        return True

    @staticmethod
    def _is_promotion(piece: int, to_sq: Square) -> bool:
        return kind_of(piece) == PieceKind.PAWN and (to_sq & RANK_MASK) in (0x00, 0x70)

    def _promotion_kind(self, color: Color, requested: PieceKind | None) -> PieceKind:
        if requested is not None:
            return requested
        if self.promotion_chooser is not None:
            return self.promotion_chooser(color)
        return self._settings.default_promotion

    def _clear_selection(self) -> None:
        self._selected_from = None
        self._legal_move_mask = _NO_HIGHLIGHT
        self._emit_selection()

    def _emit_move(
        self, from_sq: Square, to_sq: Square, piece: int, record: MoveRecord
    ) -> None:
        pos = self._position
        if record.kind == MoveKind.CASTLE:
            rook_from, rook_to = castle_rook_squares(from_sq, to_sq)
            event = SecondaryMoved(rook_from, rook_to, pos.board[rook_to])
            self._emit(self.events.on_secondary_moved, event)
        elif record.captured:
            slot = pos.record_capture(record.captured)
            event = SecondaryMoved(record.capture_sq, None, record.captured, slot)
            self._emit(self.events.on_secondary_moved, event)

        self._emit(self.events.on_piece_moved, PieceMoved(from_sq, to_sq, piece))

        if record.promotion:
            self._emit(
                self.events.on_promoted, Promoted(to_sq, PieceKind(record.promotion))
            )

    def _emit_selection(self) -> None:
        event = SelectionChanged(self._selected_from, self._legal_move_mask)
        self._emit(self.events.on_selection_changed, event)

    @staticmethod
    def _emit(callbacks: list, event: object) -> None:
        for cb in callbacks:
            cb(event)
