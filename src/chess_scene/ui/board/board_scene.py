"""BoardScene — QGraphicsScene that draws the board and replays game events."""

from __future__ import annotations

from PyQt6.QtCore import (
    QAbstractAnimation,
    QEasingCurve,
    QObject,
    QPointF,
    Qt,
    QVariantAnimation,
)
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chess_scene.core.enums import GameResult
from chess_scene.core.piece import COLOR_MASK, EMPTY, color_of
from chess_scene.core.types import Square, file_of, rank_of, square_to_tile, tile_to_square
from chess_scene.game.controller import GameController
from chess_scene.game.events import (
    GameEnded,
    PieceMoved,
    Promoted,
    SecondaryMoved,
    SelectionChanged,
)
from chess_scene.settings import AppSettings
from chess_scene.ui.board.piece_item import PieceItem
from chess_scene.ui.layout import (
    TILE,
    hop_offset,
    lerp,
    offboard_origin,
    point_to_square,
    scene_bounds,
    square_origin,
)
from chess_scene.ui.styles.theme import BoardTheme

_BANNERS: dict[GameResult, tuple[str, str]] = {
    GameResult.WHITE_WINS_BY_MATE: ("CHECKMATE", "White wins."),
    GameResult.BLACK_WINS_BY_MATE: ("CHECKMATE", "Black wins."),
    GameResult.DRAW_BY_STALEMATE: ("STALEMATE", "Draw."),
}


def banner_lines(outcome: GameResult) -> tuple[str, str] | None:
    """Reason and verdict shown when a game ends."""
    return _BANNERS.get(outcome)


class BoardScene(QGraphicsScene):
    """Renders tiles, highlights and pieces for one :class:`GameController`.

    Clicks on a piece become ``on_select``; clicks on an empty tile become
    ``on_target``. Controller events drive the visuals.
    """

    def __init__(
        self,
        controller: GameController,
        settings: AppSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._settings = settings if settings is not None else controller.settings
        self._theme = BoardTheme.named(self._settings.board_theme)

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._tile_highlights: list[QGraphicsRectItem] = []
        self._origin_highlight: QGraphicsRectItem | None = None
        self._piece_items: dict[Square, PieceItem] = {}
        self._captured_items: list[PieceItem] = []
        self._banner_shade: QGraphicsRectItem | None = None
        self._banner_items: list[QGraphicsSimpleTextItem] = []
        self._animations: list[QVariantAnimation] = []

        self._draw_board()
        self._draw_banner()
        self._sync_pieces()

        events = controller.events
        events.on_selection_changed.append(self._on_selection_changed)
        events.on_secondary_moved.append(self._on_secondary_moved)
        events.on_piece_moved.append(self._on_piece_moved)
        events.on_promoted.append(self._on_promoted)
        events.on_game_ended.append(self._on_game_ended)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    def reset(self) -> None:
        """Redraw everything from the controller's current position."""
        self._stop_animations()
        self._show_highlights(None, (False,) * 64)
        self._set_banner_visible(False)
        self._sync_pieces()

    def apply_settings(self, settings: AppSettings) -> None:
        """Restyle tiles, pieces and banner without touching the game."""
        self._settings = settings
        self._theme = BoardTheme.named(settings.board_theme)
        self._draw_board()
        self._style_banner()
        colors = (self._theme.white_piece, self._theme.black_piece)
        for item in (*self._piece_items.values(), *self._captured_items):
            item.set_colors(colors)
        ctrl = self._controller
        self._show_highlights(ctrl.selected_from, ctrl.legal_move_mask)

    def piece_at(self, sq: Square) -> PieceItem | None:
        return self._piece_items.get(sq)

    @property
    def captured_items(self) -> list[PieceItem]:
        return list(self._captured_items)

    def highlighted_tiles(self) -> list[int]:
        """Tiles whose destination overlay is currently shown."""
        return [i for i, item in enumerate(self._tile_highlights) if item.isVisible()]

    def banner_text(self) -> tuple[str, ...]:
        if not self._banner_items or not self._banner_items[0].isVisible():
            return ()
        return tuple(item.text() for item in self._banner_items)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and their highlight overlays."""
        for item in (*self._square_items.values(), *self._tile_highlights):
            self.removeItem(item)
        self._square_items.clear()
        self._tile_highlights.clear()
        if self._origin_highlight is not None:
            self.removeItem(self._origin_highlight)

        for tile in range(64):
            sq = tile_to_square(tile)
            x, y = square_origin(sq)
            is_light = (file_of(sq) + rank_of(sq)) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = self._make_rect(x, y, color, 0)
            self._square_items[sq] = rect

            overlay = self._make_rect(x, y, self._theme.highlight_to, 0.8)
            overlay.setVisible(False)
            self._tile_highlights.append(overlay)

        self._origin_highlight = self._make_rect(0, 0, self._theme.highlight_from, 0.7)
        self._origin_highlight.setVisible(False)
        self.setSceneRect(*scene_bounds())

    def _draw_banner(self) -> None:
        x, y, w, _ = scene_bounds()
        self._banner_shade = QGraphicsRectItem(x, 3 * TILE, w, 2 * TILE)
        self._banner_shade.setPen(QPen(Qt.PenStyle.NoPen))
        self._banner_shade.setZValue(5)
        self.addItem(self._banner_shade)

        for line in range(2):
            txt = QGraphicsSimpleTextItem()
            font = QFont("DejaVu Sans", TILE // 3)
            font.setBold(line == 0)
            txt.setFont(font)
            txt.setZValue(6)
            self.addItem(txt)
            self._banner_items.append(txt)
        self._style_banner()
        self._set_banner_visible(False)

    def _style_banner(self) -> None:
        if self._banner_shade is not None:
            self._banner_shade.setBrush(QBrush(self._theme.banner_shade))
        for item in self._banner_items:
            item.setBrush(QBrush(self._theme.banner_text))

    def _set_banner_visible(self, visible: bool) -> None:
        if self._banner_shade is not None:
            self._banner_shade.setVisible(visible)
        for item in self._banner_items:
            item.setVisible(visible)

    def _make_rect(
        self, x: float, y: float, color: QColor, z: float
    ) -> QGraphicsRectItem:
        rect = QGraphicsRectItem(x, y, TILE, TILE)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(z)
        self.addItem(rect)
        return rect

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current position."""
        for item in (*self._piece_items.values(), *self._captured_items):
            self.removeItem(item)
        self._piece_items.clear()
        self._captured_items.clear()

        board = self._controller.position.board
        colors = (self._theme.white_piece, self._theme.black_piece)
        for sq, piece in board.occupied():
            item = PieceItem(piece, sq, TILE, colors)
            item.setPos(*square_origin(sq))
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Event handlers ───────────────────────────────────────────────────

    def _on_selection_changed(self, event: SelectionChanged) -> None:
        self._show_highlights(event.from_sq, event.mask)

    def _show_highlights(self, from_sq: Square | None, mask: tuple[bool, ...]) -> None:
        show = self._settings.show_legal_moves
        for tile, item in enumerate(self._tile_highlights):
            item.setVisible(show and mask[tile])
        if self._origin_highlight is not None:
            if from_sq is None:
                self._origin_highlight.setVisible(False)
            else:
                self._origin_highlight.setRect(*square_origin(from_sq), TILE, TILE)
                self._origin_highlight.setVisible(True)

    def _on_secondary_moved(self, event: SecondaryMoved) -> None:
        item = self._piece_items.pop(event.from_sq, None)
        if item is None:
            return
        item.square = event.to_sq
        if event.to_sq is None:
            self._captured_items.append(item)
            target = offboard_origin(color_of(event.piece), event.slot or 0)
        else:
            self._piece_items[event.to_sq] = item
            target = square_origin(event.to_sq)
        self._animate(item, QPointF(*target))

    def _on_piece_moved(self, event: PieceMoved) -> None:
        item = self._piece_items.pop(event.from_sq, None)
        if item is None:
            return
        item.square = event.to_sq
        self._piece_items[event.to_sq] = item
        self._animate(item, QPointF(*square_origin(event.to_sq)))

    def _on_promoted(self, event: Promoted) -> None:
        item = self._piece_items.get(event.at_sq)
        if item is not None:
            item.set_piece((item.piece & COLOR_MASK) | int(event.to_kind))

    def _on_game_ended(self, event: GameEnded) -> None:
        lines = banner_lines(event.outcome)
        if lines is None:
            return
        x, _, w, _ = scene_bounds()
        for row, (item, text) in enumerate(zip(self._banner_items, lines)):
            item.setText(text)
            width = item.boundingRect().width()
            item.setPos(x + (w - width) / 2, 3 * TILE + row * TILE + TILE * 0.25)
        self._set_banner_visible(True)

    # ── Animation ────────────────────────────────────────────────────────

    def _animate(self, item: PieceItem, target: QPointF) -> None:
        """Slide *item* to *target* along a small hop, or snap when disabled."""
        if not self._settings.animate_moves:
            item.setPos(target)
            return

        start = item.pos()
        height = self._settings.hop_height * TILE
        anim = QVariantAnimation(self)
        anim.setDuration(self._settings.move_duration_ms)
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setEasingCurve(QEasingCurve.Type.InOutSine)

        def _on_value(value: object) -> None:
            t = float(value)
            item.setPos(
                lerp(start.x(), target.x(), t),
                lerp(start.y(), target.y(), t) - hop_offset(t, height),
            )

        def _on_finished() -> None:
            item.setZValue(1)
            item.setPos(target)
            if anim in self._animations:
                self._animations.remove(anim)

        item.setZValue(2)
        anim.valueChanged.connect(_on_value)
        anim.finished.connect(_on_finished)
        self._animations.append(anim)
        anim.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    def _stop_animations(self) -> None:
        for anim in list(self._animations):
            anim.stop()
        self._animations.clear()

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None:
            return super().mousePressEvent(event)
        pos = event.scenePos()
        self.handle_click(pos.x(), pos.y())
        super().mousePressEvent(event)

    def handle_click(self, x: float, y: float) -> None:
        """Translate a click at scene point (x, y) into an intent."""
        sq = point_to_square(x, y)
        if sq is None:
            self._controller.clear_selection()
            return
        if self._controller.position.board[sq] != EMPTY:
            self._controller.on_select(sq)
        else:
            self._controller.on_target(square_to_tile(sq))
