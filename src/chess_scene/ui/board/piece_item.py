"""PieceItem — a chess piece glyph on the QGraphicsScene."""

from __future__ import annotations

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QCursor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QGraphicsObject, QStyleOptionGraphicsItem, QWidget

from chess_scene.core.piece import COLOR_MASK, piece_symbol
from chess_scene.core.types import Square


class PieceItem(QGraphicsObject):
    """A single chess piece drawn as a Unicode glyph.

    Stores its piece code and logical *square* (None once captured). Being a
    QGraphicsObject, its ``pos`` can be driven by animations.
    """

    _FONT_RATIO = 0.78

    def __init__(
        self,
        piece: int,
        square: Square | None,
        tile_size: int,
        colors: tuple[QColor, QColor],
    ) -> None:
        super().__init__()
        self.piece = piece
        self.square = square
        self._tile_size = tile_size
        self._colors = colors
        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setZValue(1)

    @property
    def glyph(self) -> str:
        # Solid glyph for both colors; the pen supplies the color.
        return piece_symbol(self.piece | COLOR_MASK)

    def set_colors(self, colors: tuple[QColor, QColor]) -> None:
        """Repaint with new (white, black) glyph colors."""
        self._colors = colors
        self.update()

    @property
    def colors(self) -> tuple[QColor, QColor]:
        return self._colors

    def set_piece(self, piece: int) -> None:
        """Swap the drawn piece (promotion)."""
        self.piece = piece
        self.update()

    def boundingRect(self) -> QRectF:
        return QRectF(0.0, 0.0, float(self._tile_size), float(self._tile_size))

    def paint(
        self,
        painter: QPainter | None,
        option: QStyleOptionGraphicsItem | None,
        widget: QWidget | None = None,
    ) -> None:
        del option, widget
        if painter is None:
            return
        white, black = self._colors
        font = QFont("DejaVu Sans")
        font.setPixelSize(max(int(self._tile_size * self._FONT_RATIO), 1))
        painter.setFont(font)
        painter.setPen(QPen(black if self.piece & COLOR_MASK else white))
        painter.drawText(self.boundingRect(), Qt.AlignmentFlag.AlignCenter, self.glyph)
