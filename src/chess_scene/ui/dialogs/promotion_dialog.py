"""Promotion dialog — lets user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chess_scene.core.enums import Color, PieceKind
from chess_scene.core.piece import PROMOTION_KINDS, make_piece, piece_symbol


class PromotionDialog(QDialog):
    """Modal dialog to select promotion piece kind."""

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: PieceKind = PieceKind.QUEEN

        layout = QVBoxLayout(self)
        label = QLabel("Promote pawn to:")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)

        btn_row = QHBoxLayout()
        for kind in PROMOTION_KINDS:
            btn = QPushButton(piece_symbol(make_piece(color, kind)))
            btn.setFont(QFont("DejaVu Sans", 28))
            btn.setFixedSize(68, 68)
            btn.setToolTip(kind.name.capitalize())
            btn.clicked.connect(lambda checked, k=kind: self._choose(k))
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

    def _choose(self, kind: PieceKind) -> None:
        self._selected = kind
        self.accept()

    @property
    def selected(self) -> PieceKind:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceKind:
        """Show the dialog and return the chosen kind (Queen on cancel)."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return PieceKind.QUEEN
