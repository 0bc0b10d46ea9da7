"""Visual theme constants for the board scene."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor

THEME_NAMES = ("Classic", "Blue", "Green")


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets
    white_piece: QColor
    black_piece: QColor
    banner_text: QColor
    banner_shade: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(20, 85, 30, 90),  # green overlay
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(25, 25, 25),
            banner_text=QColor(255, 255, 255),
            banner_shade=QColor(0, 0, 0, 150),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(25, 25, 25),
            banner_text=QColor(255, 255, 255),
            banner_shade=QColor(0, 0, 0, 150),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(25, 25, 25),
            banner_text=QColor(255, 255, 255),
            banner_shade=QColor(0, 0, 0, 150),
        )

    @classmethod
    def named(cls, name: str) -> BoardTheme:
        """Theme for a settings name, falling back to the default."""
        theme_map = dict(zip(THEME_NAMES, (cls.default, cls.blue, cls.green)))
        return theme_map.get(name, cls.default)()


APP_STYLE = """
QMainWindow { background-color: #262421; }
QGraphicsView { border: none; background-color: #262421; }
"""
