"""MainWindow — top-level window hosting the board view."""

from __future__ import annotations

from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import QMainWindow

from chess_scene.core.enums import Color, PieceKind
from chess_scene.game.controller import GameController
from chess_scene.game.events import GameEnded
from chess_scene.settings import AppSettings
from chess_scene.ui.board.board_view import BoardView
from chess_scene.ui.board.board_scene import banner_lines
from chess_scene.ui.dialogs.promotion_dialog import PromotionDialog
from chess_scene.ui.styles.theme import THEME_NAMES


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Chess Scene")
        self.setMinimumSize(640, 520)
        self.resize(960, 760)

        self._settings = settings if settings is not None else AppSettings()
        self._controller = GameController(
            self._settings, promotion_chooser=self._ask_promotion
        )
        self._board_view = BoardView(self._controller, self)
        self.setCentralWidget(self._board_view)

        self._setup_menu()
        events = self._controller.events
        events.on_piece_moved.append(lambda _event: self._show_turn())
        events.on_game_ended.append(self._on_game_ended)
        self._show_turn()

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None

        self._act_new_game = QAction("&New Game", self)
        self._act_new_game.setShortcut("Ctrl+N")
        self._act_new_game.triggered.connect(self._on_new_game)
        menu_game.addAction(self._act_new_game)

        menu_game.addSeparator()

        self._act_quit = QAction("&Quit", self)
        self._act_quit.setShortcut("Ctrl+Q")
        self._act_quit.triggered.connect(self.close)
        menu_game.addAction(self._act_quit)

        # Settings menu
        menu_settings = menu_bar.addMenu("&Settings")
        assert menu_settings is not None
        menu_theme = menu_settings.addMenu("Board &Theme")
        assert menu_theme is not None

        self._theme_group = QActionGroup(self)
        self._theme_group.setExclusive(True)
        self._theme_actions: dict[str, QAction] = {}
        for name in THEME_NAMES:
            act = QAction(name, self)
            act.setCheckable(True)
            act.setChecked(name == self._settings.board_theme)
            act.triggered.connect(lambda _checked, n=name: self._on_theme(n))
            self._theme_group.addAction(act)
            menu_theme.addAction(act)
            self._theme_actions[name] = act

    def _on_new_game(self) -> None:
        self._controller.new_game()
        self._board_view.board_scene.reset()
        self._show_turn()

    def _on_theme(self, name: str) -> None:
        self._settings.board_theme = name
        self._apply_settings()

    def _apply_settings(self) -> None:
        self._board_view.board_scene.apply_settings(self._settings)

    def _ask_promotion(self, color: Color) -> PieceKind:
        return PromotionDialog.ask(color, self)

    def _show_turn(self) -> None:
        status = self.statusBar()
        if status is None or self._controller.is_game_over:
            return
        side = self._controller.position.side_to_move
        status.showMessage(f"{side.name.capitalize()} to move")

    def _on_game_ended(self, event: GameEnded) -> None:
        status = self.statusBar()
        lines = banner_lines(event.outcome)
        if status is not None and lines is not None:
            status.showMessage(" ".join(lines))
