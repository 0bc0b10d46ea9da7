"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from chess_scene.core.move_generator import MoveGenerator
from chess_scene.core.position import Position
from chess_scene.core.rules import Rules
from chess_scene.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

PlayFn = Callable[..., None]


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()


@pytest.fixture
def play() -> PlayFn:
    """Apply moves like ``"e2e4"`` to a position, asserting each is legal."""

    def _play(pos: Position, *moves: str) -> None:
        for text in moves:
            from_sq, to_sq = parse_square(text[:2]), parse_square(text[2:4])
            assert MoveGenerator(pos).is_legal(from_sq, to_sq), f"illegal: {text}"
            pos.make_move(from_sq, to_sq)
            Rules.recompute_terminal(pos)

    return _play
