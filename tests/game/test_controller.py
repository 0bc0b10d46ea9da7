"""Tests for GameController — the select/target intent handler."""

import logging

import pytest

from chess_scene.core.enums import CastlingRights, Color, GameResult, PieceKind
from chess_scene.core.piece import EMPTY, make_piece
from chess_scene.core.position import Position
from chess_scene.core.types import (
    A8,
    D5,
    D6,
    E1,
    E2,
    E3,
    E4,
    E5,
    E7,
    E8,
    F1,
    G1,
    H1,
    H8,
    parse_square,
    square_to_tile,
)
from chess_scene.game.controller import GameController
from chess_scene.game.events import (
    GameEnded,
    PieceMoved,
    Promoted,
    SecondaryMoved,
    SelectionChanged,
)
from chess_scene.settings import AppSettings

W = Color.WHITE
B = Color.BLACK


def _record(ctrl: GameController) -> list[object]:
    """Subscribe to every event list and collect emissions in order."""
    seen: list[object] = []
    ev = ctrl.events
    for callbacks in (
        ev.on_piece_moved,
        ev.on_secondary_moved,
        ev.on_promoted,
        ev.on_game_ended,
        ev.on_selection_changed,
    ):
        callbacks.append(seen.append)
    return seen


def _move(ctrl: GameController, text: str, promotion: PieceKind | None = None) -> bool:
    ctrl.on_select(parse_square(text[:2]))
    return ctrl.on_target(square_to_tile(parse_square(text[2:4])), promotion)


def _applied(events: list[object]) -> list[object]:
    return [e for e in events if not isinstance(e, SelectionChanged)]


def _without_selection(events: list[object]) -> list[type]:
    return [type(e) for e in _applied(events)]


def _promotion_controller(**kwargs) -> GameController:
    pos = Position.empty(W)
    pos.board[E1] = make_piece(W, PieceKind.KING)
    pos.board[H8] = make_piece(B, PieceKind.KING)
    pos.board[E7] = make_piece(W, PieceKind.PAWN)
    ctrl = GameController(**kwargs)
    ctrl.new_game(pos)
    return ctrl


class TestSelection:
    def test_select_own_piece(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        ctrl.on_select(E2)
        assert ctrl.selected_from == E2
        lit = [t for t, on in enumerate(ctrl.legal_move_mask) if on]
        assert lit == sorted([square_to_tile(E3), square_to_tile(E4)])
        assert isinstance(seen[-1], SelectionChanged)
        assert seen[-1].from_sq == E2

    def test_select_empty_square_ignored(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        ctrl.on_select(E4)
        assert ctrl.selected_from is None
        assert seen == []

    def test_select_opponent_without_selection_ignored(self) -> None:
        ctrl = GameController()
        ctrl.on_select(E7)
        assert ctrl.selected_from is None

    def test_reselect_switches_piece(self) -> None:
        ctrl = GameController()
        ctrl.on_select(E2)
        ctrl.on_select(G1)
        assert ctrl.selected_from == G1
        assert sum(ctrl.legal_move_mask) == 2

    def test_clear_selection(self) -> None:
        ctrl = GameController()
        ctrl.on_select(E2)
        ctrl.clear_selection()
        assert ctrl.selected_from is None
        assert not any(ctrl.legal_move_mask)

    def test_highlight_is_read_only(self) -> None:
        ctrl = GameController()
        before = ctrl.position.state_key()
        mask = ctrl.highlight(E2)
        assert sum(mask) == 2
        assert ctrl.position.state_key() == before
        assert ctrl.selected_from is None


class TestTarget:
    def test_target_without_selection(self) -> None:
        ctrl = GameController()
        assert not ctrl.on_target(square_to_tile(E4))
        assert ctrl.position.move_count == 0

    def test_legal_move_applied(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        assert _move(ctrl, "e2e4")
        assert ctrl.position.board[E4] == make_piece(W, PieceKind.PAWN)
        assert ctrl.position.side_to_move == B
        assert ctrl.selected_from is None
        moved = [e for e in seen if isinstance(e, PieceMoved)]
        assert moved == [PieceMoved(E2, E4, make_piece(W, PieceKind.PAWN))]

    def test_illegal_move_ignored(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        ctrl.on_select(E2)
        assert not ctrl.on_target(square_to_tile(E5))
        assert ctrl.position == Position.initial()
        assert ctrl.selected_from == E2
        assert _without_selection(seen) == []

    def test_out_of_range_tile_ignored(self) -> None:
        ctrl = GameController()
        ctrl.on_select(E2)
        assert not ctrl.on_target(64)
        assert not ctrl.on_target(-1)

    def test_illegal_moves_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        ctrl.on_select(E2)
        with caplog.at_level(logging.DEBUG, logger="chess_scene.game.controller"):
            ctrl.on_target(square_to_tile(E5))
        assert "Ignoring illegal move e2e5" in caplog.text


class TestCaptures:
    def test_capture_by_selecting_opponent(self) -> None:
        ctrl = GameController()
        for text in ("e2e4", "d7d5"):
            assert _move(ctrl, text)
        seen = _record(ctrl)
        ctrl.on_select(E4)
        ctrl.on_select(D5)
        pawn_b = make_piece(B, PieceKind.PAWN)
        assert _without_selection(seen) == [SecondaryMoved, PieceMoved]
        captured = next(e for e in seen if isinstance(e, SecondaryMoved))
        assert captured == SecondaryMoved(D5, None, pawn_b, 0)
        assert captured.offboard
        assert ctrl.position.black_captured == 1
        assert ctrl.position.white_captured == 0

    def test_capture_slots_count_up(self) -> None:
        ctrl = GameController()
        for text in ("e2e4", "d7d5", "e4d5", "d8d5", "b1c3"):
            assert _move(ctrl, text)
        seen = _record(ctrl)
        assert _move(ctrl, "d5a2")
        captured = next(e for e in seen if isinstance(e, SecondaryMoved))
        assert captured.slot == 1
        assert ctrl.position.white_captured == 2
        assert ctrl.position.black_captured == 1

    def test_en_passant(self) -> None:
        ctrl = GameController()
        for text in ("e2e4", "a7a6", "e4e5", "d7d5"):
            assert _move(ctrl, text)
        seen = _record(ctrl)
        assert _move(ctrl, "e5d6")
        captured = next(e for e in seen if isinstance(e, SecondaryMoved))
        assert captured.from_sq == D5
        assert captured.offboard
        assert ctrl.position.board[D5] == EMPTY
        assert ctrl.position.board[D6] == make_piece(W, PieceKind.PAWN)


class TestCastling:
    def test_kingside_castle_events(self) -> None:
        ctrl = GameController()
        for text in ("e2e4", "a7a6", "g1f3", "a6a5", "f1c4", "a5a4"):
            assert _move(ctrl, text)
        seen = _record(ctrl)
        assert _move(ctrl, "e1g1")
        assert _without_selection(seen) == [SecondaryMoved, PieceMoved]
        rook = make_piece(W, PieceKind.ROOK)
        assert _applied(seen)[0] == SecondaryMoved(H1, F1, rook)
        assert ctrl.position.castle_rights == CastlingRights.BLACK_BOTH

    def test_castle_through_check_depends_on_setting(self) -> None:
        def _position() -> Position:
            pos = Position.empty(W)
            pos.board[E1] = make_piece(W, PieceKind.KING)
            pos.board[H1] = make_piece(W, PieceKind.ROOK)
            pos.board[A8] = make_piece(B, PieceKind.KING)
            pos.board[parse_square("f8")] = make_piece(B, PieceKind.ROOK)
            pos.castle_rights = CastlingRights.WHITE_KINGSIDE
            return pos

        strict = GameController()
        strict.new_game(_position())
        assert not _move(strict, "e1g1")

        permissive = GameController(AppSettings(strict_castling=False))
        permissive.new_game(_position())
        assert _move(permissive, "e1g1")


class TestPromotion:
    def test_defaults_to_queen(self) -> None:
        ctrl = _promotion_controller()
        seen = _record(ctrl)
        assert _move(ctrl, "e7e8")
        assert ctrl.position.board[E8] == make_piece(W, PieceKind.QUEEN)
        assert _applied(seen) == [
            PieceMoved(E7, E8, make_piece(W, PieceKind.PAWN)),
            Promoted(E8, PieceKind.QUEEN),
        ]

    def test_requested_kind(self) -> None:
        ctrl = _promotion_controller()
        assert _move(ctrl, "e7e8", PieceKind.KNIGHT)
        assert ctrl.position.board[E8] == make_piece(W, PieceKind.KNIGHT)

    def test_invalid_kind_ignored(self) -> None:
        ctrl = _promotion_controller()
        assert not _move(ctrl, "e7e8", PieceKind.KING)
        assert ctrl.position.board[E7] == make_piece(W, PieceKind.PAWN)

    def test_chooser_hook(self) -> None:
        asked: list[Color] = []

        def _choose(color: Color) -> PieceKind:
            asked.append(color)
            return PieceKind.ROOK

        ctrl = _promotion_controller(promotion_chooser=_choose)
        assert _move(ctrl, "e7e8")
        assert asked == [W]
        assert ctrl.position.board[E8] == make_piece(W, PieceKind.ROOK)

    def test_default_from_settings(self) -> None:
        ctrl = _promotion_controller(
            settings=AppSettings(default_promotion=PieceKind.BISHOP)
        )
        assert _move(ctrl, "e7e8")
        assert ctrl.position.board[E8] == make_piece(W, PieceKind.BISHOP)

    def test_chooser_not_asked_for_plain_moves(self) -> None:
        asked: list[Color] = []

        def _choose(color: Color) -> PieceKind:
            asked.append(color)
            return PieceKind.QUEEN

        ctrl = GameController(promotion_chooser=_choose)
        assert _move(ctrl, "e2e4")
        assert asked == []


class TestGameEnd:
    def test_fools_mate_ends_game(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        for text in ("f2f3", "e7e5", "g2g4"):
            assert _move(ctrl, text)
        seen = _record(ctrl)
        with caplog.at_level(logging.INFO):
            assert _move(ctrl, "d8h4")
        assert _without_selection(seen) == [PieceMoved, GameEnded]
        assert seen[-1] == GameEnded(GameResult.BLACK_WINS_BY_MATE)
        assert ctrl.is_game_over
        assert ctrl.result == GameResult.BLACK_WINS_BY_MATE
        assert "BLACK_WINS_BY_MATE" in caplog.text
        info = [r for r in caplog.records if r.levelno >= logging.INFO]
        assert [r.name for r in info] == ["chess_scene.game.controller"]

    def test_intents_ignored_after_game_end(self) -> None:
        ctrl = GameController()
        for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
            assert _move(ctrl, text)
        before = ctrl.position.state_key()
        ctrl.on_select(E2)
        assert ctrl.selected_from is None
        assert not ctrl.on_target(square_to_tile(E3))
        assert ctrl.position.state_key() == before

    def test_stalemate(self) -> None:
        pos = Position.empty(W)
        pos.board[A8] = make_piece(B, PieceKind.KING)
        pos.board[parse_square("c7")] = make_piece(W, PieceKind.KING)
        pos.board[parse_square("c5")] = make_piece(W, PieceKind.QUEEN)
        ctrl = GameController()
        ctrl.new_game(pos)
        seen = _record(ctrl)
        assert _move(ctrl, "c5b6")
        assert seen[-1] == GameEnded(GameResult.DRAW_BY_STALEMATE)

    def test_new_game_resets(self) -> None:
        ctrl = GameController()
        for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
            assert _move(ctrl, text)
        ctrl.new_game()
        assert not ctrl.is_game_over
        assert ctrl.position == Position.initial()
        assert ctrl.selected_from is None
