"""Tests for the 0x88 board container."""

import pytest

from chess_scene.core.board import Board
from chess_scene.core.enums import Color, PieceKind
from chess_scene.core.piece import EMPTY, make_piece
from chess_scene.core.types import A1, A8, D1, E1, E8, H8, parse_square, valid_squares


class TestInitialBoard:
    def test_piece_count(self) -> None:
        board = Board.initial()
        assert len(list(board.occupied())) == 32
        assert len(board.pieces_of(Color.WHITE)) == 16
        assert len(board.pieces_of(Color.BLACK)) == 16

    def test_back_ranks(self) -> None:
        board = Board.initial()
        assert board[A1] == make_piece(Color.WHITE, PieceKind.ROOK)
        assert board[D1] == make_piece(Color.WHITE, PieceKind.QUEEN)
        assert board[E1] == make_piece(Color.WHITE, PieceKind.KING)
        assert board[A8] == make_piece(Color.BLACK, PieceKind.ROOK)
        assert board[E8] == make_piece(Color.BLACK, PieceKind.KING)
        assert board[H8] == make_piece(Color.BLACK, PieceKind.ROOK)

    def test_pawns(self) -> None:
        board = Board.initial()
        for f in "abcdefgh":
            assert board[parse_square(f"{f}2")] == make_piece(Color.WHITE, PieceKind.PAWN)
            assert board[parse_square(f"{f}7")] == make_piece(Color.BLACK, PieceKind.PAWN)
            for rank in "3456":
                assert board.is_empty(parse_square(f"{f}{rank}"))

    def test_sentinels_clear(self) -> None:
        assert Board.initial().sentinels_clear()

    def test_repr(self) -> None:
        lines = repr(Board.initial()).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"


class TestAccess:
    def test_sentinel_write_rejected(self) -> None:
        board = Board()
        with pytest.raises(IndexError):
            board[0x08] = make_piece(Color.WHITE, PieceKind.ROOK)
        assert board.sentinels_clear()

    def test_sentinel_clear_write_is_noop(self) -> None:
        board = Board()
        board[0x78] = EMPTY
        assert board[0x78] == EMPTY

    def test_all_sentinels_read_empty(self) -> None:
        board = Board.initial()
        real = set(valid_squares())
        assert all(board[i] == EMPTY for i in range(128) if i not in real)

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king(self) -> None:
        board = Board()
        board[E1] = make_piece(Color.WHITE, PieceKind.KING)
        with pytest.raises(ValueError, match="No BLACK king"):
            board.king_square(Color.BLACK)

    def test_find(self) -> None:
        board = Board.initial()
        assert board.find(make_piece(Color.WHITE, PieceKind.QUEEN)) == D1
        assert board.find(EMPTY) is None

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        assert clone == board
        clone[E1] = EMPTY
        assert clone != board
        assert board[E1] == make_piece(Color.WHITE, PieceKind.KING)

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert list(board.occupied()) == []
