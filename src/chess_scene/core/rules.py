"""High-level chess rules: checkmate and stalemate detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chess_scene.core.enums import Color, GameResult
from chess_scene.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chess_scene.core.position import Position

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Product policy: only mate and stalemate end a game. Repetition,
    # fifty-move and material draws are not tracked.

    @staticmethod
    def is_in_check(position: Position, *, strict_castling: bool = True) -> bool:
        gen = MoveGenerator(position, strict_castling=strict_castling)
        return gen.king_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position, *, strict_castling: bool = True) -> bool:
        return (
            Rules.game_result(position, strict_castling=strict_castling)
            in (GameResult.WHITE_WINS_BY_MATE, GameResult.BLACK_WINS_BY_MATE)
        )

    @staticmethod
    def is_stalemate(position: Position, *, strict_castling: bool = True) -> bool:
        return (
            Rules.game_result(position, strict_castling=strict_castling)
            == GameResult.DRAW_BY_STALEMATE
        )

    @staticmethod
    def game_result(position: Position, *, strict_castling: bool = True) -> GameResult:
        """Terminal tag for the side to move, without storing it."""
        gen = MoveGenerator(position, strict_castling=strict_castling)
        player = position.side_to_move
        checked = gen.king_in_check(player)

        if gen.has_legal_move():
            return GameResult.PLAYING

        _LOGGER.debug(
            "No legal moves for %s (%s)",
            player,
            "checkmate" if checked else "stalemate",
        )
        if not checked:
            return GameResult.DRAW_BY_STALEMATE
        if player == Color.WHITE:
            return GameResult.BLACK_WINS_BY_MATE
        return GameResult.WHITE_WINS_BY_MATE

    @staticmethod
    def recompute_terminal(
        position: Position, *, strict_castling: bool = True
    ) -> GameResult:
        """Store and return the terminal tag after a move was applied."""
        position.terminal = Rules.game_result(
            position, strict_castling=strict_castling
        )
        return position.terminal
