"""Move record saved by make so undo can restore the position exactly."""

from __future__ import annotations

from dataclasses import dataclass

from chess_scene.core.enums import CastlingRights, MoveKind
from chess_scene.core.types import Square, square_name


@dataclass(slots=True)
class MoveRecord:
    """Everything needed to revert one :meth:`Position.make_move`.

    ``capture_sq`` differs from the destination only for en passant.
    ``rook_from`` is set for castling only. ``promotion`` is the promoted
    kind, 0 when the move did not promote.
    """

    kind: MoveKind
    captured: int
    capture_sq: Square
    prior_castle_rights: CastlingRights
    prior_en_passant: Square
    rook_from: Square | None = None
    promotion: int = 0

    @property
    def is_capture(self) -> bool:
        return self.captured != 0

    def __str__(self) -> str:
        parts = [self.kind.name.lower()]
        if self.captured:
            parts.append(f"x{square_name(self.capture_sq)}")
        if self.rook_from is not None:
            parts.append(f"rook@{square_name(self.rook_from)}")
        if self.promotion:
            parts.append(f"={self.promotion}")
        return " ".join(parts)
