"""Last-move record."""

from __future__ import annotations

from dataclasses import dataclass

from chancechess.core.enums import PieceType
from chancechess.core.piece import Piece
from chancechess.core.types import Position


@dataclass(frozen=True, slots=True)
class LastMove:
    """The most recent move, with the piece as it stood *before* moving."""

    from_pos: Position
    to_pos: Position
    piece: Piece

    @property
    def is_double_pawn_step(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and self.from_pos.col == self.to_pos.col
            and abs(self.to_pos.row - self.from_pos.row) == 2
        )

    def __str__(self) -> str:
        return f"{self.from_pos}{self.to_pos}"
