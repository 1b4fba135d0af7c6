"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chancechess.core.enums import Color, PieceType

# Indexed in PieceType order; FEN letters are uppercase for White.
_LETTERS = "pnbrqk"


def _index(piece_type: PieceType) -> int:
    return piece_type - PieceType.PAWN


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` drives castling eligibility.  Pieces are never mutated:
    moving one stores the copy returned by :meth:`moved`.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    def moved(self) -> Piece:
        """Copy of this piece flagged as having moved."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    # -- Serialisation -------------------------------------------------------

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[_index(self.piece_type)]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' -> white knight."""
        index = _LETTERS.find(char.lower()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index + PieceType.PAWN))
