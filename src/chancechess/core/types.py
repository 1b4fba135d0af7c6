"""Board coordinates and square-name helpers.

Board layout (row-major, Black at the top):
    row 0 = rank 8 (Black's back rank), row 7 = rank 1 (White's back rank)
    col 0 = file a, col 7 = file h

So ``Position(6, 4)`` is ``e2`` and ``Position(0, 4)`` is ``e8``.
"""

from __future__ import annotations

from dataclasses import dataclass

from chancechess.core.enums import Color

BOARD_SIZE = 8
FILES = "abcdefgh"

KING_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0
KINGSIDE_KING_TARGET = 6
QUEENSIDE_KING_TARGET = 2


def is_valid_position(row: int, col: int) -> bool:
    """Whether (row, col) lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate."""

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return is_valid_position(self.row, self.col)

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring position, or ``None`` when it falls off the board."""
        row, col = self.row + d_row, self.col + d_col
        if not is_valid_position(row, col):
            return None
        return Position(row, col)

    def __str__(self) -> str:
        if not self.is_valid:
            return f"({self.row},{self.col})"
        return square_name(self)


def back_rank(color: Color) -> int:
    """Row holding *color*'s pieces at the start of the game."""
    return BOARD_SIZE - 1 if color == Color.WHITE else 0


def promotion_rank(color: Color) -> int:
    """Row a pawn of *color* promotes on (the opponent's back rank)."""
    return back_rank(color.opposite)


def pawn_start_rank(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn step: White moves up the grid, Black down."""
    return -1 if color == Color.WHITE else 1


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. ``Position(6, 4)`` -> ``'e2'``."""
    return FILES[pos.col] + str(BOARD_SIZE - pos.row)


def parse_square(name: str) -> Position:
    """Parse a square name, e.g. ``'e4'`` -> ``Position(4, 4)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(BOARD_SIZE - int(name[1]), FILES.index(name[0]))
