"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from chancechess.core.enums import Color, PieceType
from chancechess.core.piece import Piece
from chancechess.core.types import BOARD_SIZE, Position, back_rank, pawn_start_rank

_BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class Square:
    """Read-only view of one board cell."""

    position: Position
    piece: Piece | None = None


class Board:
    """Mutable 8x8 grid of optional pieces, indexed by :class:`Position`."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._grid[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self._grid[pos.row][pos.col] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares in row-major order, optionally for one color."""
        for row, cells in enumerate(self._grid):
            for col, piece in enumerate(cells):
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield Position(row, col), piece

    def king_position(self, color: Color) -> Position:
        """Return the single king square for *color*."""
        for pos, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return pos
        raise ValueError(f"No {color.name} king on board")

    def squares(self) -> tuple[tuple[Square, ...], ...]:
        """Snapshot of every cell as :class:`Square` records."""
        return tuple(
            tuple(Square(Position(row, col), piece) for col, piece in enumerate(cells))
            for row, cells in enumerate(self._grid)
        )

    # -- Mutation / copying -------------------------------------------------

    def relocate(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Move whatever stands on *from_pos* to *to_pos*.

        Returns the piece that was on *to_pos* (the capture, if any).  The
        moved piece is stored unchanged; callers flag it with
        :meth:`Piece.moved` when the move is real.
        """
        captured = self[to_pos]
        self[to_pos] = self[from_pos]
        self[from_pos] = None
        return captured

    def copy(self) -> Board:
        # Pieces are immutable values, so copying the rows is a full copy.
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for color in (Color.WHITE, Color.BLACK):
            pawn_row = pawn_start_rank(color)
            home_row = back_rank(color)
            for col in range(BOARD_SIZE):
                b[Position(pawn_row, col)] = Piece(color, PieceType.PAWN)
            for col, pt in enumerate(_BACK_RANK_ORDER):
                b[Position(home_row, col)] = Piece(color, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, cells in enumerate(self._grid):
            rank = BOARD_SIZE - row
            rows.append(f"{rank} {' '.join(str(p) if p else '.' for p in cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
