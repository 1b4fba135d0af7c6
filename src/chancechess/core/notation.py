"""Piece-placement notation (the first field of a FEN string).

Only placement is encoded; ``has_moved`` is not part of the format, so
every loaded piece starts unmoved.
"""

from __future__ import annotations

from chancechess.core.board import Board
from chancechess.core.piece import Piece
from chancechess.core.types import BOARD_SIZE, Position

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def board_from_placement(placement: str) -> Board:
    """Parse a FEN piece-placement field into a :class:`Board`.

    A full FEN string is accepted too; fields after the first are ignored.
    """
    fields = placement.strip().split()
    if not fields:
        raise ValueError(f"Invalid placement: {placement!r}")
    ranks = fields[0].split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

    board = Board()
    # FEN lists rank 8 first, which is row 0 of the grid.
    for row, rank_str in enumerate(ranks):
        col = 0
        for ch in rank_str:
            if ch.isdigit():
                skip = int(ch)
                if skip < 1 or skip > 8:
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                col += skip
            else:
                if col >= BOARD_SIZE:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
                board[Position(row, col)] = Piece.from_char(ch)
                col += 1
            if col > BOARD_SIZE:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        if col != BOARD_SIZE:
            raise ValueError(f"Invalid placement rank width: {placement!r}")
    return board


def board_to_placement(board: Board) -> str:
    """Serialise *board* as a FEN piece-placement field."""
    ranks: list[str] = []
    for row in range(BOARD_SIZE):
        parts: list[str] = []
        empty = 0
        for col in range(BOARD_SIZE):
            piece = board[Position(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                parts.append(str(empty))
                empty = 0
            parts.append(str(piece))
        if empty:
            parts.append(str(empty))
        ranks.append("".join(parts))
    return "/".join(ranks)
