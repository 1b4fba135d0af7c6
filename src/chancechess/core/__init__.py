"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chancechess.core import Board, MoveGenerator, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    print(gen.legal_moves(parse_square("g1")))
"""

from chancechess.core.board import Board, Square
from chancechess.core.enums import Color, GameVariant, PieceType
from chancechess.core.move import LastMove
from chancechess.core.move_generator import MoveGenerator, RawMoves
from chancechess.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from chancechess.core.piece import Piece
from chancechess.core.rules import CheckState, Rules
from chancechess.core.types import Position, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameVariant",
    "PieceType",
    # Types / helpers
    "Position",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CheckState",
    "LastMove",
    "MoveGenerator",
    "Piece",
    "RawMoves",
    "Rules",
    "Square",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]
