"""Tests for square names and placement notation."""

import pytest

from chancechess.core.board import Board
from chancechess.core.enums import Color, PieceType
from chancechess.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from chancechess.core.piece import Piece
from chancechess.core.types import Position, parse_square, square_name


class TestSquareNames:
    @pytest.mark.parametrize(
        ("name", "pos"),
        [
            ("a8", Position(0, 0)),
            ("h1", Position(7, 7)),
            ("e2", Position(6, 4)),
            ("e4", Position(4, 4)),
            ("d5", Position(3, 3)),
        ],
    )
    def test_parse_and_name(self, name: str, pos: Position) -> None:
        assert parse_square(name) == pos
        assert square_name(pos) == name

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e22"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_position_validity(self) -> None:
        assert Position(0, 7).is_valid
        assert not Position(8, 0).is_valid
        assert not Position(0, -1).is_valid
        assert Position(7, 7).offset(1, 0) is None
        assert Position(6, 4).offset(-2, 0) == Position(4, 4)


class TestPlacement:
    def test_starting_placement(self) -> None:
        assert board_from_placement(STARTING_PLACEMENT) == Board.initial()

    def test_to_placement(self) -> None:
        assert board_to_placement(Board.initial()) == STARTING_PLACEMENT

    def test_accepts_full_fen(self) -> None:
        board = board_from_placement(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert board[parse_square("e4")] == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(parse_square("e2"))

    def test_sparse_position(self) -> None:
        board = board_from_placement("4k3/8/8/3pP3/8/8/8/4K3")
        assert board[Position(3, 3)] == Piece(Color.BLACK, PieceType.PAWN)
        assert board[Position(3, 4)] == Piece(Color.WHITE, PieceType.PAWN)
        assert len(list(board.pieces())) == 4
        assert board_to_placement(board) == "4k3/8/8/3pP3/8/8/8/4K3"

    @pytest.mark.parametrize(
        "placement",
        [
            "",
            "8/8/8",
            "9/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "x7/8/8/8/8/8/8/8",
            "08/8/8/8/8/8/8/8",
        ],
    )
    def test_invalid(self, placement: str) -> None:
        with pytest.raises(ValueError):
            board_from_placement(placement)
