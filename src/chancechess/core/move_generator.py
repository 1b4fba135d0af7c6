"""Raw and legal move generation + attack detection."""

from __future__ import annotations

from typing import NamedTuple

from chancechess.core.board import Board
from chancechess.core.enums import Color, PieceType
from chancechess.core.move import LastMove
from chancechess.core.piece import Piece
from chancechess.core.types import (
    KING_FILE,
    KINGSIDE_KING_TARGET,
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_KING_TARGET,
    QUEENSIDE_ROOK_FILE,
    Position,
    back_rank,
    pawn_direction,
    pawn_start_rank,
)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

# (rook file, king destination file) for kingside, then queenside.
_CASTLES: tuple[tuple[int, int], ...] = (
    (KINGSIDE_ROOK_FILE, KINGSIDE_KING_TARGET),
    (QUEENSIDE_ROOK_FILE, QUEENSIDE_KING_TARGET),
)


class RawMoves(NamedTuple):
    """Geometric destinations of one piece, ignoring king safety."""

    valid: list[Position]
    blocked: list[Position]


def castling_rook_move(row: int, king_target_col: int) -> tuple[Position, Position]:
    """Rook (from, to) squares for the castle whose king lands on *king_target_col*."""
    if king_target_col == KINGSIDE_KING_TARGET:
        return Position(row, KINGSIDE_ROOK_FILE), Position(row, KINGSIDE_KING_TARGET - 1)
    return Position(row, QUEENSIDE_ROOK_FILE), Position(row, QUEENSIDE_KING_TARGET + 1)


class MoveGenerator:
    """Generates moves for the pieces of a :class:`Board`.

    The generator never mutates the board it was given; king-safety checks
    run on scratch copies.  *last_move* is only consulted for en passant.
    """

    __slots__ = ("_board", "_last_move")

    def __init__(self, board: Board, last_move: LastMove | None = None) -> None:
        self._board = board
        self._last_move = last_move

    # -- Public API ---------------------------------------------------------

    def raw_moves(self, pos: Position) -> RawMoves:
        """Valid and blocked destinations for the piece on *pos*."""
        moves = RawMoves([], [])
        piece = self._board[pos]
        if piece is None:
            return moves

        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(pos, piece, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_stepping(pos, piece, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.KING:
            self._gen_king(pos, piece, moves)
        else:
            self._gen_sliding(pos, piece, _SLIDER_DIRS[pt], moves)
        return moves

    def legal_moves(self, pos: Position) -> list[Position]:
        """Raw destinations that do not leave the mover's own king attacked."""
        piece = self._board[pos]
        if piece is None:
            return []

        opponent = piece.color.opposite
        legal: list[Position] = []
        for to_pos in self.raw_moves(pos).valid:
            scratch = self._simulate(pos, to_pos)
            if piece.piece_type == PieceType.KING:
                king_pos = to_pos
            else:
                king_pos = scratch.king_position(piece.color)
            if not MoveGenerator(scratch).is_square_attacked(king_pos, opponent):
                legal.append(to_pos)
        return legal

    def has_legal_move(self, color: Color) -> bool:
        """Whether any piece of *color* has at least one legal move."""
        return any(self.legal_moves(pos) for pos, _ in self._board.pieces(color))

    def castling_partners(self, pos: Position) -> list[Position]:
        """Squares of the partner piece for every castle available from *pos*.

        Selecting the king yields rook squares, selecting a corner rook
        yields the king square.
        """
        piece = self._board[pos]
        if piece is None or piece.has_moved:
            return []

        row = back_rank(piece.color)
        king_pos = Position(row, KING_FILE)
        if piece.piece_type == PieceType.KING and pos == king_pos:
            return [
                Position(row, rook_col)
                for rook_col, _ in _CASTLES
                if self.is_castling_possible(pos, Position(row, rook_col))
            ]
        if (
            piece.piece_type == PieceType.ROOK
            and pos.row == row
            and pos.col in (KINGSIDE_ROOK_FILE, QUEENSIDE_ROOK_FILE)
            and self.is_castling_possible(king_pos, pos)
        ):
            return [king_pos]
        return []

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_pos = self._board.king_position(color)
        return self.is_square_attacked(king_pos, color.opposite)

    def is_square_attacked(self, target: Position, by_color: Color) -> bool:
        """Is *target* attacked by any piece of *by_color*?"""
        for pos, piece in self._board.pieces(by_color):
            if target in self._attacked_squares(pos, piece):
                return True
        return False

    # -- Special-move gates -------------------------------------------------

    def is_en_passant_possible(self, from_pos: Position, to_pos: Position) -> bool:
        """Whether the pawn on *from_pos* may capture en passant onto *to_pos*.

        Only a double step made on the immediately preceding move qualifies.
        """
        piece = self._board[from_pos]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return False
        if abs(to_pos.col - from_pos.col) != 1:
            return False

        last = self._last_move
        if last is None or not last.is_double_pawn_step:
            return False
        if last.piece.color == piece.color or last.to_pos.col != to_pos.col:
            return False

        return (
            last.from_pos.row == pawn_start_rank(piece.color.opposite)
            and last.to_pos.row == from_pos.row
            and to_pos.row == from_pos.row + pawn_direction(piece.color)
        )

    def is_castling_possible(self, king_pos: Position, rook_pos: Position) -> bool:
        """Whether the king on *king_pos* may castle with the rook on *rook_pos*."""
        board = self._board
        king = board[king_pos]
        rook = board[rook_pos]

        if king is None or king.piece_type != PieceType.KING or king.has_moved:
            return False
        if rook is None or rook.piece_type != PieceType.ROOK or rook.has_moved:
            return False
        if rook.color != king.color:
            return False

        row = back_rank(king.color)
        if king_pos != Position(row, KING_FILE) or rook_pos.row != row:
            return False

        if rook_pos.col == KINGSIDE_ROOK_FILE:
            transit = range(KING_FILE, KINGSIDE_KING_TARGET + 1)
        elif rook_pos.col == QUEENSIDE_ROOK_FILE:
            transit = range(QUEENSIDE_KING_TARGET, KING_FILE + 1)
        else:
            return False

        start_col = min(king_pos.col, rook_pos.col)
        end_col = max(king_pos.col, rook_pos.col)
        for col in range(start_col + 1, end_col):
            if not board.is_empty(Position(row, col)):
                return False

        # Transit includes the king's own square, so castling out of check fails.
        opponent = king.color.opposite
        return not any(
            self.is_square_attacked(Position(row, col), opponent) for col in transit
        )

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pos: Position, piece: Piece, moves: RawMoves) -> None:
        board = self._board
        direction = pawn_direction(piece.color)

        one_step = pos.offset(direction, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.valid.append(one_step)
            if pos.row == pawn_start_rank(piece.color):
                two_step = pos.offset(2 * direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.valid.append(two_step)

        for d_col in (-1, 1):
            target = pos.offset(direction, d_col)
            if target is None:
                continue
            occupant = board[target]
            if occupant is None:
                if self.is_en_passant_possible(pos, target):
                    moves.valid.append(target)
            elif occupant.color != piece.color:
                moves.valid.append(target)
            else:
                moves.blocked.append(target)

    def _gen_stepping(
        self,
        pos: Position,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: RawMoves,
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            target = pos.offset(d_row, d_col)
            if target is None:
                continue
            occupant = board[target]
            if occupant is None or occupant.color != piece.color:
                moves.valid.append(target)
            else:
                moves.blocked.append(target)

    def _gen_sliding(
        self,
        pos: Position,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: RawMoves,
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            target = pos.offset(d_row, d_col)
            while target is not None:
                occupant = board[target]
                if occupant is None:
                    moves.valid.append(target)
                    target = target.offset(d_row, d_col)
                    continue
                if occupant.color != piece.color:
                    moves.valid.append(target)
                else:
                    moves.blocked.append(target)
                break

    def _gen_king(self, pos: Position, piece: Piece, moves: RawMoves) -> None:
        self._gen_stepping(pos, piece, KING_OFFSETS, moves)

        row = back_rank(piece.color)
        if piece.has_moved or pos != Position(row, KING_FILE):
            return
        for rook_col, king_target in _CASTLES:
            if self.is_castling_possible(pos, Position(row, rook_col)):
                moves.valid.append(Position(row, king_target))

    def _attacked_squares(self, pos: Position, piece: Piece) -> list[Position]:
        """Capture geometry of *piece*: no pawn pushes, no castling."""
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            direction = pawn_direction(piece.color)
            return [
                target
                for target in (pos.offset(direction, -1), pos.offset(direction, 1))
                if target is not None
            ]
        if pt in (PieceType.KNIGHT, PieceType.KING):
            offsets = KNIGHT_OFFSETS if pt == PieceType.KNIGHT else KING_OFFSETS
            targets = (pos.offset(d_row, d_col) for d_row, d_col in offsets)
            return [target for target in targets if target is not None]

        squares: list[Position] = []
        for d_row, d_col in _SLIDER_DIRS[pt]:
            target = pos.offset(d_row, d_col)
            while target is not None:
                squares.append(target)
                if not self._board.is_empty(target):
                    break
                target = target.offset(d_row, d_col)
        return squares

    def _simulate(self, from_pos: Position, to_pos: Position) -> Board:
        """Scratch copy of the board with the move from *from_pos* applied."""
        scratch = self._board.copy()
        piece = scratch[from_pos]
        if piece is not None:
            if piece.piece_type == PieceType.PAWN and self.is_en_passant_possible(
                from_pos, to_pos
            ):
                scratch[Position(from_pos.row, to_pos.col)] = None
            elif (
                piece.piece_type == PieceType.KING
                and from_pos.col == KING_FILE
                and abs(to_pos.col - from_pos.col) == 2
            ):
                rook_from, rook_to = castling_rook_move(from_pos.row, to_pos.col)
                scratch.relocate(rook_from, rook_to)
        scratch.relocate(from_pos, to_pos)
        return scratch
