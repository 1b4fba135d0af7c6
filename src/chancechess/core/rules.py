"""High-level chess rules: check and checkmate detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chancechess.core.enums import Color
from chancechess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chancechess.core.board import Board
    from chancechess.core.move import LastMove


@dataclass(frozen=True, slots=True)
class CheckState:
    """Result of one check/checkmate evaluation pass."""

    in_check: Color | None = None
    checkmate: Color | None = None


NO_CHECK = CheckState()


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Stalemate and draw rules are deliberately absent: a side without legal
    moves that is not in check is not a terminal state.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def checked_color(board: Board) -> Color | None:
        """The color whose king is attacked, if any.

        Both kings are examined; a missing king raises ``ValueError``.
        """
        gen = MoveGenerator(board)
        checked: Color | None = None
        for color in (Color.WHITE, Color.BLACK):
            if gen.is_in_check(color):
                checked = color
        return checked

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not MoveGenerator(board, last_move).has_legal_move(color)

    @staticmethod
    def check_state(board: Board, last_move: LastMove | None = None) -> CheckState:
        """Evaluate check, then checkmate only for the checked color."""
        checked = Rules.checked_color(board)
        if checked is None:
            return NO_CHECK
        gen = MoveGenerator(board, last_move)
        mated = None if gen.has_legal_move(checked) else checked
        return CheckState(in_check=checked, checkmate=mated)
