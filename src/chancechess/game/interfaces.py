"""Abstract interfaces and settings for the game layer.

The controller depends on :class:`TurnPolicy`, not on the concrete
variant implementations in :mod:`chancechess.game.turns`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chancechess.core.enums import Color, GameVariant
from chancechess.core.notation import STARTING_PLACEMENT, board_from_placement

if TYPE_CHECKING:
    from chancechess.game.turns import TurnState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game.

    Being in check is an orthogonal flag, not a phase.
    """

    AWAITING_COIN_TOSS = auto()
    AWAITING_DICE_ROLL = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    CHECKMATE = auto()


# ── Settings ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Engine configuration fixed for the lifetime of a controller.

    Args:
        auto_promote: Promote a pawn reaching the last rank to a queen
            immediately instead of waiting for ``promote_pawn``.
        seed: Seed for the dice/coin generator when no RNG is injected.
        start_placement: FEN piece placement used on construction and reset.
    """

    auto_promote: bool = False
    seed: int | None = None
    start_placement: str = STARTING_PLACEMENT

    def __post_init__(self) -> None:
        board = board_from_placement(self.start_placement)
        for color in (Color.WHITE, Color.BLACK):
            board.king_position(color)


# ── Abstract interfaces ─────────────────────────────────────────────────────


class TurnPolicy(ABC):
    """Turn-progression rules of one :class:`GameVariant`.

    Every method is a pure function of the given :class:`TurnState`.
    """

    variant: GameVariant

    @abstractmethod
    def initial(self) -> TurnState:
        """Turn state of a freshly started game."""

    @abstractmethod
    def can_move(self, turn: TurnState) -> bool:
        """Whether the variant currently lets the mover move at all."""

    @abstractmethod
    def advance(self, turn: TurnState, mover: Color) -> TurnState:
        """Turn state after *mover* completed a move that gave no check."""

    def on_check(self, turn: TurnState, mover: Color) -> TurnState:
        """Override applied when *mover*'s move leaves the opponent in check.

        Randomness is suspended and the checked side moves next.
        """
        return replace(
            turn,
            current_turn=mover.opposite,
            waiting_for_coin_toss=False,
            waiting_for_dice_roll=False,
        )
