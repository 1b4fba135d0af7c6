"""Turn-progression state machine for the three variants."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chancechess.core.enums import Color, GameVariant
from chancechess.game.chance import CoinToss, DiceRoll
from chancechess.game.interfaces import TurnPolicy


@dataclass(frozen=True, slots=True)
class TurnState:
    """Whose turn it is and what the variant is waiting for."""

    current_turn: Color = Color.WHITE
    remaining_moves: int = 1  # only meaningful in the dice variant
    waiting_for_coin_toss: bool = False
    waiting_for_dice_roll: bool = False
    last_dice_roll: DiceRoll | None = None
    last_coin_toss: CoinToss | None = None


def apply_dice_roll(turn: TurnState, roll: DiceRoll) -> TurnState:
    return replace(
        turn,
        current_turn=roll.player,
        remaining_moves=roll.moves_granted,
        waiting_for_dice_roll=False,
        last_dice_roll=roll,
    )


def apply_coin_toss(turn: TurnState, toss: CoinToss) -> TurnState:
    return replace(
        turn,
        current_turn=toss.result,
        waiting_for_coin_toss=False,
        last_coin_toss=toss,
    )


class ClassicTurns(TurnPolicy):
    """Strict alternation, White first."""

    variant = GameVariant.CLASSIC

    def initial(self) -> TurnState:
        return TurnState()

    def can_move(self, turn: TurnState) -> bool:
        return True

    def advance(self, turn: TurnState, mover: Color) -> TurnState:
        return replace(turn, current_turn=mover.opposite)


class CoinTossTurns(TurnPolicy):
    """A coin decides the mover of every turn played outside check."""

    variant = GameVariant.COIN_TOSS

    def initial(self) -> TurnState:
        return TurnState(waiting_for_coin_toss=True)

    def can_move(self, turn: TurnState) -> bool:
        return not turn.waiting_for_coin_toss

    def advance(self, turn: TurnState, mover: Color) -> TurnState:
        return replace(turn, waiting_for_coin_toss=True)


class DiceTurns(TurnPolicy):
    """A die decides the mover and how many consecutive moves they get."""

    variant = GameVariant.DICE

    def initial(self) -> TurnState:
        return TurnState(waiting_for_dice_roll=True)

    def can_move(self, turn: TurnState) -> bool:
        return not turn.waiting_for_dice_roll and turn.remaining_moves > 0

    def advance(self, turn: TurnState, mover: Color) -> TurnState:
        remaining = turn.remaining_moves - 1
        return replace(
            turn,
            remaining_moves=remaining,
            waiting_for_dice_roll=remaining <= 0,
        )

    def on_check(self, turn: TurnState, mover: Color) -> TurnState:
        # The checked side gets exactly one reply before dice resume.
        return replace(super().on_check(turn, mover), remaining_moves=1)


_POLICIES: dict[GameVariant, type[TurnPolicy]] = {
    GameVariant.CLASSIC: ClassicTurns,
    GameVariant.COIN_TOSS: CoinTossTurns,
    GameVariant.DICE: DiceTurns,
}


def policy_for(variant: GameVariant) -> TurnPolicy:
    """Turn policy implementing *variant*."""
    return _POLICIES[GameVariant(variant)]()
