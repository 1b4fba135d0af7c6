"""Dice rolls and coin tosses used by the chance variants."""

from __future__ import annotations

import random
from dataclasses import dataclass

from chancechess.core.enums import Color

DIE_FACES = 6
_WHITE_MAX_FACE = 3


@dataclass(frozen=True, slots=True)
class DiceRoll:
    """Outcome of one die roll.

    Faces 1-3 give White that many moves, faces 4-6 give Black
    ``value - 3`` moves.  ``value == 0`` marks a roll that did not happen.
    """

    value: int
    moves_granted: int
    player: Color

    @classmethod
    def from_value(cls, value: int) -> DiceRoll:
        if not 1 <= value <= DIE_FACES:
            raise ValueError(f"Die value out of range: {value}")
        if value <= _WHITE_MAX_FACE:
            return cls(value, value, Color.WHITE)
        return cls(value, value - _WHITE_MAX_FACE, Color.BLACK)

    @classmethod
    def skipped(cls, player: Color) -> DiceRoll:
        """Sentinel returned when rolling is not currently allowed."""
        return cls(0, 0, player)

    @property
    def happened(self) -> bool:
        return self.value != 0


@dataclass(frozen=True, slots=True)
class CoinToss:
    """Outcome of one coin toss: the color that moves next."""

    result: Color


def roll_die(rng: random.Random) -> DiceRoll:
    """Draw a uniform die face from *rng*."""
    return DiceRoll.from_value(rng.randint(1, DIE_FACES))


def toss_coin(rng: random.Random) -> CoinToss:
    """Draw a fair coin from *rng*."""
    return CoinToss(Color.WHITE if rng.random() < 0.5 else Color.BLACK)
