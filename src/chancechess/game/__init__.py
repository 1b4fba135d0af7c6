"""Game management layer: controller, turn policies, chance, snapshots.

Quick start::

    from chancechess.core import GameVariant, parse_square
    from chancechess.game import GameController

    ctrl = GameController(GameVariant.DICE)
    roll = ctrl.roll_dice()
    ctrl.move_piece(parse_square("e2"), parse_square("e4"))
"""

from chancechess.game.chance import CoinToss, DiceRoll
from chancechess.game.controller import GameController, GameEvents
from chancechess.game.interfaces import GamePhase, GameSettings, TurnPolicy
from chancechess.game.state import GameSnapshot, Selection
from chancechess.game.turns import (
    ClassicTurns,
    CoinTossTurns,
    DiceTurns,
    TurnState,
    policy_for,
)

__all__ = [
    # Interfaces
    "GamePhase",
    "GameSettings",
    "TurnPolicy",
    # Concrete
    "ClassicTurns",
    "CoinToss",
    "CoinTossTurns",
    "DiceRoll",
    "DiceTurns",
    "GameController",
    "GameEvents",
    "GameSnapshot",
    "Selection",
    "TurnState",
    "policy_for",
]
