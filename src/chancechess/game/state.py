"""Immutable game snapshots handed to rendering and persistence collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chancechess.core.board import Square
from chancechess.core.enums import Color, GameVariant
from chancechess.core.move import LastMove
from chancechess.core.piece import Piece
from chancechess.core.types import Position
from chancechess.game.chance import CoinToss, DiceRoll
from chancechess.game.interfaces import GamePhase


@dataclass(frozen=True, slots=True)
class Selection:
    """Currently selected piece and its highlighted destinations."""

    selected: Position | None = None
    valid_moves: tuple[Position, ...] = ()
    blocked_moves: tuple[Position, ...] = ()


NO_SELECTION = Selection()


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything a collaborator may know about a game at one instant."""

    board: tuple[tuple[Square, ...], ...]
    current_turn: Color
    selected_piece: Position | None
    valid_moves: tuple[Position, ...]
    blocked_moves: tuple[Position, ...]
    in_check: Color | None
    checkmate: Color | None
    last_move: LastMove | None
    variant: GameVariant
    remaining_moves: int
    waiting_for_coin_toss: bool
    waiting_for_dice_roll: bool
    last_dice_roll: DiceRoll | None
    last_coin_toss: CoinToss | None
    pending_promotion: Position | None
    phase: GamePhase

    def piece_at(self, pos: Position) -> Piece | None:
        return self.board[pos.row][pos.col].piece

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (names are lowercase strings)."""
        return {
            "board": [[_piece_to_dict(sq.piece) for sq in row] for row in self.board],
            "current_turn": str(self.current_turn),
            "selected_piece": _pos_to_dict(self.selected_piece),
            "valid_moves": [_pos_to_dict(p) for p in self.valid_moves],
            "blocked_moves": [_pos_to_dict(p) for p in self.blocked_moves],
            "in_check": _color_to_str(self.in_check),
            "checkmate": _color_to_str(self.checkmate),
            "last_move": _last_move_to_dict(self.last_move),
            "variant": self.variant.value,
            "remaining_moves": self.remaining_moves,
            "waiting_for_coin_toss": self.waiting_for_coin_toss,
            "waiting_for_dice_roll": self.waiting_for_dice_roll,
            "last_dice_roll": _dice_roll_to_dict(self.last_dice_roll),
            "last_coin_toss": (
                None
                if self.last_coin_toss is None
                else {"result": str(self.last_coin_toss.result)}
            ),
            "pending_promotion": _pos_to_dict(self.pending_promotion),
            "phase": self.phase.name.lower(),
        }


def _color_to_str(color: Color | None) -> str | None:
    return None if color is None else str(color)


def _pos_to_dict(pos: Position | None) -> dict[str, int] | None:
    if pos is None:
        return None
    return {"row": pos.row, "col": pos.col}


def _piece_to_dict(piece: Piece | None) -> dict[str, Any] | None:
    if piece is None:
        return None
    return {
        "type": str(piece.piece_type),
        "color": str(piece.color),
        "has_moved": piece.has_moved,
    }


def _last_move_to_dict(move: LastMove | None) -> dict[str, Any] | None:
    if move is None:
        return None
    return {
        "from": _pos_to_dict(move.from_pos),
        "to": _pos_to_dict(move.to_pos),
        "piece": _piece_to_dict(move.piece),
    }


def _dice_roll_to_dict(roll: DiceRoll | None) -> dict[str, Any] | None:
    if roll is None:
        return None
    return {
        "value": roll.value,
        "moves_granted": roll.moves_granted,
        "player": str(roll.player),
    }
