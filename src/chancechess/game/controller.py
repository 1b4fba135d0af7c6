"""GameController: the central orchestrator of a game.

Coordinates: Board, MoveGenerator, Rules and the variant's TurnPolicy.
Emits events via simple callbacks so a UI / persistence layer / tests can
subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from chancechess.core.enums import Color, GameVariant, PieceType
from chancechess.core.move import LastMove
from chancechess.core.move_generator import MoveGenerator, castling_rook_move
from chancechess.core.notation import board_from_placement
from chancechess.core.piece import Piece
from chancechess.core.rules import Rules
from chancechess.core.types import (
    KING_FILE,
    KINGSIDE_KING_TARGET,
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_KING_TARGET,
    QUEENSIDE_ROOK_FILE,
    Position,
    back_rank,
    promotion_rank,
)
from chancechess.game.chance import CoinToss, DiceRoll, roll_die, toss_coin
from chancechess.game.interfaces import GamePhase, GameSettings
from chancechess.game.state import NO_SELECTION, GameSnapshot, Selection
from chancechess.game.turns import (
    TurnState,
    apply_coin_toss,
    apply_dice_roll,
    policy_for,
)

_LOGGER = logging.getLogger(__name__)

_PROMOTION_TYPES: frozenset[PieceType] = frozenset(
    {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[LastMove, GameSnapshot], None]  # move, state after
ColorCallback = Callable[[Color], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[ColorCallback] = field(default_factory=list)
    on_checkmate: list[ColorCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Owns one game: the board, selection, check state and turn state.

    Caller mistakes (off-board squares, illegal moves, calls made in the
    wrong phase) never raise; they return ``False``, a sentinel value or
    simply change nothing.  Only a broken invariant, such as a king
    missing from the board, raises.

    Thread-safety: single-threaded; every call runs to completion.
    """

    __slots__ = (
        "_variant",
        "_settings",
        "_policy",
        "_rng",
        "_board",
        "_turn",
        "_check",
        "_selection",
        "_last_move",
        "_pending_promotion",
        "events",
    )

    def __init__(
        self,
        variant: GameVariant = GameVariant.CLASSIC,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._variant = GameVariant(variant)
        self._settings = settings if settings is not None else GameSettings()
        self._policy = policy_for(self._variant)
        self._rng = rng if rng is not None else random.Random(self._settings.seed)
        self.events = GameEvents()
        self._setup()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def variant(self) -> GameVariant:
        return self._variant

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def phase(self) -> GamePhase:
        if self._check.checkmate is not None:
            return GamePhase.CHECKMATE
        if self._pending_promotion is not None:
            return GamePhase.AWAITING_PROMOTION
        if self._turn.waiting_for_coin_toss:
            return GamePhase.AWAITING_COIN_TOSS
        if self._turn.waiting_for_dice_roll:
            return GamePhase.AWAITING_DICE_ROLL
        return GamePhase.AWAITING_MOVE

    @property
    def state(self) -> GameSnapshot:
        turn = self._turn
        return GameSnapshot(
            board=self._board.squares(),
            current_turn=turn.current_turn,
            selected_piece=self._selection.selected,
            valid_moves=self._selection.valid_moves,
            blocked_moves=self._selection.blocked_moves,
            in_check=self._check.in_check,
            checkmate=self._check.checkmate,
            last_move=self._last_move,
            variant=self._variant,
            remaining_moves=turn.remaining_moves,
            waiting_for_coin_toss=turn.waiting_for_coin_toss,
            waiting_for_dice_roll=turn.waiting_for_dice_roll,
            last_dice_roll=turn.last_dice_roll,
            last_coin_toss=turn.last_coin_toss,
            pending_promotion=self._pending_promotion,
            phase=self.phase,
        )

    def get_state(self) -> GameSnapshot:
        return self.state

    # ── Selection ────────────────────────────────────────────────────────

    def select_piece(self, pos: Position) -> None:
        """Select the mover's piece on *pos* and compute its destinations.

        Anything else (off board, empty, opponent's piece, promotion
        pending) clears the selection.
        """
        if not pos.is_valid or self._pending_promotion is not None:
            self.unselect_piece()
            return

        piece = self._board[pos]
        if piece is None or piece.color != self._turn.current_turn:
            self.unselect_piece()
            return

        gen = self._generator()
        legal = gen.legal_moves(pos)
        valid = legal + [p for p in gen.castling_partners(pos) if p not in legal]
        raw = gen.raw_moves(pos)
        blocked = [p for p in raw.valid + raw.blocked if p not in valid]
        self._selection = Selection(pos, tuple(valid), tuple(blocked))

    def unselect_piece(self) -> None:
        self._selection = NO_SELECTION

    # ── Moves ────────────────────────────────────────────────────────────

    def move_piece(self, from_pos: Position, to_pos: Position) -> bool:
        """Move the piece on *from_pos* to *to_pos* if the rules allow it.

        Castling is requested by moving the king two files (or onto its
        own castling rook, or a corner rook onto its king).
        """
        if not self._may_move(from_pos, to_pos):
            return False

        piece = self._board[from_pos]
        if piece is None or piece.color != self._turn.current_turn:
            _LOGGER.debug("Rejected move %s%s: not the mover's piece", from_pos, to_pos)
            return False

        before = self.phase
        gen = self._generator()

        castle = self._castle_request(from_pos, to_pos, piece)
        if castle is not None and gen.is_castling_possible(*castle):
            self._apply_castle(*castle)
            self._finish_move(piece.color, before)
            return True

        if to_pos not in gen.legal_moves(from_pos):
            _LOGGER.debug("Rejected move %s%s: not legal", from_pos, to_pos)
            return False

        if piece.piece_type == PieceType.PAWN and gen.is_en_passant_possible(
            from_pos, to_pos
        ):
            self._board[Position(from_pos.row, to_pos.col)] = None

        self._last_move = LastMove(from_pos, to_pos, piece)
        self._board.relocate(from_pos, to_pos)
        self._board[to_pos] = piece.moved()

        if piece.piece_type == PieceType.PAWN and to_pos.row == promotion_rank(
            piece.color
        ):
            if self._settings.auto_promote:
                queen = Piece(piece.color, PieceType.QUEEN, has_moved=True)
                self._board[to_pos] = queen
            else:
                self._pending_promotion = to_pos
                self._selection = NO_SELECTION
                self._check = Rules.check_state(self._board, self._last_move)
                self._emit_move()
                self._emit_phase_if_changed(before)
                return True

        self._finish_move(piece.color, before)
        return True

    def promote_pawn(
        self, pos: Position, new_type: PieceType = PieceType.QUEEN
    ) -> bool:
        """Replace the pawn standing on its promotion rank at *pos*.

        Resolving a pending promotion completes the move that reached the
        last rank, so the turn advances only now.
        """
        if not pos.is_valid or new_type not in _PROMOTION_TYPES:
            return False
        pending = self._pending_promotion
        if pending is not None and pos != pending:
            return False

        piece = self._board[pos]
        if (
            piece is None
            or piece.piece_type != PieceType.PAWN
            or pos.row != promotion_rank(piece.color)
        ):
            return False

        before = self.phase
        self._board[pos] = Piece(piece.color, new_type, has_moved=True)

        if pending is not None:
            self._pending_promotion = None
            self._finish_move(piece.color, before)
            return True

        self._check = Rules.check_state(self._board, self._last_move)
        if self._check.in_check is not None:
            self._turn = self._policy.on_check(self._turn, piece.color)
        self._emit_check()
        self._emit_phase_if_changed(before)
        return True

    # ── Chance ───────────────────────────────────────────────────────────

    def roll_dice(self) -> DiceRoll:
        """Roll for the next dice turn; a zero roll means nothing happened."""
        turn = self._turn
        if self._check.in_check is not None or not turn.waiting_for_dice_roll:
            return DiceRoll.skipped(turn.current_turn)

        before = self.phase
        roll = roll_die(self._rng)
        self._turn = apply_dice_roll(turn, roll)
        _LOGGER.info(
            "Rolled %d: %s moves %d time(s)", roll.value, roll.player, roll.moves_granted
        )
        self._emit_phase_if_changed(before)
        return roll

    def toss_coin(self) -> CoinToss:
        """Toss for the next coin turn; returns the current mover when skipped."""
        turn = self._turn
        if self._check.in_check is not None or not turn.waiting_for_coin_toss:
            return CoinToss(turn.current_turn)

        before = self.phase
        toss = toss_coin(self._rng)
        self._turn = apply_coin_toss(turn, toss)
        _LOGGER.info("Coin toss: %s to move", toss.result)
        self._emit_phase_if_changed(before)
        return toss

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset_game(self) -> None:
        """Restore the exact state of a freshly constructed controller."""
        before = self.phase
        self._setup()
        self._emit_phase_if_changed(before)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _setup(self) -> None:
        self._board = board_from_placement(self._settings.start_placement)
        self._turn = self._policy.initial()
        self._selection = NO_SELECTION
        self._last_move = None
        self._pending_promotion = None
        self._check = Rules.check_state(self._board)
        if self._check.in_check is not None:
            self._turn = self._policy.on_check(
                self._turn, self._check.in_check.opposite
            )

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(self._board, self._last_move)

    def _may_move(self, from_pos: Position, to_pos: Position) -> bool:
        reason: str | None = None
        if not (from_pos.is_valid and to_pos.is_valid):
            reason = "off board"
        elif self._check.checkmate is not None:
            reason = "game over"
        elif self._pending_promotion is not None:
            reason = "promotion pending"
        elif not self._policy.can_move(self._turn):
            reason = f"waiting in {self.phase.name}"
        if reason is not None:
            _LOGGER.debug("Rejected move %s%s: %s", from_pos, to_pos, reason)
            return False
        return True

    def _castle_request(
        self, from_pos: Position, to_pos: Position, piece: Piece
    ) -> tuple[Position, Position] | None:
        """(king square, rook square) when the move asks for castling."""
        row = back_rank(piece.color)
        if from_pos.row != row or to_pos.row != row:
            return None

        if piece.piece_type == PieceType.KING and from_pos.col == KING_FILE:
            if to_pos.col in (KINGSIDE_KING_TARGET, KINGSIDE_ROOK_FILE):
                return from_pos, Position(row, KINGSIDE_ROOK_FILE)
            if to_pos.col in (QUEENSIDE_KING_TARGET, QUEENSIDE_ROOK_FILE):
                return from_pos, Position(row, QUEENSIDE_ROOK_FILE)
            return None

        if (
            piece.piece_type == PieceType.ROOK
            and from_pos.col in (KINGSIDE_ROOK_FILE, QUEENSIDE_ROOK_FILE)
            and to_pos.col == KING_FILE
        ):
            return to_pos, from_pos
        return None

    def _apply_castle(self, king_pos: Position, rook_pos: Position) -> None:
        board = self._board
        row = king_pos.row
        if rook_pos.col == KINGSIDE_ROOK_FILE:
            king_to = Position(row, KINGSIDE_KING_TARGET)
        else:
            king_to = Position(row, QUEENSIDE_KING_TARGET)
        rook_from, rook_to = castling_rook_move(row, king_to.col)

        king = board[king_pos]
        rook = board[rook_from]
        assert king is not None and rook is not None

        board.relocate(king_pos, king_to)
        board[king_to] = king.moved()
        board.relocate(rook_from, rook_to)
        board[rook_to] = rook.moved()
        self._last_move = LastMove(king_pos, king_to, king)

    def _finish_move(self, mover: Color, before: GamePhase) -> None:
        """Post-move advancement: check evaluation, then the turn handoff."""
        self._selection = NO_SELECTION
        self._check = Rules.check_state(self._board, self._last_move)

        turn: TurnState = self._policy.advance(self._turn, mover)
        if self._check.in_check is not None:
            turn = self._policy.on_check(turn, mover)
        self._turn = turn

        self._emit_move()
        self._emit_check()
        self._emit_phase_if_changed(before)

    def _emit_move(self) -> None:
        if self._last_move is None:
            return
        snapshot = self.state
        for cb in self.events.on_move:
            cb(self._last_move, snapshot)

    def _emit_check(self) -> None:
        check = self._check
        if check.in_check is None:
            return
        for cb in self.events.on_check:
            cb(check.in_check)
        if check.checkmate is not None:
            _LOGGER.info("Checkmate: %s is mated", check.checkmate)
            for cb in self.events.on_checkmate:
                cb(check.checkmate)

    def _emit_phase_if_changed(self, before: GamePhase) -> None:
        phase = self.phase
        if phase == before:
            return
        for cb in self.events.on_phase_changed:
            cb(phase)
