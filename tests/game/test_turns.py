"""Tests for the per-variant turn policies."""

import pytest

from chancechess.core.enums import Color, GameVariant
from chancechess.game.chance import CoinToss, DiceRoll
from chancechess.game.turns import (
    ClassicTurns,
    CoinTossTurns,
    DiceTurns,
    TurnState,
    apply_coin_toss,
    apply_dice_roll,
    policy_for,
)


class TestPolicyLookup:
    @pytest.mark.parametrize(
        ("variant", "cls"),
        [
            (GameVariant.CLASSIC, ClassicTurns),
            (GameVariant.COIN_TOSS, CoinTossTurns),
            (GameVariant.DICE, DiceTurns),
            ("dice", DiceTurns),
        ],
    )
    def test_policy_for(self, variant: GameVariant, cls: type) -> None:
        assert isinstance(policy_for(variant), cls)

    def test_unknown_variant(self) -> None:
        with pytest.raises(ValueError):
            policy_for("checkers")  # type: ignore[arg-type]


class TestClassicTurns:
    def test_initial(self) -> None:
        turn = ClassicTurns().initial()
        assert turn == TurnState(current_turn=Color.WHITE, remaining_moves=1)

    def test_alternates(self) -> None:
        policy = ClassicTurns()
        turn = policy.advance(policy.initial(), Color.WHITE)
        assert turn.current_turn == Color.BLACK
        assert policy.can_move(turn)

    def test_check_override(self) -> None:
        policy = ClassicTurns()
        turn = policy.on_check(policy.advance(policy.initial(), Color.WHITE), Color.WHITE)
        assert turn.current_turn == Color.BLACK


class TestCoinTossTurns:
    def test_initial_waits(self) -> None:
        policy = CoinTossTurns()
        turn = policy.initial()
        assert turn.waiting_for_coin_toss
        assert not policy.can_move(turn)

    def test_toss_then_move_then_wait(self) -> None:
        policy = CoinTossTurns()
        turn = apply_coin_toss(policy.initial(), CoinToss(Color.BLACK))
        assert turn.current_turn == Color.BLACK
        assert turn.last_coin_toss == CoinToss(Color.BLACK)
        assert policy.can_move(turn)
        turn = policy.advance(turn, Color.BLACK)
        assert turn.waiting_for_coin_toss
        assert turn.current_turn == Color.BLACK

    def test_check_suspends_toss(self) -> None:
        policy = CoinTossTurns()
        turn = apply_coin_toss(policy.initial(), CoinToss(Color.WHITE))
        turn = policy.on_check(policy.advance(turn, Color.WHITE), Color.WHITE)
        assert not turn.waiting_for_coin_toss
        assert turn.current_turn == Color.BLACK
        assert policy.can_move(turn)


class TestDiceTurns:
    def test_initial_waits(self) -> None:
        policy = DiceTurns()
        turn = policy.initial()
        assert turn.waiting_for_dice_roll
        assert not policy.can_move(turn)

    def test_counts_down_then_waits(self) -> None:
        policy = DiceTurns()
        turn = apply_dice_roll(policy.initial(), DiceRoll.from_value(3))
        assert (turn.current_turn, turn.remaining_moves) == (Color.WHITE, 3)
        for expected in (2, 1):
            turn = policy.advance(turn, Color.WHITE)
            assert turn.remaining_moves == expected
            assert not turn.waiting_for_dice_roll
            assert turn.current_turn == Color.WHITE
        turn = policy.advance(turn, Color.WHITE)
        assert turn.remaining_moves == 0
        assert turn.waiting_for_dice_roll
        assert not policy.can_move(turn)

    def test_check_grants_single_reply(self) -> None:
        policy = DiceTurns()
        turn = apply_dice_roll(policy.initial(), DiceRoll.from_value(2))
        turn = policy.on_check(policy.advance(turn, Color.WHITE), Color.WHITE)
        assert turn.current_turn == Color.BLACK
        assert turn.remaining_moves == 1
        assert not turn.waiting_for_dice_roll
        assert policy.can_move(turn)

    def test_last_roll_recorded(self) -> None:
        roll = DiceRoll.from_value(4)
        turn = apply_dice_roll(DiceTurns().initial(), roll)
        assert turn.last_dice_roll == roll
