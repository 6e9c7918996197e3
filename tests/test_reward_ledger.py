"""
Tests for RewardLedger on the in-memory store.

Scenarios follow the pool's reference cases: two depositors (A, B) and the
team distributing rewards.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from ethpool.apps.pool.events import (
    DepositEvent,
    RewardEvent,
    WithdrawEvent,
    deposited,
    reward_distributed,
    withdrawn,
)
from ethpool.apps.pool.exceptions import (
    InvalidAmountError,
    NoBalanceError,
    NoStakeError,
    PoolError,
    UnauthorizedError,
)
from ethpool.apps.pool.services import InMemoryLedgerStore, RewardLedger, SCALE

from .conftest import OPERATOR


class TestScenarios:
    def test_case_1_no_one_is_late(self, ledger):
        ledger.deposit("A", 100)
        ledger.deposit("B", 300)
        ledger.distribute_reward(200, caller=OPERATOR)

        assert ledger.withdraw("A") == WithdrawEvent("A", 100, 50, 150)
        assert ledger.withdraw("B") == WithdrawEvent("B", 300, 150, 450)

    def test_case_2_b_is_late(self, ledger):
        ledger.deposit("A", 100)
        ledger.distribute_reward(200, caller=OPERATOR)
        ledger.deposit("B", 300)

        assert ledger.withdraw("A") == WithdrawEvent("A", 100, 200, 300)
        assert ledger.withdraw("B") == WithdrawEvent("B", 300, 0, 300)

    def test_case_3_complex(self, ledger):
        ledger.deposit("A", 100)
        ledger.distribute_reward(200, caller=OPERATOR)
        ledger.deposit("A", 100)
        ledger.deposit("B", 300)
        ledger.distribute_reward(500, caller=OPERATOR)
        ledger.deposit("B", 300)

        assert ledger.withdraw("A") == WithdrawEvent("A", 200, 400, 600)
        assert ledger.withdraw("B") == WithdrawEvent("B", 600, 300, 900)
        assert ledger.total_staked() == 0


class TestDeposit:
    def test_deposit_updates_balances(self, ledger):
        event = ledger.deposit("A", 100)

        assert event == DepositEvent(account="A", amount=100)
        assert ledger.staked_balance("A") == 100
        assert ledger.total_staked() == 100
        assert ledger.pending_reward("A") == 0

    def test_second_deposit_keeps_pending_reward(self, ledger):
        ledger.deposit("A", 100)
        ledger.distribute_reward(200, caller=OPERATOR)
        ledger.deposit("A", 50)

        assert ledger.staked_balance("A") == 150
        assert ledger.pending_reward("A") == 200

    @pytest.mark.parametrize("amount", [0, -1, 1.5, "10", None, True, Decimal("5")])
    def test_invalid_amount_rejected(self, ledger, amount):
        with pytest.raises(InvalidAmountError):
            ledger.deposit("A", amount)
        assert ledger.total_staked() == 0
        assert ledger.accounts() == []

    def test_treasury_receives_deposit(self, ledger, treasury):
        ledger.deposit("A", 100)
        ledger.deposit("B", 25)
        assert treasury.received == 125
        assert treasury.balance == 125

    def test_failed_transfer_leaves_state_untouched(self, treasury):
        class BouncingTreasury(type(treasury)):
            def receive(self, source, amount):
                raise Bounced(source)

        ledger = RewardLedger(treasury=BouncingTreasury())
        with pytest.raises(Bounced):
            ledger.deposit("A", 100)
        assert ledger.staked_balance("A") == 0
        assert ledger.total_staked() == 0


class TestDistributeReward:
    def test_only_operator_can_reward(self, ledger):
        ledger.deposit("A", 100)
        with pytest.raises(UnauthorizedError):
            ledger.distribute_reward(100, caller="A")
        with pytest.raises(UnauthorizedError):
            ledger.distribute_reward(100)
        assert ledger.acc_reward_per_share() == 0

    def test_authorization_checked_before_amount(self, ledger):
        with pytest.raises(UnauthorizedError):
            ledger.distribute_reward(0, caller="A")

    def test_reward_without_stake_rejected(self, ledger, treasury):
        with pytest.raises(NoStakeError, match="no participants"):
            ledger.distribute_reward(100, caller=OPERATOR)
        assert ledger.acc_reward_per_share() == 0
        assert treasury.received == 0

    def test_reward_after_everyone_left_rejected(self, ledger):
        ledger.deposit("A", 100)
        ledger.withdraw("A")
        with pytest.raises(NoStakeError):
            ledger.distribute_reward(100, caller=OPERATOR)

    @pytest.mark.parametrize("amount", [0, -5, 2.0])
    def test_invalid_reward_amount(self, ledger, amount):
        ledger.deposit("A", 100)
        with pytest.raises(InvalidAmountError):
            ledger.distribute_reward(amount, caller=OPERATOR)
        assert ledger.acc_reward_per_share() == 0

    def test_accumulator_is_scaled_and_truncated(self, ledger):
        ledger.deposit("A", 3)
        event = ledger.distribute_reward(1, caller=OPERATOR)

        assert event == RewardEvent(amount=1)
        assert ledger.acc_reward_per_share() == SCALE // 3
        # 3 * floor(SCALE / 3) // SCALE == 0: the single unit stays as slack
        assert ledger.pending_reward("A") == 0

    def test_open_ledger_has_no_access_check(self, open_ledger):
        open_ledger.deposit("A", 10)
        open_ledger.distribute_reward(10, caller="anyone")
        assert open_ledger.pending_reward("A") == 10

    def test_all_errors_share_a_base(self):
        for exc in (InvalidAmountError, NoStakeError, NoBalanceError, UnauthorizedError):
            assert issubclass(exc, PoolError)


class TestWithdraw:
    def test_withdraw_without_balance_fails(self, ledger):
        with pytest.raises(NoBalanceError, match="nothing to withdraw"):
            ledger.withdraw("A")

    def test_second_withdraw_fails_and_keeps_state(self, ledger):
        ledger.deposit("A", 100)
        ledger.deposit("B", 100)
        ledger.withdraw("A")
        before = ledger.pool_state()

        with pytest.raises(NoBalanceError):
            ledger.withdraw("A")
        assert ledger.pool_state() == before

    def test_withdraw_resets_account(self, ledger, treasury):
        ledger.deposit("A", 100)
        ledger.distribute_reward(40, caller=OPERATOR)
        event = ledger.withdraw("A")

        assert event.total_paid == 140
        assert ledger.staked_balance("A") == 0
        assert ledger.pending_reward("A") == 0
        assert ledger.accounts() == []
        assert treasury.payouts == {"A": 140}
        assert treasury.balance == 0

    def test_redeposit_starts_fresh_window(self, ledger):
        ledger.deposit("A", 100)
        ledger.deposit("B", 100)
        ledger.distribute_reward(100, caller=OPERATOR)
        ledger.withdraw("A")
        ledger.distribute_reward(100, caller=OPERATOR)
        ledger.deposit("A", 100)

        assert ledger.pending_reward("A") == 0
        ledger.distribute_reward(100, caller=OPERATOR)
        assert ledger.withdraw("A") == WithdrawEvent("A", 100, 50, 150)
        assert ledger.withdraw("B") == WithdrawEvent("B", 100, 200, 300)


class TestQueries:
    def test_unknown_account_reads_as_zero(self, ledger):
        assert ledger.staked_balance("nobody") == 0
        assert ledger.pending_reward("nobody") == 0

    def test_accounts_lists_live_accounts_sorted(self, ledger):
        ledger.deposit("B", 300)
        ledger.deposit("A", 100)
        ledger.deposit("C", 5)
        ledger.withdraw("C")

        assert [(a.address, a.principal) for a in ledger.accounts()] == [
            ("A", 100),
            ("B", 300),
        ]

    def test_pool_state_is_a_copy(self, ledger):
        ledger.deposit("A", 100)
        state = ledger.pool_state()
        state.total_staked = 0
        assert ledger.total_staked() == 100


class TestEvents:
    def test_events_sent_in_order_with_store_as_sender(self, ledger):
        received = []

        def listener(sender, event, **kwargs):
            received.append((sender, event))

        for sig in (deposited, reward_distributed, withdrawn):
            sig.connect(listener)
        try:
            ledger.deposit("A", 100)
            ledger.distribute_reward(20, caller=OPERATOR)
            ledger.withdraw("A")
        finally:
            for sig in (deposited, reward_distributed, withdrawn):
                sig.disconnect(listener)

        assert [s for s, _ in received] == [InMemoryLedgerStore] * 3
        assert [e.as_dict() for _, e in received] == [
            {"event": "Deposit", "account": "A", "amount": 100},
            {"event": "Reward", "amount": 20},
            {
                "event": "Withdraw",
                "account": "A",
                "principal_withdrawn": 100,
                "reward_withdrawn": 20,
                "total_paid": 120,
            },
        ]

    def test_failed_call_sends_nothing(self, ledger):
        received = []

        def listener(sender, event, **kwargs):
            received.append(event)

        withdrawn.connect(listener)
        try:
            with pytest.raises(NoBalanceError):
                ledger.withdraw("A")
        finally:
            withdrawn.disconnect(listener)
        assert received == []


class Bounced(Exception):
    pass


class TestAtomicity:
    def test_failing_receiver_leaves_no_state_change(self, ledger, treasury):
        def boom(sender, event, **kwargs):
            raise RuntimeError("sink down")

        deposited.connect(boom)
        try:
            with pytest.raises(RuntimeError, match="sink down"):
                ledger.deposit("A", 100)
        finally:
            deposited.disconnect(boom)

        assert ledger.staked_balance("A") == 0
        assert ledger.total_staked() == 0
        assert ledger.accounts() == []
        assert treasury.received == 0

    def test_failing_receiver_keeps_withdrawn_account(self, ledger, treasury):
        ledger.deposit("A", 100)
        ledger.distribute_reward(30, caller=OPERATOR)

        def boom(sender, event, **kwargs):
            raise RuntimeError("sink down")

        withdrawn.connect(boom)
        try:
            with pytest.raises(RuntimeError):
                ledger.withdraw("A")
        finally:
            withdrawn.disconnect(boom)

        assert ledger.staked_balance("A") == 100
        assert ledger.pending_reward("A") == 30
        assert ledger.total_staked() == 100
        assert treasury.paid == 0

    def test_failed_payout_rolls_back_withdraw(self, treasury):
        class BouncingTreasury(type(treasury)):
            def pay(self, target, amount):
                raise Bounced(target)

        bouncing = BouncingTreasury()
        ledger = RewardLedger(treasury=bouncing)
        ledger.deposit("A", 100)
        ledger.distribute_reward(50)

        with pytest.raises(Bounced):
            ledger.withdraw("A")
        assert ledger.staked_balance("A") == 100
        assert ledger.pending_reward("A") == 50
        assert bouncing.balance == 150

    def test_failed_save_never_reaches_treasury(self, ledger, treasury, monkeypatch):
        ledger.deposit("A", 100)

        def broken(pool):
            raise Bounced("disk full")

        monkeypatch.setattr(ledger.store, "save_pool", broken)
        with pytest.raises(Bounced):
            ledger.withdraw("A")

        assert treasury.paid == 0
        monkeypatch.undo()
        assert ledger.staked_balance("A") == 100

    def test_receiver_can_read_the_ledger(self, ledger):
        seen = []

        def listener(sender, event, **kwargs):
            seen.append(ledger.staked_balance(event.account))

        deposited.connect(listener)
        try:
            ledger.deposit("A", 100)
        finally:
            deposited.disconnect(listener)
        assert seen == [100]


def test_scale_must_be_positive_int():
    with pytest.raises(ValueError):
        RewardLedger(scale=0)
    with pytest.raises(ValueError):
        RewardLedger(scale=1.5)


def test_custom_scale_keeps_scenarios():
    ledger = RewardLedger(scale=10**6)
    ledger.deposit("A", 100)
    ledger.deposit("B", 300)
    ledger.distribute_reward(200)
    assert ledger.withdraw("A").reward_withdrawn == 50
    assert ledger.withdraw("B").reward_withdrawn == 150
