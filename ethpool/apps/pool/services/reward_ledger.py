"""
Pooled staking reward ledger.

Participants deposit principal, the operator distributes rewards, and each
participant withdraws principal plus its share of every reward distributed
while that principal was staked.

Rewards are tracked with a reward-per-share accumulator scaled by ``SCALE``.
Each account keeps a reward debt: the part of ``principal * acc / SCALE``
already settled at its last principal change. The difference between the two
is the reward accrued since then, so no call ever walks over other accounts
or over past rewards.

    pending = principal * acc_reward_per_share // SCALE - reward_debt

Integer division truncates. The remainder dropped when a reward is spread
over the pool is never redistributed; it stays behind as rounding slack.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ethpool.apps.pool import events
from ethpool.apps.pool.events import DepositEvent, RewardEvent, WithdrawEvent
from ethpool.apps.pool.exceptions import (
    InvalidAmountError,
    NoBalanceError,
    NoStakeError,
)
from .access import OperatorAccess
from .stores import Account, InMemoryLedgerStore, LedgerStore, PoolState
from .treasury import Treasury

logger = logging.getLogger(__name__)

SCALE = 10**18


def _check_amount(amount) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise InvalidAmountError(f"amount must be positive, got {amount}")
    return amount


class RewardLedger:
    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        access: Optional[OperatorAccess] = None,
        treasury: Optional[Treasury] = None,
        scale: int = SCALE,
    ):
        if isinstance(scale, bool) or not isinstance(scale, int) or scale <= 0:
            raise ValueError(f"scale must be a positive integer, got {scale!r}")
        self.store = store or InMemoryLedgerStore()
        self.access = access
        self.treasury = treasury
        self.scale = scale

    # ------------------------------------------------------------
    # Accounting helpers (call inside a store transaction)
    # ------------------------------------------------------------

    def _accrued(self, principal: int, pool: PoolState) -> int:
        return principal * pool.acc_reward_per_share // self.scale

    def _pending(self, account: Account, pool: PoolState) -> int:
        return self._accrued(account.principal, pool) - account.reward_debt

    # ------------------------------------------------------------
    # Mutations
    #
    # Each call saves state and sends its event before moving funds, all
    # inside the store transaction. Anything raising rolls the call back;
    # the treasury is reached only after everything else has succeeded.
    # ------------------------------------------------------------

    def deposit(self, account: str, amount: int) -> DepositEvent:
        """Stake ``amount`` for ``account``, keeping its unclaimed reward."""
        _check_amount(amount)

        with self.store.transaction():
            pool = self.store.load_pool()
            acc = self.store.load_account(account)

            pending = self._pending(acc, pool)
            acc.principal += amount
            acc.reward_debt = self._accrued(acc.principal, pool) - pending
            pool.total_staked += amount

            self.store.save_account(acc)
            self.store.save_pool(pool)

            event = DepositEvent(account=account, amount=amount)
            events.emit(type(self.store), event)
            if self.treasury is not None:
                self.treasury.receive(account, amount)

        logger.info(f"[Pool] Deposit {amount} from {account} (staked={acc.principal})")
        return event

    def distribute_reward(self, amount: int, caller: Optional[str] = None) -> RewardEvent:
        """
        Spread ``amount`` over everything staked right now.

        Raises UnauthorizedError (when access control is configured and
        ``caller`` is not the operator), InvalidAmountError, or NoStakeError
        when nothing is staked.
        """
        if self.access is not None:
            self.access.require_operator(caller)
        _check_amount(amount)

        with self.store.transaction():
            pool = self.store.load_pool()
            if pool.total_staked <= 0:
                logger.warning(f"[Pool] Reward of {amount} rejected: nothing staked")
                raise NoStakeError("no participants to receive reward")

            pool.acc_reward_per_share += amount * self.scale // pool.total_staked
            self.store.save_pool(pool)

            event = RewardEvent(amount=amount)
            events.emit(type(self.store), event)
            if self.treasury is not None:
                self.treasury.receive(caller or "", amount)

        logger.info(
            f"[Pool] Reward {amount} over {pool.total_staked} staked "
            f"(acc={pool.acc_reward_per_share})"
        )
        return event

    def withdraw(self, account: str) -> WithdrawEvent:
        """Pay out the whole principal of ``account`` plus its pending reward."""
        with self.store.transaction():
            pool = self.store.load_pool()
            acc = self.store.load_account(account)
            if acc.principal <= 0:
                logger.warning(f"[Pool] Withdraw rejected for {account}: no balance")
                raise NoBalanceError("nothing to withdraw")

            principal = acc.principal
            reward = self._pending(acc, pool)
            total = principal + reward

            pool.total_staked -= principal
            acc.principal = 0
            acc.reward_debt = 0
            self.store.save_account(acc)
            self.store.save_pool(pool)

            event = WithdrawEvent(
                account=account,
                principal_withdrawn=principal,
                reward_withdrawn=reward,
                total_paid=total,
            )
            events.emit(type(self.store), event)
            if self.treasury is not None:
                self.treasury.pay(account, total)

        logger.info(
            f"[Pool] Withdraw {total} to {account} "
            f"(principal={principal}, reward={reward})"
        )
        return event

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def staked_balance(self, account: str) -> int:
        with self.store.transaction():
            return self.store.load_account(account).principal

    def pending_reward(self, account: str) -> int:
        with self.store.transaction():
            return self._pending(self.store.load_account(account), self.store.load_pool())

    def total_staked(self) -> int:
        with self.store.transaction():
            return self.store.load_pool().total_staked

    def acc_reward_per_share(self) -> int:
        with self.store.transaction():
            return self.store.load_pool().acc_reward_per_share

    def pool_state(self) -> PoolState:
        with self.store.transaction():
            return self.store.load_pool()

    def accounts(self) -> List[Account]:
        """Live accounts, for reporting. Never used by the accounting itself."""
        with self.store.transaction():
            return list(self.store.iter_accounts())
