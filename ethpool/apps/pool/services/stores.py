"""
Ledger state containers.

A store owns the single guarded aggregate the ledger works on: the global
PoolState plus the Account mapping. The ledger only touches either inside
``store.transaction()``, which gives it exclusive access for the whole call.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional


@dataclass
class Account:
    """One participant. A zero account is the same as a missing one."""

    address: str
    principal: int = 0
    reward_debt: int = 0

    @property
    def is_empty(self) -> bool:
        return self.principal == 0 and self.reward_debt == 0


@dataclass
class PoolState:
    total_staked: int = 0
    acc_reward_per_share: int = 0


class LedgerStore(ABC):
    """Storage collaborator for RewardLedger."""

    @abstractmethod
    def transaction(self):
        """
        Context manager holding the ledger-wide exclusive lock. Writes made
        inside it are discarded if the block raises.
        """

    @abstractmethod
    def load_pool(self) -> PoolState: ...

    @abstractmethod
    def save_pool(self, pool: PoolState) -> None: ...

    @abstractmethod
    def load_account(self, address: str) -> Account:
        """Return the account for ``address``, or a zero account if unknown."""

    @abstractmethod
    def save_account(self, account: Account) -> None: ...

    @abstractmethod
    def iter_accounts(self) -> Iterator[Account]:
        """Yield accounts holding principal. Reporting only."""


class InMemoryLedgerStore(LedgerStore):
    """
    Process-local store guarded by one re-entrant lock.

    Writes made inside ``transaction()`` are undone if the block raises, so a
    failed call leaves the store as it found it. A nested ``transaction()``
    joins the outer one.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._pool = PoolState()
        self._accounts: Dict[str, Account] = {}
        # previous values of what the open transaction has overwritten
        self._undo: Optional[Dict[str, Optional[Account]]] = None
        self._undo_pool: Optional[PoolState] = None

    @contextmanager
    def transaction(self):
        with self._lock:
            if self._undo is not None:
                yield
                return
            self._undo = {}
            self._undo_pool = self._pool
            try:
                yield
            except BaseException:
                self._rollback()
                raise
            finally:
                self._undo = None
                self._undo_pool = None

    def _rollback(self) -> None:
        self._pool = self._undo_pool
        for address, previous in self._undo.items():
            if previous is None:
                self._accounts.pop(address, None)
            else:
                self._accounts[address] = previous

    def load_pool(self) -> PoolState:
        return replace(self._pool)

    def save_pool(self, pool: PoolState) -> None:
        self._pool = replace(pool)

    def load_account(self, address: str) -> Account:
        acc = self._accounts.get(address)
        return replace(acc) if acc else Account(address=address)

    def save_account(self, account: Account) -> None:
        if self._undo is not None:
            self._undo.setdefault(account.address, self._accounts.get(account.address))
        if account.is_empty:
            self._accounts.pop(account.address, None)
        else:
            self._accounts[account.address] = replace(account)

    def iter_accounts(self) -> Iterator[Account]:
        live: List[Account] = [
            replace(a) for a in self._accounts.values() if a.principal > 0
        ]
        return iter(sorted(live, key=lambda a: a.address))
