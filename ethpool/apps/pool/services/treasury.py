"""
Value transfer collaborator.

The ledger calls the treasury last inside its transaction, once state is
saved and the event is sent. A failed transfer rolls the call back; a failed
save never reaches the treasury.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict

logger = logging.getLogger(__name__)


class Treasury(ABC):
    """Moves funds in on deposit/reward and out on withdraw."""

    @abstractmethod
    def receive(self, source: str, amount: int) -> None: ...

    @abstractmethod
    def pay(self, target: str, amount: int) -> None: ...


class InMemoryTreasury(Treasury):
    """Keeps running totals of the value held by the pool."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.received = 0
        self.paid = 0
        self.payouts: Dict[str, int] = {}

    def receive(self, source: str, amount: int) -> None:
        with self._lock:
            self.received += amount

    def pay(self, target: str, amount: int) -> None:
        with self._lock:
            self.paid += amount
            self.payouts[target] = self.payouts.get(target, 0) + amount
            balance = self.received - self.paid
        if balance < 0:
            # reward debt is floored, so the last payout can exceed what is
            # held by a few units
            logger.warning(f"[Pool] Treasury overdrawn by {-balance} after paying {target}")

    @property
    def balance(self) -> int:
        return self.received - self.paid
