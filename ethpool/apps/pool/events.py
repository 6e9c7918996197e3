"""
Ledger events and the signals they are published on.

Every successful ledger call produces exactly one event record. The ledger
sends it on the matching signal while still inside its store transaction,
with the store class as ``sender`` and the record as the ``event`` keyword:

    deposited           -> DepositEvent
    reward_distributed  -> RewardEvent
    withdrawn           -> WithdrawEvent

Receivers run under the ledger lock, in the order the calls were applied.
A receiver that raises fails the call and rolls it back, together with any
database rows receivers wrote for it. Work that must only happen once the
call has committed belongs in ``transaction.on_commit``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from django.dispatch import Signal

deposited = Signal()
reward_distributed = Signal()
withdrawn = Signal()


@dataclass(frozen=True)
class DepositEvent:
    account: str
    amount: int

    name = "Deposit"

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class RewardEvent:
    amount: int

    name = "Reward"

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class WithdrawEvent:
    account: str
    principal_withdrawn: int
    reward_withdrawn: int
    total_paid: int

    name = "Withdraw"

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **asdict(self)}


SIGNALS = {
    DepositEvent: deposited,
    RewardEvent: reward_distributed,
    WithdrawEvent: withdrawn,
}


def emit(sender, event) -> None:
    """Send ``event`` on its signal. Receiver errors propagate to the caller."""
    SIGNALS[type(event)].send(sender=sender, event=event)
