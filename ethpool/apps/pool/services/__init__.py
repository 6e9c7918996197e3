"""
Pool services

Provides:
- RewardLedger: the staking reward accounting core
- Ledger stores (in-memory and database-backed)
- Operator access control and the treasury collaborator
"""

from .access import OperatorAccess
from .reward_ledger import SCALE, RewardLedger
from .stores import Account, InMemoryLedgerStore, LedgerStore, PoolState
from .treasury import InMemoryTreasury, Treasury


def get_ledger() -> RewardLedger:
    """Database-backed ledger configured from Django settings."""
    from django.conf import settings
    from .django_store import DjangoLedgerStore

    return RewardLedger(
        store=DjangoLedgerStore(),
        access=OperatorAccess.from_settings(),
        scale=getattr(settings, "POOL_REWARD_SCALE", SCALE),
    )


__all__ = [
    "Account",
    "InMemoryLedgerStore",
    "InMemoryTreasury",
    "LedgerStore",
    "OperatorAccess",
    "PoolState",
    "RewardLedger",
    "SCALE",
    "Treasury",
    "get_ledger",
]
