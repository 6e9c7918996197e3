"""Database-backed ledger store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from django.db import transaction

from ethpool.apps.pool.models import PoolAccount, PoolLedger
from .stores import Account, LedgerStore, PoolState


class DjangoLedgerStore(LedgerStore):
    """
    Keeps PoolState in the singleton PoolLedger row and accounts in PoolAccount.

    transaction() opens an atomic block and takes a row lock on PoolLedger,
    so every ledger call is serialized across threads and processes. The
    lock is taken before anything else is read.
    """

    @contextmanager
    def transaction(self):
        with transaction.atomic():
            PoolLedger.objects.select_for_update().get_or_create(pk=PoolLedger.SINGLETON_ID)
            yield

    def load_pool(self) -> PoolState:
        row = PoolLedger.objects.get(pk=PoolLedger.SINGLETON_ID)
        return PoolState(
            total_staked=int(row.total_staked),
            acc_reward_per_share=int(row.acc_reward_per_share),
        )

    def save_pool(self, pool: PoolState) -> None:
        PoolLedger.objects.filter(pk=PoolLedger.SINGLETON_ID).update(
            total_staked=pool.total_staked,
            acc_reward_per_share=pool.acc_reward_per_share,
        )

    def load_account(self, address: str) -> Account:
        row = PoolAccount.objects.filter(address=address).first()
        if row is None:
            return Account(address=address)
        return Account(
            address=address,
            principal=int(row.principal),
            reward_debt=int(row.reward_debt),
        )

    def save_account(self, account: Account) -> None:
        if account.is_empty:
            PoolAccount.objects.filter(address=account.address).delete()
            return
        PoolAccount.objects.update_or_create(
            address=account.address,
            defaults={
                "principal": account.principal,
                "reward_debt": account.reward_debt,
            },
        )

    def iter_accounts(self) -> Iterator[Account]:
        rows = PoolAccount.objects.filter(principal__gt=0).order_by("address")
        for row in rows:
            yield Account(
                address=row.address,
                principal=int(row.principal),
                reward_debt=int(row.reward_debt),
            )
