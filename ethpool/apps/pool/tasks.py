from __future__ import annotations

import logging

from celery import shared_task
from django.db.models import Sum
from django.utils import timezone

from ethpool.apps.pool.models import (
    PoolDeposit,
    PoolReward,
    PoolSnapshot,
    PoolWithdrawal,
)
from ethpool.apps.pool.services import get_ledger

logger = logging.getLogger(__name__)


def total_value_held() -> int:
    """Deposits plus rewards minus everything paid out, from the audit rows."""
    deposits = PoolDeposit.objects.aggregate(s=Sum("amount"))["s"] or 0
    rewards = PoolReward.objects.aggregate(s=Sum("amount"))["s"] or 0
    paid = PoolWithdrawal.objects.aggregate(
        p=Sum("principal_out"), r=Sum("reward_out")
    )
    withdrawn = (paid["p"] or 0) + (paid["r"] or 0)
    return int(deposits) + int(rewards) - int(withdrawn)


@shared_task(queue="pool")
def snapshot_pool() -> dict:
    """
    Store a PoolSnapshot of the current totals.
    Scheduled by Celery beat every POOL_SNAPSHOT_INTERVAL seconds.
    """
    ledger = get_ledger()
    state = ledger.pool_state()
    accounts = len(ledger.accounts())
    held = total_value_held()

    snap = PoolSnapshot.objects.create(
        at=timezone.now(),
        total_pool=held,
        total_staked=state.total_staked,
        acc_reward_per_share=state.acc_reward_per_share,
        accounts=accounts,
    )
    logger.info(
        f"[Pool] Snapshot at {snap.at.isoformat()}: staked={state.total_staked} "
        f"held={held} accounts={accounts}"
    )
    return {
        "at": snap.at.isoformat(),
        "total_pool": held,
        "total_staked": state.total_staked,
        "acc_reward_per_share": str(state.acc_reward_per_share),
        "accounts": accounts,
    }
