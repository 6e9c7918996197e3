# ethpool/apps/pool/models.py
import uuid
from django.db import models

# uint256-sized integers; decimal_places=0 keeps them exact on Postgres
AMOUNT = dict(max_digits=78, decimal_places=0)


class PoolLedger(models.Model):
    """Singleton row holding the pool totals. Locked for every ledger call."""
    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    total_staked = models.DecimalField(default=0, **AMOUNT)
    acc_reward_per_share = models.DecimalField(default=0, **AMOUNT)  # scaled by POOL_REWARD_SCALE
    updated_at = models.DateTimeField(auto_now=True)


class PoolAccount(models.Model):
    """Each depositor's principal and reward debt. Rows with no principal are deleted."""
    address = models.CharField(max_length=128, unique=True)
    principal = models.DecimalField(default=0, **AMOUNT)  # wei-like minor unit
    reward_debt = models.DecimalField(default=0, **AMOUNT)
    updated_at = models.DateTimeField(auto_now=True)


class PoolDeposit(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    address = models.CharField(max_length=128, db_index=True)
    amount = models.DecimalField(**AMOUNT)
    created_at = models.DateTimeField(auto_now_add=True)


class PoolReward(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    amount = models.DecimalField(**AMOUNT)
    created_at = models.DateTimeField(auto_now_add=True)


class PoolWithdrawal(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    address = models.CharField(max_length=128, db_index=True)
    principal_out = models.DecimalField(**AMOUNT)
    reward_out = models.DecimalField(default=0, **AMOUNT)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def total_out(self):
        return self.principal_out + self.reward_out


class PoolSnapshot(models.Model):
    """Periodic snapshot (Celery beat) for reporting & reconciliation."""
    at = models.DateTimeField(primary_key=True)
    total_pool = models.DecimalField(**AMOUNT)
    total_staked = models.DecimalField(**AMOUNT)
    acc_reward_per_share = models.DecimalField(**AMOUNT)
    accounts = models.PositiveIntegerField(default=0)
