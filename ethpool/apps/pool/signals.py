from django.dispatch import receiver

from ethpool.apps.pool.events import deposited, reward_distributed, withdrawn
from ethpool.apps.pool.services.django_store import DjangoLedgerStore
from .models import PoolDeposit, PoolReward, PoolWithdrawal


# Audit rows are only written for the database-backed ledger, inside its
# atomic block, so they commit or roll back with the ledger row. In-memory
# ledgers publish on the same signals with their own store class as sender.
@receiver(deposited, sender=DjangoLedgerStore, dispatch_uid="pool_record_deposit")
def pool_record_deposit(sender, event, **kwargs):
    PoolDeposit.objects.create(address=event.account, amount=event.amount)


@receiver(reward_distributed, sender=DjangoLedgerStore, dispatch_uid="pool_record_reward")
def pool_record_reward(sender, event, **kwargs):
    PoolReward.objects.create(amount=event.amount)


@receiver(withdrawn, sender=DjangoLedgerStore, dispatch_uid="pool_record_withdrawal")
def pool_record_withdrawal(sender, event, **kwargs):
    """
    Record the payout split into principal and reward, as returned to the
    account by RewardLedger.withdraw.
    """
    PoolWithdrawal.objects.create(
        address=event.account,
        principal_out=event.principal_withdrawn,
        reward_out=event.reward_withdrawn,
    )
