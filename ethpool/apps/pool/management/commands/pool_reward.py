from django.core.management.base import BaseCommand, CommandError

from ethpool.apps.pool.exceptions import PoolError
from ethpool.apps.pool.services import get_ledger


class Command(BaseCommand):
    help = "Distribute a reward over everything currently staked in the pool."

    def add_arguments(self, parser):
        parser.add_argument(
            "--amount",
            dest="amount",
            type=int,
            required=True,
            help="Reward amount in minor units.",
        )
        parser.add_argument(
            "--operator",
            dest="operator",
            required=True,
            help="Address of the caller; must match POOL_OPERATOR_ADDRESS.",
        )

    def handle(self, *args, **options):
        ledger = get_ledger()
        try:
            event = ledger.distribute_reward(options["amount"], caller=options["operator"])
        except PoolError as e:
            raise CommandError(f"reward failed: {e}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Rewarded {event.amount} over {ledger.total_staked()} staked."
            )
        )
