from django.core.management.base import BaseCommand

from ethpool.apps.pool.services import get_ledger
from ethpool.apps.pool.tasks import total_value_held


class Command(BaseCommand):
    help = "Show the total value held by the pool and how much of it is staked."

    def handle(self, *args, **options):
        held = total_value_held()
        staked = get_ledger().total_staked()
        self.stdout.write(f"Total held in pool: {held}")
        self.stdout.write(f"Staked principal: {staked}")
        self.stdout.write(f"Unclaimed rewards and rounding slack: {held - staked}")
