import json

from django.core.management.base import BaseCommand

from ethpool.apps.pool.services import get_ledger


class Command(BaseCommand):
    help = "List every staked account with its principal and pending reward."

    def add_arguments(self, parser):
        parser.add_argument(
            "--json", action="store_true", help="Print one JSON document instead of text lines."
        )

    def handle(self, *args, **options):
        ledger = get_ledger()
        rows = [
            {
                "account": acc.address,
                "staked": acc.principal,
                "reward": ledger.pending_reward(acc.address),
            }
            for acc in ledger.accounts()
        ]

        if options["json"]:
            self.stdout.write(json.dumps(rows, indent=2))
            return

        if not rows:
            self.stdout.write("No staked accounts.")
            return
        for row in rows:
            self.stdout.write(
                f"Address: {row['account']} (Staked: {row['staked']}, reward: {row['reward']})"
            )
