from django.http import JsonResponse
from django.views.decorators.http import require_GET

from ethpool.apps.pool.services import get_ledger


@require_GET
def pool_status_view(request):
    """Pool totals. The accumulator is returned as a string; it outgrows JS numbers."""
    ledger = get_ledger()
    state = ledger.pool_state()
    return JsonResponse(
        {
            "total_staked": str(state.total_staked),
            "acc_reward_per_share": str(state.acc_reward_per_share),
            "scale": str(ledger.scale),
        }
    )


@require_GET
def account_status_view(request, address: str):
    address = address.strip()
    if not address:
        return JsonResponse({"error": "address is required"}, status=400)

    ledger = get_ledger()
    return JsonResponse(
        {
            "account": address,
            "staked": str(ledger.staked_balance(address)),
            "pending_reward": str(ledger.pending_reward(address)),
        }
    )
