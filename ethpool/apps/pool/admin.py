from django.contrib import admin
from .models import (
    PoolAccount,
    PoolDeposit,
    PoolLedger,
    PoolReward,
    PoolSnapshot,
    PoolWithdrawal,
)


@admin.register(PoolLedger)
class PoolLedgerAdmin(admin.ModelAdmin):
    list_display = ("id", "total_staked", "acc_reward_per_share", "updated_at")
    # Totals only change through RewardLedger
    readonly_fields = ("total_staked", "acc_reward_per_share", "updated_at")


@admin.register(PoolAccount)
class PoolAccountAdmin(admin.ModelAdmin):
    list_display = ("address", "principal", "reward_debt", "updated_at")
    search_fields = ("address",)
    readonly_fields = ("principal", "reward_debt", "updated_at")


@admin.register(PoolDeposit)
class PoolDepositAdmin(admin.ModelAdmin):
    list_display = ("address", "amount", "created_at")
    search_fields = ("address",)
    date_hierarchy = "created_at"


@admin.register(PoolReward)
class PoolRewardAdmin(admin.ModelAdmin):
    list_display = ("amount", "created_at")
    date_hierarchy = "created_at"


@admin.register(PoolWithdrawal)
class PoolWithdrawalAdmin(admin.ModelAdmin):
    list_display = ("address", "principal_out", "reward_out", "created_at")
    search_fields = ("address",)
    date_hierarchy = "created_at"


@admin.register(PoolSnapshot)
class PoolSnapshotAdmin(admin.ModelAdmin):
    list_display = ("at", "total_pool", "total_staked", "acc_reward_per_share", "accounts")
