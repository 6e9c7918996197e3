import pytest

from ethpool.apps.pool.services import (
    InMemoryLedgerStore,
    InMemoryTreasury,
    OperatorAccess,
    RewardLedger,
)

OPERATOR = "team"


@pytest.fixture
def treasury():
    return InMemoryTreasury()


@pytest.fixture
def ledger(treasury):
    """In-memory ledger with the default 10**18 scale and 'team' as operator."""
    return RewardLedger(
        store=InMemoryLedgerStore(),
        access=OperatorAccess(OPERATOR),
        treasury=treasury,
    )


@pytest.fixture
def open_ledger():
    """In-memory ledger without access control."""
    return RewardLedger()


@pytest.fixture
def db_ledger(db):
    """Database-backed ledger built from the test settings."""
    from ethpool.apps.pool.services import get_ledger

    return get_ledger()
