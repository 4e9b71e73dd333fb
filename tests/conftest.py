import matplotlib

matplotlib.use("Agg")

import pytest

from ledger import Ledger
from models import Transaction
from storage import LedgerRepository, MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def repository(store):
    return LedgerRepository(store)


@pytest.fixture
def ledger(repository):
    return Ledger.open(repository)


@pytest.fixture
def coffee():
    return Transaction(
        id="tx-coffee",
        description="Coffee",
        amount=4.5,
        type="expense",
        category="food",
        date="2025-03-01",
        timestamp="2025-03-01T08:00:00+00:00",
    )


@pytest.fixture
def salary():
    return Transaction(
        id="tx-salary",
        description="Salary",
        amount=2000.0,
        type="income",
        category="other",
        date="2025-03-01",
        timestamp="2025-03-01T09:00:00+00:00",
    )
