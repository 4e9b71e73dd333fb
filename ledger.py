# ledger.py
import math
from typing import Iterable, List, Optional, Tuple

from logging_utils import get_logger
from models import Transaction, TransactionType, new_id, now_iso, today_iso
from storage import LedgerRepository

LOGGER = get_logger(__name__)


class Ledger:
    """
    The ordered list of transactions, newest-created first. Every mutation is
    followed by a full save through the repository (write-through). A failed
    save is logged by the repository and the in-memory list stays authoritative.
    """

    def __init__(self, repository: LedgerRepository, transactions: Optional[Iterable[Transaction]] = None):
        self.repository = repository
        self._transactions: List[Transaction] = list(transactions or [])

    @classmethod
    def open(cls, repository: LedgerRepository) -> "Ledger":
        ledger = cls(repository, repository.load())
        LOGGER.debug("Ledger loaded with %s transactions", len(ledger))
        return ledger

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def __len__(self):
        return len(self._transactions)

    def __iter__(self):
        return iter(self.transactions)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for t in self._transactions:
            if t.id == transaction_id:
                return t
        return None

    def add(self, description, amount, type=TransactionType.EXPENSE.value, category="food", date=None) -> Optional[Transaction]:
        """
        Create and prepend a transaction. Returns None, leaving the ledger
        untouched, when the description is empty or the amount is not a number.
        """
        if not description:
            LOGGER.debug("Rejected transaction without description")
            return None
        try:
            value = float(amount)
        except (TypeError, ValueError):
            LOGGER.debug("Rejected transaction with unparsable amount %r", amount)
            return None
        if not math.isfinite(value):
            LOGGER.debug("Rejected transaction with non-finite amount %r", amount)
            return None
        tx = Transaction(
            id=new_id(),
            description=str(description),
            amount=value,
            type=type.value if isinstance(type, TransactionType) else str(type),
            category=str(category),
            date=str(date) if date else today_iso(),
            timestamp=now_iso(),
        )
        self._transactions.insert(0, tx)
        LOGGER.info("Added %s %s (%.2f)", tx.type, tx.id, tx.amount)
        self._persist()
        return tx

    def remove(self, transaction_id: str) -> None:
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.id != transaction_id]
        if len(self._transactions) < before:
            LOGGER.info("Removed transaction %s", transaction_id)
        self._persist()

    def prepend(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        """Put ``transactions`` in front of the ledger as-is; ids are not checked."""
        incoming = list(transactions)
        self._transactions = incoming + self._transactions
        LOGGER.info("Prepended %s transactions", len(incoming))
        self._persist()
        return incoming

    def _persist(self):
        self.repository.save(self._transactions)
