# models.py

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Any
import uuid

CATEGORIES = ("food", "transport", "utilities", "entertainment", "shopping", "health", "other")


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


def new_id() -> str:
    return str(uuid.uuid4())


def today_iso() -> str:
    return date.today().isoformat()


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _text(value) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Transaction:
    """
    A single income or expense entry. The sign lives in ``type``; ``amount`` is
    always a magnitude. ``date`` is the user-chosen day, ``timestamp`` the
    creation instant, both kept as ISO strings exactly as stored.
    """
    description: str
    amount: float
    type: str = TransactionType.EXPENSE.value
    category: str = "food"
    date: str = field(default_factory=today_iso)
    timestamp: str = field(default_factory=now_iso)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": float(self.amount),
            "type": self.type,
            "category": self.category,
            "date": self.date,
            "timestamp": self.timestamp,
        }

    @staticmethod
    def from_dict(d):
        # imported and stored records are trusted as-is; only the amount is coerced
        if not isinstance(d, dict):
            raise TypeError(f"transaction record must be an object, got {type(d).__name__}")
        return Transaction(
            id=new_id() if d.get("id") is None else str(d["id"]),
            description=_text(d.get("description")),
            amount=0.0 if d.get("amount") is None else float(d["amount"]),
            type=_text(d.get("type")),
            category=_text(d.get("category")),
            date=_text(d.get("date")),
            timestamp=_text(d.get("timestamp")),
        )
