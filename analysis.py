# analysis.py
from typing import Iterable, List, NamedTuple

import pandas as pd

from models import Transaction, TransactionType

ALL_TYPES = "all"
COLUMNS = ["id", "date", "description", "category", "type", "amount", "timestamp"]


class Totals(NamedTuple):
    income: float
    expense: float
    balance: float


def filter_by_type(txs: Iterable[Transaction], tx_type: str = ALL_TYPES) -> List[Transaction]:
    if tx_type == ALL_TYPES:
        return list(txs)
    return [t for t in txs if t.type == tx_type]


def filter_by_search(txs: Iterable[Transaction], term: str = "") -> List[Transaction]:
    needle = (term or "").lower()
    if not needle:
        return list(txs)
    return [t for t in txs if needle in t.description.lower() or needle in t.category.lower()]


def apply_filters(txs: Iterable[Transaction], tx_type: str = ALL_TYPES, term: str = "") -> List[Transaction]:
    return filter_by_search(filter_by_type(txs, tx_type), term)


def aggregate(txs: Iterable[Transaction]) -> Totals:
    """
    Income and expense totals in one pass. Entries whose type is neither
    income nor expense (possible after an import) count towards neither.
    """
    income = 0.0
    expense = 0.0
    for t in txs:
        if t.type == TransactionType.INCOME.value:
            income += t.amount
        elif t.type == TransactionType.EXPENSE.value:
            expense += t.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def txs_to_df(txs: Iterable[Transaction]) -> pd.DataFrame:
    df = pd.DataFrame([t.to_dict() for t in txs], columns=COLUMNS)
    df["amount"] = df["amount"].astype(float)
    return df


def category_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Amount per (type, category), largest first."""
    if df.empty:
        return pd.DataFrame(columns=["type", "category", "amount"])
    out = df.groupby(["type", "category"], as_index=False)["amount"].sum()
    return out.sort_values("amount", ascending=False).reset_index(drop=True)
