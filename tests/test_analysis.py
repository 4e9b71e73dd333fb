import itertools

import pytest

from analysis import aggregate, apply_filters, category_totals, filter_by_search, filter_by_type, txs_to_df
from models import Transaction


@pytest.fixture
def mixed():
    return [
        Transaction(id="1", description="Coffee", amount=4.5, type="expense", category="food"),
        Transaction(id="2", description="Salary", amount=2000, type="income", category="other"),
        Transaction(id="3", description="Bus pass", amount=60, type="expense", category="transport"),
        Transaction(id="4", description="Food market refund", amount=15, type="income", category="shopping"),
    ]


def test_aggregate_empty_is_zero():
    totals = aggregate([])
    assert totals.income == totals.expense == totals.balance == 0


def test_aggregate_coffee_then_salary(coffee, salary):
    assert aggregate([coffee]) == (0, 4.5, -4.5)
    totals = aggregate([salary, coffee])
    assert totals.income == pytest.approx(2000)
    assert totals.expense == pytest.approx(4.5)
    assert totals.balance == pytest.approx(1995.5)


def test_aggregate_ignores_unknown_types():
    odd = Transaction(description="?", amount=10, type="transfer")
    assert aggregate([odd]) == (0, 0, 0)


def test_balance_is_income_minus_expense(mixed):
    totals = aggregate(mixed)
    assert totals.balance == pytest.approx(totals.income - totals.expense)


def test_filter_by_type(mixed):
    assert filter_by_type(mixed, "all") == mixed
    assert [t.id for t in filter_by_type(mixed, "income")] == ["2", "4"]
    assert [t.id for t in filter_by_type(mixed, "expense")] == ["1", "3"]


def test_search_matches_description_or_category_case_insensitively(mixed):
    assert [t.id for t in filter_by_search(mixed, "FOOD")] == ["1", "4"]
    assert [t.id for t in filter_by_search(mixed, "trans")] == ["3"]
    assert filter_by_search(mixed, "") == mixed


def test_search_cof_returns_coffee(coffee, salary):
    assert apply_filters([salary, coffee], "all", "cof") == [coffee]


def test_filters_commute(mixed):
    for tx_type, term in itertools.product(["all", "income", "expense"], ["", "food", "o", "zzz"]):
        assert filter_by_search(filter_by_type(mixed, tx_type), term) == filter_by_type(filter_by_search(mixed, term), tx_type)


def test_txs_to_df_and_category_totals(mixed):
    df = txs_to_df(mixed)
    assert list(df["id"]) == ["1", "2", "3", "4"]
    cats = category_totals(df)
    assert cats.iloc[0]["category"] == "other"
    assert cats.iloc[0]["amount"] == pytest.approx(2000)
    assert len(cats) == 4


def test_empty_frames():
    df = txs_to_df([])
    assert df.empty
    assert "amount" in df.columns
    assert category_totals(df).empty
