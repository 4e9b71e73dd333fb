# viz.py
import matplotlib.pyplot as plt
import pandas as pd

from analysis import Totals


def plot_totals(totals: Totals, ax=None, title="Income, expenses and balance"):
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 4))
    labels = ["Income", "Expense", "Balance"]
    values = [totals.income, totals.expense, totals.balance]
    colors = ["tab:green", "tab:red", "tab:blue" if totals.balance >= 0 else "tab:orange"]
    ax.bar(labels, values, color=colors)
    ax.axhline(0, color="black", linewidth=0.8)
    ax.set_title(title)
    ax.set_ylabel("Amount")
    plt.tight_layout()
    return ax


def plot_category_breakdown(cat_totals: pd.DataFrame, ax=None, title="Amount by category"):
    """Horizontal bars per category, one colour per transaction type."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))
    if cat_totals.empty:
        ax.text(0.5, 0.5, "No transactions", ha="center", va="center", transform=ax.transAxes)
        ax.set_title(title)
        return ax
    pivot = cat_totals.pivot_table(index="category", columns="type", values="amount", aggfunc="sum", fill_value=0)
    pivot.plot.barh(ax=ax)
    ax.set_title(title)
    ax.set_xlabel("Amount")
    ax.set_ylabel("Category")
    plt.tight_layout()
    return ax
