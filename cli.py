# cli.py
import argparse
import sys
from pathlib import Path

from analysis import ALL_TYPES, aggregate, apply_filters, category_totals, txs_to_df
from config import get_settings
from connectivity import ConnectivityMonitor, ProbeConnectivitySource
from exchange import InvalidDocumentError, import_document, write_export
from ledger import Ledger
from logging_utils import configure_root_logger
from models import CATEGORIES, TransactionType
from storage import open_repository

TYPE_CHOICES = [t.value for t in TransactionType]


def open_ledger(args, settings) -> Ledger:
    return Ledger.open(open_repository(settings, args.data_dir))


def cmd_add(args, ledger, settings):
    tx = ledger.add(args.description, args.amount, type=args.type, category=args.category, date=args.date)
    if tx is None:
        print("Nothing added: a description and a numeric amount are required.", file=sys.stderr)
        return 1
    print(f"Saved: {tx.id} {tx.type} {tx.amount:.2f} {tx.description}")
    return 0


def cmd_list(args, ledger, settings):
    txs = apply_filters(ledger.transactions, args.type, args.search)
    if not txs:
        print("No transactions found.")
        return 0
    df = txs_to_df(txs).drop(columns=["timestamp"])
    print(df.to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    return 0


def cmd_remove(args, ledger, settings):
    if ledger.get(args.id) is None:
        print(f"No transaction with id {args.id}")
    ledger.remove(args.id)
    return 0


def cmd_stats(args, ledger, settings):
    totals = aggregate(ledger.transactions)
    print(f"Income:  {totals.income:,.2f}")
    print(f"Expense: {totals.expense:,.2f}")
    print(f"Balance: {totals.balance:,.2f}")
    return 0


def cmd_export(args, ledger, settings):
    path = write_export(ledger.transactions, args.directory)
    print(f"Exported {len(ledger)} transactions to {path}")
    return 0


def cmd_import(args, ledger, settings):
    try:
        text = Path(args.file).read_bytes()
        imported = import_document(ledger, text)
    except (OSError, InvalidDocumentError) as e:
        print(f"Error importing file. Please check the file format. ({e})", file=sys.stderr)
        return 1
    print(f"Imported {len(imported)} transactions.")
    return 0


def cmd_show(args, ledger, settings):
    import matplotlib.pyplot as plt
    from viz import plot_category_breakdown, plot_totals

    if not len(ledger):
        print("No transactions yet.")
        return 0
    plot_totals(aggregate(ledger.transactions))
    plot_category_breakdown(category_totals(txs_to_df(ledger.transactions)))
    plt.show()
    return 0


def cmd_status(args, ledger, settings):
    with ConnectivityMonitor(ProbeConnectivitySource.from_settings(settings)) as monitor:
        print(monitor.status)
    return 0


def build_parser():
    p = argparse.ArgumentParser("budgeter")
    p.add_argument("--data-dir", default=None, help="Directory holding transactions.json (overrides TRACKER_DATA_DIRECTORY).")
    sub = p.add_subparsers(dest="cmd")

    a = sub.add_parser("add", help="Record a transaction.")
    a.add_argument("description", help="What the money was for, e.g. Coffee")
    a.add_argument("amount", help="Amount (positive number).")
    a.add_argument("--type", choices=TYPE_CHOICES, default=TransactionType.EXPENSE.value)
    a.add_argument("--category", default="food", help=f"One of {', '.join(CATEGORIES)}")
    a.add_argument("--date", default=None, help="ISO date, e.g. 2025-08-29 (default: today)")

    ls = sub.add_parser("list", help="List transactions, newest first.")
    ls.add_argument("--type", choices=[ALL_TYPES] + TYPE_CHOICES, default=ALL_TYPES)
    ls.add_argument("--search", default="", help="Match description or category (case-insensitive).")

    r = sub.add_parser("remove", help="Delete a transaction by id.")
    r.add_argument("id")

    sub.add_parser("stats", help="Show income, expense and balance.")

    e = sub.add_parser("export", help="Write the full ledger to transactions_<date>.json.")
    e.add_argument("--directory", default=".")

    i = sub.add_parser("import", help="Prepend the transactions of a JSON file.")
    i.add_argument("file")

    sub.add_parser("show", help="Plot totals and category breakdown.")
    sub.add_parser("status", help="Print online/offline.")
    return p


COMMANDS = {
    "add": cmd_add,
    "list": cmd_list,
    "remove": cmd_remove,
    "stats": cmd_stats,
    "export": cmd_export,
    "import": cmd_import,
    "show": cmd_show,
    "status": cmd_status,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = COMMANDS.get(args.cmd)
    if handler is None:
        parser.print_help()
        return 0
    settings = get_settings()
    configure_root_logger(settings.log_level)
    ledger = open_ledger(args, settings)
    return handler(args, ledger, settings)


if __name__ == "__main__":
    sys.exit(main())
