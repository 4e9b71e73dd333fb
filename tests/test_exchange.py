import json
from datetime import date

import pytest

from exchange import InvalidDocumentError, export_document, export_filename, import_document, parse_document, write_export
from ledger import Ledger
from storage import LedgerRepository, MemoryStore


def test_export_filename_uses_date():
    assert export_filename(date(2025, 8, 29)) == "transactions_2025-08-29.json"


def test_export_is_pretty_printed_full_ledger(coffee, salary):
    text = export_document([salary, coffee])
    assert text.startswith('[\n  {\n    "id": "tx-salary"')
    assert [r["id"] for r in json.loads(text)] == ["tx-salary", "tx-coffee"]


def test_export_keeps_non_ascii_text():
    from models import Transaction

    text = export_document([Transaction(description="Café crème", amount=3)])
    assert "Café crème" in text


def test_write_export(tmp_path, coffee):
    path = write_export([coffee], tmp_path / "out", today=date(2025, 1, 2))
    assert path.name == "transactions_2025-01-02.json"
    assert json.loads(path.read_text(encoding="utf-8"))[0]["description"] == "Coffee"


def test_round_trip_into_empty_ledger(ledger):
    ledger.add("Coffee", 4.5, type="expense", category="food")
    ledger.add("Salary", 2000, type="income", category="other")
    document = export_document(ledger.transactions)

    fresh = Ledger.open(LedgerRepository(MemoryStore()))
    import_document(fresh, document)
    assert fresh.transactions == ledger.transactions


def test_importing_twice_doubles_entries(ledger, coffee, salary):
    document = export_document([salary, coffee])
    import_document(ledger, document)
    import_document(ledger, document)
    assert [t.id for t in ledger] == ["tx-salary", "tx-coffee", "tx-salary", "tx-coffee"]


def test_import_prepends_before_existing(ledger, coffee):
    existing = ledger.add("Lunch", 10)
    imported = import_document(ledger, export_document([coffee]).encode("utf-8"))
    assert imported == [coffee]
    assert ledger.transactions == (coffee, existing)


def test_import_persists(ledger, store, coffee):
    import_document(ledger, export_document([coffee]))
    assert Ledger.open(LedgerRepository(store)).transactions == (coffee,)


@pytest.mark.parametrize("document", ["not json", '{"id": "1"}', "[1, 2]", '[{"amount": "lots"}]'])
def test_bad_documents_leave_ledger_unchanged(ledger, document):
    existing = ledger.add("Lunch", 10)
    with pytest.raises(InvalidDocumentError):
        import_document(ledger, document)
    assert ledger.transactions == (existing,)


def test_parse_document_trusts_records():
    [tx] = parse_document('[{"id": "a", "description": "", "amount": -3, "type": "gift", "category": "misc"}]')
    assert tx.amount == -3
    assert tx.type == "gift"


def test_latin1_bytes_are_rejected_cleanly(ledger):
    with pytest.raises(InvalidDocumentError):
        import_document(ledger, '[{"description": "Café", "amount": 3}]'.encode("latin-1"))
    with pytest.raises(InvalidDocumentError):
        parse_document(b"\xff\xfe not json")
    assert len(ledger) == 0


def test_oversized_amount_is_rejected_cleanly(ledger):
    with pytest.raises(InvalidDocumentError):
        import_document(ledger, '[{"amount": 1' + "0" * 400 + "}]")
    assert len(ledger) == 0


@pytest.mark.parametrize("as_bytes", [True, False])
def test_byte_order_mark_is_accepted(coffee, as_bytes):
    document = "\ufeff" + export_document([coffee])
    assert parse_document(document.encode("utf-8") if as_bytes else document) == [coffee]
