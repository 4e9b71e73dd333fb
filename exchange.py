# exchange.py
import json
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from logging_utils import get_logger
from models import Transaction

LOGGER = get_logger(__name__)


class InvalidDocumentError(ValueError):
    """The imported document is not a JSON array of transaction records."""


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"transactions_{today.isoformat()}.json"


def export_document(txs: Iterable[Transaction]) -> str:
    return json.dumps([t.to_dict() for t in txs], indent=2, ensure_ascii=False)


def write_export(txs: Iterable[Transaction], directory, today: Optional[date] = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    path.write_text(export_document(txs), encoding="utf-8")
    LOGGER.info("Exported transactions to %s", path)
    return path


def parse_document(text) -> List[Transaction]:
    if isinstance(text, str):
        text = text.lstrip("\ufeff")
    try:
        # bytes go straight to json, which detects the encoding and skips a BOM
        records = json.loads(text)
    except ValueError as error:
        raise InvalidDocumentError(f"not valid JSON: {error}") from error
    if not isinstance(records, list):
        raise InvalidDocumentError("expected a JSON array of transactions")
    try:
        return [Transaction.from_dict(r) for r in records]
    except (TypeError, ValueError, OverflowError) as error:
        raise InvalidDocumentError(f"bad transaction record: {error}") from error


def import_document(ledger, text) -> List[Transaction]:
    """
    Prepend every record of ``text`` to ``ledger``. Records are not validated
    or deduplicated, so importing the same file twice doubles its entries.
    """
    imported = parse_document(text)
    return ledger.prepend(imported)
