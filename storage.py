# storage.py
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from filelock import FileLock, Timeout

from logging_utils import get_logger
from models import Transaction

LOGGER = get_logger(__name__)

TRANSACTIONS_KEY = "transactions"


class StorageError(Exception):
    """Raised by a store when a value cannot be read or written."""


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key was never set."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStore(KeyValueStore):
    """
    One file per key under ``directory``. Writes go through a file lock so the
    CLI and the Streamlit app can share a data directory.
    """

    def __init__(self, directory, lock_timeout: float = 5):
        self.directory = Path(directory)
        self.lock_timeout = lock_timeout

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as error:
            raise StorageError(f"could not read {path}: {error}") from error

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            lock = FileLock(str(path) + ".lock", timeout=self.lock_timeout)
            with lock:
                tmp_path = path.with_suffix(".json.tmp")
                tmp_path.write_text(value, encoding="utf-8")
                os.replace(tmp_path, path)
        except Timeout as error:
            raise StorageError(f"timed out waiting for lock on {path}") from error
        except OSError as error:
            raise StorageError(f"could not write {path}: {error}") from error


class LedgerRepository:
    """Loads and saves the whole ledger as one JSON array under a fixed key."""

    def __init__(self, store: KeyValueStore, key: str = TRANSACTIONS_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[Transaction]:
        try:
            raw = self.store.get(self.key)
        except StorageError:
            LOGGER.warning("Could not read stored transactions, starting empty", exc_info=True)
            return []
        if raw is None:
            LOGGER.info("No stored transactions found")
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a JSON array, got {type(records).__name__}")
            return [Transaction.from_dict(r) for r in records]
        except (ValueError, TypeError, OverflowError) as error:
            LOGGER.warning("Stored transactions are unreadable (%s), starting empty", error)
            return []

    def save(self, transactions: Sequence[Transaction]) -> bool:
        payload = json.dumps([t.to_dict() for t in transactions])
        try:
            self.store.set(self.key, payload)
        except StorageError:
            LOGGER.error("Error saving transactions", exc_info=True)
            return False
        return True


def open_repository(settings, data_directory=None) -> LedgerRepository:
    store = JsonFileStore(data_directory or settings.data_directory, lock_timeout=settings.lock_timeout)
    return LedgerRepository(store)
