"""
JSON File Storage Implementation

DESIGN DECISION: The whole ledger lives in one JSON document that is
rewritten in full on every change:
1. The file is always a complete, readable snapshot
2. No migrations, no partial writes to reconcile
3. Users can open and back up the file directly

TRADEOFFS:
- Every mutation costs a full serialization (fine for personal ledgers)
- No locking: two processes writing the same file race, last writer wins
- Next-ID counters are not stored; they are recomputed from the records
  on load, so IDs removed from the end of the list before a reload could
  be handed out again by a later process, never within one store's life
"""

import contextlib
import os
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from fintrack.audit import AuditLogger
from fintrack.config import get_settings
from fintrack.models.ledger import (
    Category,
    CategoryId,
    LedgerDocument,
    Transaction,
    TransactionId,
)
from fintrack.services.storage.interface import (
    LedgerStorageInterface,
    StoreCorruptError,
    StoreReadError,
    StoreWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileStore(LedgerStorageInterface):
    """
    Ledger storage backed by a single JSON file.

    Opening a path that does not exist creates an empty ledger there
    (parent directories included) and writes it immediately.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        audit_logger: Optional[AuditLogger] = None,
        json_indent: Optional[int] = None,
    ):
        """
        Open or create a store.

        Args:
            path: Ledger file. Defaults to the configured data path.
            audit_logger: Receives an event for every change. Optional.
            json_indent: Indentation of the written JSON. Defaults to the
                         configured value.

        Raises:
            StoreReadError: If the file exists but cannot be read
            StoreCorruptError: If the file is not a valid ledger document
            StoreWriteError: If a new store could not be written
        """
        storage_settings = get_settings().storage
        self._path = Path(path) if path is not None else storage_settings.data_path
        self._indent = storage_settings.json_indent if json_indent is None else json_indent
        self._audit = audit_logger

        self._transactions: list[Transaction] = []
        self._categories: list[Category] = []
        self._limit: Optional[float] = None
        self._max_transaction_id: TransactionId = 0
        self._max_category_id: CategoryId = 0

        if self._exists():
            self._load()
        else:
            self._persist()
            if self._audit:
                self._audit.log_store_created(str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _exists(self) -> bool:
        try:
            return self._path.exists()
        except OSError as e:
            raise StoreReadError(f"Cannot check whether {self._path} exists: {e}") from e

    def _load(self) -> None:
        """Read the document and recompute the next-ID counters."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StoreCorruptError(f"Store file {self._path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StoreReadError(f"Unable to read store file {self._path}: {e}") from e

        try:
            document = LedgerDocument.model_validate_json(raw)
        except ValidationError as e:
            raise StoreCorruptError(
                f"Store file {self._path} is not a valid ledger: "
                f"{e.error_count()} problem(s), first: {e.errors()[0]['msg']}"
            ) from e

        self._transactions = list(document.transactions)
        self._categories = list(document.categories)
        self._limit = document.limit
        self._max_transaction_id = max((t.id for t in self._transactions), default=0)
        self._max_category_id = max((c.id for c in self._categories), default=0)

        if self._audit:
            self._audit.log_store_loaded(
                path=str(self._path),
                transaction_count=len(self._transactions),
                category_count=len(self._categories),
            )

    def _to_document(self) -> LedgerDocument:
        return LedgerDocument(
            transactions=self._transactions,
            categories=self._categories,
            limit=self._limit,
        )

    def _persist(self) -> None:
        """
        Write the whole ledger.

        The document goes to a sibling temp file first and is then renamed
        over the target, so readers never see a half-written file.
        """
        payload = self._to_document().model_dump_json(indent=self._indent or None)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(f"Unable to write store file {self._path}: {e}") from e

        logger.debug(
            "store_persisted",
            path=str(self._path),
            transactions=len(self._transactions),
            categories=len(self._categories),
        )

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        description: str,
        amount: float,
        category: Optional[Category] = None,
    ) -> TransactionId:
        transaction = Transaction(
            id=self._max_transaction_id + 1,
            amount=amount,
            description=description,
            category=category,
        )
        self._transactions.append(transaction)
        self._max_transaction_id = transaction.id
        self._persist()

        if self._audit:
            self._audit.log_transaction_added(transaction)
        return transaction.id

    def delete_transaction(self, transaction_id: TransactionId) -> bool:
        """
        Delete a transaction by ID.

        The file is rewritten even when nothing matched, so every delete
        leaves the same on-disk result.
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        removed = len(remaining) != len(self._transactions)
        self._transactions = remaining
        self._persist()

        if self._audit:
            self._audit.log_transaction_deleted(transaction_id, removed)
        return removed

    def list_transactions(
        self,
        category: Optional[Category] = None,
    ) -> list[Transaction]:
        if category is None:
            transactions = self._transactions
        else:
            transactions = [t for t in self._transactions if t.category == category]
        # sorted() is stable: same-instant transactions keep insertion order
        return sorted(transactions, key=lambda t: t.timestamp)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def get_category(self, category_id: CategoryId) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def add_category(self, name: str) -> CategoryId:
        category = Category(id=self._max_category_id + 1, name=name)
        self._categories.append(category)
        self._max_category_id = category.id
        self._persist()

        if self._audit:
            self._audit.log_category_added(category)
        return category.id

    def delete_category(self, category_id: CategoryId) -> bool:
        """
        Delete a category and clear it from the transactions that used it.

        The transactions themselves are kept. Transactions are matched on
        the category ID alone, so a snapshot taken under an older name is
        cleared too.
        """
        remaining = [c for c in self._categories if c.id != category_id]
        removed = len(remaining) != len(self._categories)
        self._categories = remaining

        cleared = 0
        transactions = []
        for transaction in self._transactions:
            if transaction.category is not None and transaction.category.id == category_id:
                transaction = transaction.model_copy(update={"category": None})
                cleared += 1
            transactions.append(transaction)
        self._transactions = transactions
        self._persist()

        if self._audit:
            self._audit.log_category_deleted(category_id, removed, cleared)
        return removed

    def list_categories(self) -> list[Category]:
        return list(self._categories)

    # -------------------------------------------------------------------------
    # Limit
    # -------------------------------------------------------------------------

    def set_limit(self, amount: float) -> None:
        self._limit = float(amount) if amount > 0 else None
        self._persist()

        if self._audit:
            self._audit.log_limit_changed(self._limit)

    def get_limit(self) -> Optional[float]:
        return self._limit
