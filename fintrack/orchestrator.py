"""
Main Orchestrator for fintrack

This module ties the store, the summary engine and the audit trail
together into the flows the CLI exposes.

DESIGN DECISION: The orchestrator enforces the cross-cutting rules:
- Category IDs given by the user must exist (NotFoundError otherwise)
- The monthly limit is checked after every transaction is added
- Limit breaches and exports are audited alongside store changes

The store itself stays a plain record keeper; it knows nothing about limits
being "exceeded" or about CSV files.
"""

from pathlib import Path
from typing import Optional, Union

from fintrack.audit import AuditLogger, create_correlation_id
from fintrack.models.ledger import (
    Category,
    CategoryId,
    LimitStatus,
    Summary,
    Transaction,
    TransactionId,
    ValidationIssue,
)
from fintrack.queries import OVERALL, limit_status, summarize
from fintrack.services.export import export_transactions_csv
from fintrack.services.storage import JsonFileStore, LedgerStorageInterface
from fintrack.validation import validate_limit_amount, validate_month_filter


class LedgerFlow:
    """
    Orchestrates ledger operations for one CLI invocation.

    Holds exactly one store, passed in by the caller.
    """

    def __init__(
        self,
        store: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger

    @property
    def store(self) -> LedgerStorageInterface:
        return self._store

    def _category(self, category_id: Optional[CategoryId]) -> Optional[Category]:
        if category_id is None:
            return None
        return self._store.require_category(category_id)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        description: str,
        amount: float,
        category_id: Optional[CategoryId] = None,
    ) -> tuple[TransactionId, Optional[LimitStatus]]:
        """
        Record a transaction, then check the monthly limit.

        Returns:
            (transaction_id, limit_status)

        limit_status is None when no limit is set. The caller decides how
        to present a breach; it is only audited here.
        """
        category = self._category(category_id)
        transaction_id = self._store.add_transaction(description, amount, category)

        status = self.limit_status()
        if status is not None and status.exceeded and self._audit_logger:
            self._audit_logger.log_limit_exceeded(
                month=status.month,
                limit=status.limit,
                spent=status.spent,
            )
        return transaction_id, status

    def delete_transaction(self, transaction_id: TransactionId) -> bool:
        return self._store.delete_transaction(transaction_id)

    def list_transactions(
        self,
        category_id: Optional[CategoryId] = None,
    ) -> list[Transaction]:
        return self._store.list_transactions(self._category(category_id))

    def export(self, path: Union[str, Path]) -> int:
        """Export every transaction, oldest first, to a CSV file."""
        count = export_transactions_csv(self._store.list_transactions(), path)
        if self._audit_logger:
            self._audit_logger.log_transactions_exported(str(path), count)
        return count

    # -------------------------------------------------------------------------
    # Summary and limit
    # -------------------------------------------------------------------------

    def summary(
        self,
        month: str = OVERALL,
        category_id: Optional[CategoryId] = None,
    ) -> tuple[Summary, list[ValidationIssue]]:
        """
        Summarize stored transactions.

        Returns:
            (summary, issues) where issues explain a month token that
            cannot match anything
        """
        category = self._category(category_id)
        issues = validate_month_filter(month)
        return summarize(self._store.list_transactions(), month, category), issues

    def set_limit(self, amount: float) -> list[ValidationIssue]:
        """Set or clear the limit; returns notes about clearing."""
        issues = validate_limit_amount(amount)
        self._store.set_limit(amount)
        return issues

    def limit_status(self) -> Optional[LimitStatus]:
        limit = self._store.get_limit()
        if limit is None:
            return None
        return limit_status(self._store.list_transactions(), limit)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, name: str) -> CategoryId:
        return self._store.add_category(name)

    def delete_category(self, category_id: CategoryId) -> bool:
        return self._store.delete_category(category_id)

    def list_categories(self) -> list[Category]:
        return self._store.list_categories()


def create_app_components(
    data_file: Optional[Union[str, Path]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerFlow:
    """
    Create the components for one run.

    Opens (or creates) the store at data_file, defaulting to the
    configured path. Without an audit_logger a new one is created with a
    fresh correlation ID.

    Raises:
        StorageError: If the store cannot be opened
    """
    if audit_logger is None:
        audit_logger = AuditLogger(correlation_id=create_correlation_id())
    store = JsonFileStore(data_file, audit_logger=audit_logger)
    return LedgerFlow(store=store, audit_logger=audit_logger)
