"""
Data Models Package

This package contains all Pydantic models used in fintrack.
Everything the store persists and the summary engine returns conforms
to these schemas.
"""

from fintrack.models.ledger import (
    Category,
    CategoryId,
    LedgerDocument,
    LimitStatus,
    Summary,
    Transaction,
    TransactionId,
    ValidationIssue,
    utc_now,
)
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Category",
    "CategoryId",
    "LedgerDocument",
    "LimitStatus",
    "Summary",
    "Transaction",
    "TransactionId",
    "ValidationIssue",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
