"""
Audit Models for fintrack

Every change to the ledger is recorded as an audit event so a run of the
CLI can be reconstructed from the logs.

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from fintrack.models.ledger import Category, Transaction, utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store lifecycle
    STORE_CREATED = "store_created"
    STORE_LOADED = "store_loaded"

    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTIONS_EXPORTED = "transactions_exported"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_DELETED = "category_deleted"
    CATEGORY_CASCADE_CLEARED = "category_cascade_cleared"

    # Spending limit
    LIMIT_SET = "limit_set"
    LIMIT_CLEARED = "limit_cleared"
    LIMIT_EXCEEDED = "limit_exceeded"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is the integer ID of the transaction or category involved;
    transaction and category IDs live in separate namespaces, so
    entity_type is needed to interpret it.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'category', 'limit')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - all events of one CLI invocation share an ID
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction)
        event = AuditEventBuilder.category_deleted(category_id, removed=True)
    """

    @staticmethod
    def store_created(path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_CREATED,
            entity_type="store",
            description=f"Created empty store at {path}",
            details={"path": path},
        )

    @staticmethod
    def store_loaded(
        path: str,
        transaction_count: int,
        category_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            description=f"Loaded store from {path}",
            details={
                "path": path,
                "transaction_count": transaction_count,
                "category_count": category_count,
            },
        )

    @staticmethod
    def transaction_added(transaction: Transaction) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction.id,
            description=f"Transaction {transaction.id} added",
            details={
                "description": transaction.description,
                "amount": transaction.amount,
                "category_id": transaction.category.id if transaction.category else None,
            },
        )

    @staticmethod
    def transaction_deleted(transaction_id: int, removed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=(
                f"Transaction {transaction_id} deleted"
                if removed else f"Transaction {transaction_id} not found, nothing deleted"
            ),
            details={"removed": removed},
        )

    @staticmethod
    def transactions_exported(path: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_EXPORTED,
            entity_type="transaction",
            description=f"Exported {count} transactions to {path}",
            details={"path": path, "count": count},
        )

    @staticmethod
    def category_added(category: Category) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category.id,
            description=f"Category {category.id} added",
            details={"name": category.name},
        )

    @staticmethod
    def category_deleted(category_id: int, removed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description=(
                f"Category {category_id} deleted"
                if removed else f"Category {category_id} not found, nothing deleted"
            ),
            details={"removed": removed},
        )

    @staticmethod
    def category_cascade_cleared(category_id: int, cleared: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_CASCADE_CLEARED,
            entity_type="category",
            entity_id=category_id,
            description=f"Cleared category {category_id} from {cleared} transactions",
            details={"cleared_transactions": cleared},
        )

    @staticmethod
    def limit_set(limit: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LIMIT_SET,
            entity_type="limit",
            description=f"Monthly limit set to {limit}",
            details={"limit": limit},
        )

    @staticmethod
    def limit_cleared() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LIMIT_CLEARED,
            entity_type="limit",
            description="Monthly limit cleared",
        )

    @staticmethod
    def limit_exceeded(month: str, limit: float, spent: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LIMIT_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="limit",
            description=f"Spending for {month} exceeds the monthly limit",
            details={
                "month": month,
                "limit": limit,
                "spent": spent,
                "over_by": spent - limit,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
