"""
Core Data Models for fintrack

These models define the schemas for everything the ledger stores and
everything the summary engine hands back to callers.

DESIGN DECISION: Transactions and categories are frozen.
Callers receive the Store's own objects from list operations, so freezing
them is what makes those lists read-only views. The only change a stored
transaction ever sees (clearing its category when the category is deleted)
is done by the Store replacing the object with a copy.

No business validation happens here: negative amounts, empty names and
empty descriptions are all accepted.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


TransactionId = int
CategoryId = int


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# LEDGER ENTITIES
# =============================================================================

class Category(BaseModel):
    """
    A user-defined spending category.

    Equality is by value: two categories are equal only when both
    id and name match.
    """
    model_config = ConfigDict(frozen=True)

    id: CategoryId = Field(
        ...,
        description="Category ID, unique among categories"
    )
    name: str = Field(
        ...,
        description="Free-text category name (not required to be unique)"
    )


class Transaction(BaseModel):
    """
    A single recorded money movement.

    Positive amounts are spend; negative amounts are refunds or income
    and lower the totals they are summed into.

    The category is an embedded snapshot taken when the transaction was
    added, not a live reference to the Category in the store.
    """
    model_config = ConfigDict(frozen=True)

    id: TransactionId = Field(
        ...,
        description="Transaction ID, unique among transactions"
    )
    amount: float = Field(
        ...,
        description="Signed amount, no currency attached"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the transaction was recorded (UTC)"
    )
    category: Optional[Category] = Field(
        default=None,
        description="Category snapshot at time of assignment"
    )

    @field_validator('timestamp')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken to be UTC; aware ones are converted."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def month_key(self) -> str:
        """Year and month of the timestamp, e.g. '2024-03'."""
        return self.timestamp.strftime("%Y-%m")

    @property
    def day_key(self) -> str:
        """Calendar day of the timestamp, e.g. '2024-03-07'."""
        return self.timestamp.strftime("%Y-%m-%d")


class LedgerDocument(BaseModel):
    """
    The persisted shape of a store.

    This is exactly what is written to disk. The next-ID counters are
    not part of it; they are recomputed from the records on load.
    """

    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    limit: Optional[float] = Field(
        default=None,
        description="Monthly spending ceiling, None when no limit is set"
    )


# =============================================================================
# SUMMARY MODELS
# =============================================================================

class Summary(BaseModel):
    """
    Aggregate over a filtered set of transactions.

    by_day only holds days that actually had transactions.
    """

    month: str = Field(
        ...,
        description="'overall' or the 'YYYY-MM' month that was summarized"
    )
    category: Optional[Category] = None
    total: float = 0.0
    by_day: dict[str, float] = Field(default_factory=dict)
    transaction_count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0

    def sorted_days(self) -> list[tuple[str, float]]:
        """Day totals in calendar order."""
        return sorted(self.by_day.items())


class LimitStatus(BaseModel):
    """Where the current month's spending stands against the limit."""

    month: str
    limit: float
    spent: float

    @property
    def remaining(self) -> float:
        """Negative when the limit has been exceeded."""
        return self.limit - self.spent

    @property
    def exceeded(self) -> bool:
        return self.remaining < 0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Input the issue is about"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'invalid_format', 'clears_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None
