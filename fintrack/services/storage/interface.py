"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the CLI and summary code independent of the file format
2. Run several stores side by side (one per path) in tests
3. Swap the JSON file for another backend later

The interface is intentionally simple: the operations the CLI needs,
nothing more. Implementations own ID allocation and must keep
transactions free of references to deleted categories.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from fintrack.models.ledger import (
    Category,
    CategoryId,
    Transaction,
    TransactionId,
)


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Every mutating method must have persisted its change by the time
    it returns.
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Where this store keeps its data."""
        pass

    @abstractmethod
    def add_transaction(
        self,
        description: str,
        amount: float,
        category: Optional[Category] = None,
    ) -> TransactionId:
        """
        Record a new transaction timestamped now.

        Args:
            description: Free-text description
            amount: Signed amount
            category: Category snapshot to attach, if any

        Returns:
            The ID allocated to the transaction

        Raises:
            StoreWriteError: If the change could not be persisted
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: TransactionId) -> bool:
        """
        Delete a transaction by ID.

        Deleting an unknown ID is not an error.

        Returns:
            True if a transaction was removed
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        category: Optional[Category] = None,
    ) -> list[Transaction]:
        """
        List transactions, oldest first.

        Args:
            category: Only return transactions whose category equals
                      this one (id and name)

        Returns:
            Read-only transactions sorted by timestamp
        """
        pass

    @abstractmethod
    def get_category(self, category_id: CategoryId) -> Optional[Category]:
        """
        Retrieve a category by its ID.

        Returns:
            The category if found, None otherwise
        """
        pass

    def require_category(self, category_id: CategoryId) -> Category:
        """
        Like get_category, for callers that cannot continue without it.

        Raises:
            NotFoundError: If no category has this ID
        """
        category = self.get_category(category_id)
        if category is None:
            raise NotFoundError(f"Category not found: {category_id}")
        return category

    @abstractmethod
    def add_category(self, name: str) -> CategoryId:
        """
        Create a category.

        Returns:
            The ID allocated to the category
        """
        pass

    @abstractmethod
    def delete_category(self, category_id: CategoryId) -> bool:
        """
        Delete a category and clear it from every transaction using it.

        Returns:
            True if a category was removed
        """
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List categories in the order they were created."""
        pass

    @abstractmethod
    def set_limit(self, amount: float) -> None:
        """
        Set the monthly spending limit.

        A positive amount sets it; zero or less clears it.
        """
        pass

    @abstractmethod
    def get_limit(self) -> Optional[float]:
        """Return the monthly limit, or None when none is set."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class StoreReadError(StorageError):
    """The store file exists but could not be read."""
    pass


class StoreCorruptError(StorageError):
    """The store file does not hold a valid ledger document."""
    pass


class StoreWriteError(StorageError):
    """The store could not be written to disk."""
    pass
