"""
CSV Export

Writes transactions to a CSV file, one row per transaction, for use in
spreadsheets. Uncategorized transactions get the literal "None" in the
category column.
"""

import csv
from pathlib import Path
from typing import Iterable, Union

from fintrack.models.ledger import Transaction


EXPORT_COLUMNS = [
    "id",
    "description",
    "amount",
    "timestamp",
    "category",
]


class ExportError(Exception):
    """The export file could not be written."""
    pass


def transaction_to_row(transaction: Transaction) -> list:
    """Convert a transaction to a CSV row in EXPORT_COLUMNS order."""
    return [
        transaction.id,
        transaction.description,
        transaction.amount,
        transaction.timestamp.isoformat(),
        transaction.category.name if transaction.category else "None",
    ]


def export_transactions_csv(
    transactions: Iterable[Transaction],
    path: Union[str, Path],
) -> int:
    """
    Write transactions to a CSV file with a header row.

    Missing parent directories are created. An existing file is replaced.

    Returns:
        Number of transactions written

    Raises:
        ExportError: If the file could not be written
    """
    path = Path(path)
    count = 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(EXPORT_COLUMNS)
            for transaction in transactions:
                writer.writerow(transaction_to_row(transaction))
                count += 1
    except OSError as e:
        raise ExportError(f"Unable to write export file {path}: {e}") from e
    return count
