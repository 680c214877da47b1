"""
Summary Engine

DESIGN DECISION: Summaries are pure functions over a list of transactions.
They never touch the store; callers pass in what the store returned.

Month filters are compared as text against each transaction's UTC
'YYYY-MM'. A token that is not a real month therefore matches nothing
and yields an empty summary instead of an error.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from fintrack.models.ledger import Category, LimitStatus, Summary, Transaction


OVERALL = "overall"


def current_month(now: Optional[datetime] = None) -> str:
    """The calendar month of `now` (default: the current instant) in UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m")


def _matches(
    transaction: Transaction,
    month: str,
    category: Optional[Category],
) -> bool:
    if month != OVERALL and transaction.month_key != month:
        return False
    if category is not None and transaction.category != category:
        return False
    return True


def summarize(
    transactions: Iterable[Transaction],
    month: str = OVERALL,
    category: Optional[Category] = None,
) -> Summary:
    """
    Total and per-day breakdown of the matching transactions.

    Args:
        transactions: Transactions to summarize
        month: 'overall' for no month restriction, or 'YYYY-MM'
        category: Only count transactions with this exact category
                  (id and name); None counts everything

    Returns:
        Summary with the total and a day -> amount mapping
    """
    total = 0.0
    by_day: dict[str, float] = {}
    count = 0

    for transaction in transactions:
        if not _matches(transaction, month, category):
            continue
        total += transaction.amount
        day = transaction.day_key
        by_day[day] = by_day.get(day, 0.0) + transaction.amount
        count += 1

    return Summary(
        month=month,
        category=category,
        total=total,
        by_day=by_day,
        transaction_count=count,
    )


def limit_status(
    transactions: Iterable[Transaction],
    limit: float,
    now: Optional[datetime] = None,
) -> LimitStatus:
    """How this month's spending compares to the limit."""
    month = current_month(now)
    spent = summarize(transactions, month).total
    return LimitStatus(month=month, limit=limit, spent=spent)


def check_limit(
    transactions: Iterable[Transaction],
    limit: float,
    now: Optional[datetime] = None,
) -> float:
    """
    Budget left for the current month.

    A negative result means the limit is exceeded by that much.
    """
    return limit_status(transactions, limit, now).remaining
