"""Summary and limit computations package."""

from fintrack.queries.summary import (
    OVERALL,
    check_limit,
    current_month,
    limit_status,
    summarize,
)

__all__ = ["OVERALL", "check_limit", "current_month", "limit_status", "summarize"]
