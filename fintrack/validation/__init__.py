"""Input validation package."""

from fintrack.validation.validator import (
    MONTH_PATTERN,
    validate_limit_amount,
    validate_month_filter,
)

__all__ = ["MONTH_PATTERN", "validate_limit_amount", "validate_month_filter"]
