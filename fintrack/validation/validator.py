"""
Input Validation

Checks CLI input before it reaches the store or the summary engine and
reports anything the user probably did not intend.

IMPORTANT: Validation NEVER blocks or changes an operation.
The core accepts these inputs as they are (a malformed month simply
matches nothing, a non-positive limit clears the limit); the issues
returned here only let the CLI explain that to the user.
"""

import re

from fintrack.models.ledger import ValidationIssue
from fintrack.queries.summary import OVERALL


MONTH_PATTERN = re.compile(r"\d{4}-(0[1-9]|1[0-2])")


def validate_month_filter(month: str) -> list[ValidationIssue]:
    """Flag month tokens that are neither 'overall' nor a real 'YYYY-MM'."""
    if month == OVERALL or MONTH_PATTERN.fullmatch(month):
        return []
    return [ValidationIssue(
        field="month",
        issue_type="invalid_format",
        message=f"'{month}' is not a month; no transactions will match",
        severity="warning",
        suggested_fix="Use YYYY-MM (e.g. 2024-03) or 'overall'",
    )]


def validate_limit_amount(amount: float) -> list[ValidationIssue]:
    """Flag limit amounts that clear the limit instead of setting it."""
    if amount > 0:
        return []
    if amount == 0:
        return [ValidationIssue(
            field="amount",
            issue_type="clears_value",
            message="A limit of 0 removes the monthly limit",
            severity="info",
        )]
    return [ValidationIssue(
        field="amount",
        issue_type="clears_value",
        message=f"Negative limit {amount} removes the monthly limit",
        severity="warning",
        suggested_fix="Use 0 to remove the limit, or a positive amount to set it",
    )]
