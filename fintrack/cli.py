"""
Command-line interface for fintrack.

Every command opens the store once, does its work, and exits. Store
failures and unknown category IDs end the run with exit status 1 and a
message on stderr; they are also recorded as system_error audit events.
"""

from pathlib import Path
from typing import Optional

import click

from fintrack import __version__
from fintrack.audit import AuditLogger, configure_logging
from fintrack.config import get_settings
from fintrack.models.ledger import LimitStatus, Transaction, ValidationIssue
from fintrack.orchestrator import LedgerFlow, create_app_components
from fintrack.queries import OVERALL
from fintrack.services.export import ExportError
from fintrack.services.storage import StorageError


def _audit(ctx: click.Context) -> AuditLogger:
    state = ctx.ensure_object(dict)
    if "audit" not in state:
        state["audit"] = AuditLogger()
    return state["audit"]


def _fail(ctx: click.Context, error: Exception) -> click.ClickException:
    """Audit a fatal error and turn it into a ClickException (exit status 1)."""
    _audit(ctx).log_error(type(error).__name__, str(error))
    return click.ClickException(str(error))


def _flow(ctx: click.Context) -> LedgerFlow:
    """Open the store on first use and keep it for the rest of the run."""
    state = ctx.ensure_object(dict)
    if "flow" not in state:
        try:
            state["flow"] = create_app_components(state.get("data_file"), _audit(ctx))
        except StorageError as e:
            raise _fail(ctx, e) from e
    return state["flow"]


def _fmt(amount: float) -> str:
    return get_settings().app.format_amount(amount)


def _echo_issues(issues: list[ValidationIssue]) -> None:
    for issue in issues:
        color = "yellow" if issue.severity == "warning" else None
        click.secho(f"{issue.severity.capitalize()}: {issue.message}", fg=color, err=True)


def _echo_limit_status(status: LimitStatus) -> None:
    if status.exceeded:
        click.secho(
            f"Warning: monthly limit of {_fmt(status.limit)} exceeded by "
            f"{_fmt(-status.remaining)} ({status.month})",
            fg="red",
            err=True,
        )
    else:
        click.echo(f"Remaining budget for {status.month}: {_fmt(status.remaining)}")


def _echo_transactions(transactions: list[Transaction]) -> None:
    if not transactions:
        click.echo("No transactions.")
        return
    date_format = get_settings().app.date_format
    click.echo(f"{'ID':>5}  {'Date':<16}  {'Amount':>12}  {'Category':<15}  Description")
    for t in transactions:
        category_name = t.category.name if t.category else "-"
        click.echo(
            f"{t.id:>5}  {t.timestamp.strftime(date_format):<16}  "
            f"{_fmt(t.amount):>12}  {category_name:<15}  {t.description}"
        )


@click.group()
@click.version_option(version=__version__, prog_name="fintrack")
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Ledger file (default: FINTRACK_DATA_PATH or data/data.json).",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Optional[Path]) -> None:
    """Track spending, categories and a monthly limit."""
    configure_logging(get_settings().logging)
    ctx.ensure_object(dict)["data_file"] = data_file


@cli.command()
@click.argument("description")
@click.argument("amount", type=float)
@click.argument("category_id", type=int, required=False)
@click.pass_context
def add(ctx: click.Context, description: str, amount: float, category_id: Optional[int]) -> None:
    """Add a new transaction."""
    flow = _flow(ctx)
    try:
        transaction_id, status = flow.add_transaction(description, amount, category_id)
    except StorageError as e:
        raise _fail(ctx, e) from e
    click.echo(f"Added transaction {transaction_id}: {description} ({_fmt(amount)})")
    if status is not None:
        _echo_limit_status(status)


@cli.command()
@click.argument("transaction_id", metavar="ID", type=int)
@click.pass_context
def delete(ctx: click.Context, transaction_id: int) -> None:
    """Delete a transaction."""
    try:
        removed = _flow(ctx).delete_transaction(transaction_id)
    except StorageError as e:
        raise _fail(ctx, e) from e
    if removed:
        click.echo(f"Deleted transaction {transaction_id}")
    else:
        click.echo(f"No transaction with ID {transaction_id}")


@cli.command(name="list")
@click.argument("category_id", type=int, required=False)
@click.pass_context
def list_command(ctx: click.Context, category_id: Optional[int]) -> None:
    """List transactions, oldest first, optionally for one category."""
    try:
        transactions = _flow(ctx).list_transactions(category_id)
    except StorageError as e:
        raise _fail(ctx, e) from e
    _echo_transactions(transactions)


@cli.command()
@click.argument("month", default=OVERALL)
@click.option("--category", "category_id", type=int, default=None, help="Only this category ID.")
@click.pass_context
def summary(ctx: click.Context, month: str, category_id: Optional[int]) -> None:
    """Show totals for MONTH (YYYY-MM) or 'overall'."""
    try:
        result, issues = _flow(ctx).summary(month, category_id)
    except StorageError as e:
        raise _fail(ctx, e) from e
    _echo_issues(issues)

    heading = f"Summary for {month}"
    if result.category is not None:
        heading += f" ({result.category.name})"
    click.echo(heading)
    for day, amount in result.sorted_days():
        click.echo(f"  {day}  {_fmt(amount):>12}")
    click.echo(f"Total: {_fmt(result.total)} across {result.transaction_count} transaction(s)")


@cli.command()
@click.argument("amount", type=float)
@click.pass_context
def limit(ctx: click.Context, amount: float) -> None:
    """Set the monthly spending limit (0 removes it)."""
    flow = _flow(ctx)
    try:
        issues = flow.set_limit(amount)
    except StorageError as e:
        raise _fail(ctx, e) from e
    _echo_issues(issues)

    status = flow.limit_status()
    if status is None:
        click.echo("Spending limit cleared")
    else:
        click.echo(f"Spending limit set to {_fmt(status.limit)}")
        _echo_limit_status(status)


@cli.command(name="limit-status")
@click.pass_context
def limit_status_command(ctx: click.Context) -> None:
    """Show how this month's spending compares to the limit."""
    status = _flow(ctx).limit_status()
    if status is None:
        click.echo("No spending limit set")
        return
    click.echo(f"Limit: {_fmt(status.limit)}  Spent in {status.month}: {_fmt(status.spent)}")
    _echo_limit_status(status)


@cli.command()
@click.argument("filename", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export(ctx: click.Context, filename: Path) -> None:
    """Export all transactions to a CSV file."""
    try:
        count = _flow(ctx).export(filename)
    except ExportError as e:
        raise _fail(ctx, e) from e
    click.echo(f"Exported {count} transaction(s) to {filename}")


@cli.group()
def category() -> None:
    """Manage categories."""


@category.command(name="add")
@click.argument("name")
@click.pass_context
def category_add(ctx: click.Context, name: str) -> None:
    """Add a new category."""
    try:
        category_id = _flow(ctx).add_category(name)
    except StorageError as e:
        raise _fail(ctx, e) from e
    click.echo(f"Added category {name!r} (ID: {category_id})")


@category.command(name="delete")
@click.argument("category_id", metavar="ID", type=int)
@click.pass_context
def category_delete(ctx: click.Context, category_id: int) -> None:
    """Delete a category; its transactions become uncategorized."""
    try:
        removed = _flow(ctx).delete_category(category_id)
    except StorageError as e:
        raise _fail(ctx, e) from e
    if removed:
        click.echo(f"Deleted category {category_id}")
    else:
        click.echo(f"No category with ID {category_id}")


@category.command(name="list")
@click.pass_context
def category_list(ctx: click.Context) -> None:
    """List categories."""
    categories = _flow(ctx).list_categories()
    if not categories:
        click.echo("No categories.")
        return
    click.echo(f"{'ID':>5}  Name")
    for c in categories:
        click.echo(f"{c.id:>5}  {c.name}")


def main() -> None:
    cli(prog_name="fintrack")
