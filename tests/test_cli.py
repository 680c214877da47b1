"""
Tests for the command-line interface.

Commands are run through click's CliRunner against a ledger file in
tmp_path; assertions look at exit codes, output and the file itself.
"""

import csv
import json
from datetime import datetime, timezone

import pytest
from click.testing import CliRunner

from fintrack.cli import cli
from fintrack.models.audit import AuditEventType


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "ledger.json"


@pytest.fixture
def run(data_file):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, ["--data-file", str(data_file), *args])

    return invoke


def today():
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


class TestTransactionCommands:
    """Tests for add, delete and list."""

    def test_add_and_list(self, run, data_file):
        result = run("add", "Lunch", "12.5")
        assert result.exit_code == 0, result.output
        assert "Added transaction 1: Lunch (12.50)" in result.output

        result = run("list")
        assert result.exit_code == 0
        assert "Lunch" in result.output
        assert "12.50" in result.output

        document = json.loads(data_file.read_text(encoding="utf-8"))
        assert document["transactions"][0]["amount"] == 12.5

    def test_list_empty(self, run):
        result = run("list")
        assert result.exit_code == 0
        assert "No transactions." in result.output

    def test_add_with_category(self, run):
        run("category", "add", "Food")
        result = run("add", "Lunch", "12.5", "1")
        assert result.exit_code == 0

        result = run("list", "1")
        assert "Food" in result.output
        assert "Lunch" in result.output

    def test_add_with_unknown_category_fails(self, run, data_file):
        """Test an unknown category ID ends the run with status 1."""
        result = run("add", "Lunch", "12.5", "99")
        assert result.exit_code == 1
        assert "Category not found: 99" in result.output
        assert json.loads(data_file.read_text(encoding="utf-8"))["transactions"] == []

    def test_list_with_unknown_category_fails(self, run):
        result = run("list", "7")
        assert result.exit_code == 1
        assert "Category not found: 7" in result.output

    def test_list_filters_by_category(self, run):
        run("category", "add", "Food")
        run("add", "Lunch", "12.5", "1")
        run("add", "Rent", "800")

        result = run("list", "1")

        assert "Lunch" in result.output
        assert "Rent" not in result.output

    def test_delete(self, run):
        run("add", "Lunch", "12.5")

        result = run("delete", "1")
        assert result.exit_code == 0
        assert "Deleted transaction 1" in result.output
        assert "No transactions." in run("list").output

    def test_delete_missing_is_not_an_error(self, run):
        result = run("delete", "5")
        assert result.exit_code == 0
        assert "No transaction with ID 5" in result.output

    def test_long_description_and_category_name(self, run, data_file):
        """Test free text of any length is accepted by add and category add."""
        name = "y" * 600
        description = "z" * 600

        assert run("category", "add", name).exit_code == 0
        result = run("add", description, "5", "1")

        assert result.exit_code == 0, result.output
        assert "Added transaction 1" in result.output
        document = json.loads(data_file.read_text(encoding="utf-8"))
        assert document["transactions"][0]["description"] == description
        assert document["transactions"][0]["category"]["name"] == name

    def test_negative_amount(self, run):
        result = run("add", "Refund", "--", "-20")
        assert result.exit_code == 0, result.output
        assert "-20.00" in result.output


class TestSummaryCommand:
    """Tests for summary."""

    def test_overall_summary_for_category(self, run):
        """Test the Food/Lunch/Rent scenario end to end."""
        run("category", "add", "Food")
        run("add", "Lunch", "12.5", "1")
        run("add", "Rent", "800.0")

        result = run("summary", "--category", "1")

        assert result.exit_code == 0
        assert "Summary for overall (Food)" in result.output
        assert f"{today()}" in result.output
        assert "Total: 12.50 across 1 transaction(s)" in result.output

    def test_month_summary(self, run):
        run("add", "Lunch", "12.5")
        run("add", "Rent", "800")
        month = datetime.now(timezone.utc).strftime("%Y-%m")

        result = run("summary", month)

        assert "Total: 812.50 across 2 transaction(s)" in result.output

    def test_malformed_month_warns_and_matches_nothing(self, run):
        run("add", "Lunch", "12.5")

        result = run("summary", "March")

        assert result.exit_code == 0
        assert "'March' is not a month" in result.output
        assert "Total: 0.00 across 0 transaction(s)" in result.output

    def test_unknown_category_fails(self, run):
        result = run("summary", "--category", "3")
        assert result.exit_code == 1


class TestLimitCommands:
    """Tests for limit and limit-status."""

    def test_set_and_clear_limit(self, run, data_file):
        result = run("limit", "500")
        assert result.exit_code == 0
        assert "Spending limit set to 500.00" in result.output
        assert json.loads(data_file.read_text(encoding="utf-8"))["limit"] == 500.0

        result = run("limit", "0")
        assert "Spending limit cleared" in result.output
        assert json.loads(data_file.read_text(encoding="utf-8"))["limit"] is None

    def test_add_reports_remaining_budget(self, run):
        run("limit", "500")
        result = run("add", "Groceries", "300")
        assert "Remaining budget for" in result.output
        assert "200.00" in result.output

    def test_add_warns_when_limit_exceeded(self, run):
        """Test every add checks the limit and warns on a breach."""
        run("limit", "100")
        result = run("add", "Rent", "300")

        assert result.exit_code == 0
        assert "exceeded by 200.00" in result.output

    def test_limit_status(self, run):
        assert "No spending limit set" in run("limit-status").output

        run("limit", "100")
        run("add", "Lunch", "40")
        result = run("limit-status")

        assert "Limit: 100.00" in result.output
        assert "60.00" in result.output


class TestCategoryCommands:
    """Tests for the category group."""

    def test_add_and_list(self, run):
        result = run("category", "add", "Food")
        assert "Added category 'Food' (ID: 1)" in result.output

        result = run("category", "list")
        assert "Food" in result.output

    def test_list_empty(self, run):
        assert "No categories." in run("category", "list").output

    def test_delete_uncategorizes_transactions(self, run, data_file):
        run("category", "add", "Food")
        run("add", "Lunch", "12.5", "1")

        result = run("category", "delete", "1")

        assert "Deleted category 1" in result.output
        document = json.loads(data_file.read_text(encoding="utf-8"))
        assert document["categories"] == []
        assert document["transactions"][0]["category"] is None

    def test_delete_missing(self, run):
        result = run("category", "delete", "4")
        assert result.exit_code == 0
        assert "No category with ID 4" in result.output


class TestExportCommand:
    """Tests for export."""

    def test_export_writes_csv(self, run, tmp_path):
        run("category", "add", "Food")
        run("add", "Lunch", "12.5", "1")
        run("add", "Rent", "800")
        target = tmp_path / "export.csv"

        result = run("export", str(target))

        assert result.exit_code == 0
        assert "Exported 2 transaction(s)" in result.output
        with target.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
        assert rows[0] == ["id", "description", "amount", "timestamp", "category"]
        assert [row[4] for row in rows[1:]] == ["Food", "None"]


class TestStoreErrors:
    """Tests for fatal store problems."""

    def test_corrupt_file_exits_non_zero(self, run, data_file):
        data_file.write_text("not json at all", encoding="utf-8")

        result = run("list")

        assert result.exit_code == 1
        assert "not a valid ledger" in result.output

    def test_help_does_not_create_store(self, data_file):
        result = CliRunner().invoke(cli, ["--data-file", str(data_file), "--help"])
        assert result.exit_code == 0
        assert not data_file.exists()

    def test_default_data_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["add", "Lunch", "12.5"])
        assert result.exit_code == 0
        assert (tmp_path / "data" / "data.json").exists()


class TestErrorAudit:
    """Tests for audit events recorded when a command fails."""

    def invoke(self, data_file, *args):
        state = {}
        result = CliRunner().invoke(cli, ["--data-file", str(data_file), *args], obj=state)
        return result, state["audit"].events

    def test_corrupt_store_is_audited(self, data_file):
        data_file.write_text("not json at all", encoding="utf-8")

        result, events = self.invoke(data_file, "list")

        assert result.exit_code == 1
        assert events[-1].event_type == AuditEventType.SYSTEM_ERROR
        assert events[-1].details == {}
        assert events[-1].description == "System error: StoreCorruptError"
        assert "not a valid ledger" in events[-1].error_message

    def test_unknown_category_is_audited(self, data_file):
        result, events = self.invoke(data_file, "add", "Lunch", "12.5", "9")

        assert result.exit_code == 1
        assert events[-1].event_type == AuditEventType.SYSTEM_ERROR
        assert events[-1].error_message == "Category not found: 9"

    def test_failed_export_is_audited(self, data_file, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("not a directory", encoding="utf-8")

        result, events = self.invoke(data_file, "export", str(blocker / "out.csv"))

        assert result.exit_code == 1
        assert events[-1].description == "System error: ExportError"

    def test_successful_command_logs_no_error(self, data_file):
        result, events = self.invoke(data_file, "add", "Lunch", "12.5")

        assert result.exit_code == 0
        assert AuditEventType.SYSTEM_ERROR not in [e.event_type for e in events]
