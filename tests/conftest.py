"""Shared fixtures for fintrack tests."""

import pytest

from fintrack.audit import AuditLogger
from fintrack.config import get_settings
from fintrack.services.storage import JsonFileStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test in its own directory with default settings."""
    for name in (
        "FINTRACK_DATA_PATH",
        "FINTRACK_JSON_INDENT",
        "FINTRACK_CURRENCY_SYMBOL",
        "FINTRACK_DATE_FORMAT",
        "FINTRACK_LOG_LEVEL",
        "FINTRACK_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "ledger" / "data.json"


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def store(store_path, audit_logger):
    return JsonFileStore(store_path, audit_logger=audit_logger)
