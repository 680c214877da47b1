"""
Tests for settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from fintrack.config import AppSettings, LoggingSettings, StorageSettings, get_settings


class TestSettings:
    """Tests for the pydantic-settings configuration."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.storage.data_path == Path("data/data.json")
        assert settings.storage.json_indent == 2
        assert settings.logging.level == "WARNING"
        assert settings.logging.format == "console"
        assert settings.app.currency_symbol == ""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FINTRACK_DATA_PATH", "/tmp/ledger.json")
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "debug")
        monkeypatch.setenv("FINTRACK_CURRENCY_SYMBOL", "$")

        assert StorageSettings().data_path == Path("/tmp/ledger.json")
        assert LoggingSettings().level == "DEBUG"
        assert AppSettings().format_amount(1234.5) == "$1,234.50"

    def test_dotenv_file_is_read(self, tmp_path):
        """Test a .env file in the working directory is honoured."""
        (tmp_path / ".env").write_text("FINTRACK_JSON_INDENT=4\n", encoding="utf-8")
        assert StorageSettings().json_indent == 4

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            LoggingSettings()

    def test_log_format_restricted(self, monkeypatch):
        monkeypatch.setenv("FINTRACK_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            LoggingSettings()

    def test_level_number(self):
        assert LoggingSettings(level="error").level_number == 40
