"""Tests for configuration and logging setup."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from pocket_ledger.audit import configure_logging
from pocket_ledger.config import DEFAULT_DATA_FILE, LedgerSettings


class TestLedgerSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("LEDGER_DATA_FILE", "LEDGER_LOG_LEVEL", "LEDGER_LOG_JSON", "LEDGER_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        settings = LedgerSettings(_env_file=None)
        assert settings.data_file == Path(DEFAULT_DATA_FILE)
        assert settings.log_level == "WARNING"
        assert settings.log_json is False
        assert settings.log_file is None
        assert settings.encoding == "utf-8"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_DATA_FILE", str(tmp_path / "money.txt"))
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "debug")
        monkeypatch.setenv("LEDGER_LOG_JSON", "true")
        settings = LedgerSettings(_env_file=None)
        assert settings.data_file == tmp_path / "money.txt"
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.log_json is True

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LEDGER_DATA_FILE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LEDGER_DATA_FILE=from_env_file.csv\n")
        settings = LedgerSettings(_env_file=env_file)
        assert settings.data_file == Path("from_env_file.csv")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            LedgerSettings(log_level="LOUD", _env_file=None)

    def test_invalid_encoding(self):
        with pytest.raises(ValidationError, match="Unknown text encoding"):
            LedgerSettings(encoding="klingon-8", _env_file=None)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        configure_logging("WARNING")
        root.setLevel(level)

    def test_sets_root_level(self):
        configure_logging("INFO")
        assert logging.getLogger().level == logging.INFO

    def test_reconfigure_replaces_handlers(self):
        root = logging.getLogger()
        configure_logging("INFO")
        count = len(root.handlers)
        configure_logging("DEBUG")
        assert len(root.handlers) == count

    def test_log_file_receives_output(self, tmp_path):
        log_file = tmp_path / "ledger.log"
        configure_logging("INFO", json_logs=True, log_file=log_file)
        logging.getLogger("pocket_ledger.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()
