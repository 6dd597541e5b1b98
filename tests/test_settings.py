"""Tests for settings and logging setup."""

import logging

import pytest

from wallet.config import WalletSettings, get_settings
from wallet.logger import ROOT_LOGGER_NAME, configure_logging


class TestWalletSettings:
    """Tests for WalletSettings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("WALLET_LOG_LEVEL", raising=False)
        monkeypatch.delenv("WALLET_LOG_JSON", raising=False)
        settings = WalletSettings()
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_reads_environment(self, monkeypatch):
        """Test WALLET_* variables override defaults."""
        monkeypatch.setenv("WALLET_LOG_LEVEL", "debug")
        monkeypatch.setenv("WALLET_LOG_JSON", "false")
        settings = WalletSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False

    def test_unknown_log_level(self):
        """Test invalid level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            WalletSettings(log_level="chatty")

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same object until cleared."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_wallet_logger_level(self):
        """Test the stdlib wallet logger follows the configured level."""
        try:
            configure_logging(WalletSettings(log_level="WARNING"))
            assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
        finally:
            configure_logging(WalletSettings(log_level="INFO"))

    def test_no_handler_by_default(self):
        """Test the library leaves handlers to the application."""
        wallet_logger = logging.getLogger(ROOT_LOGGER_NAME)
        wallet_logger.handlers.clear()
        configure_logging(WalletSettings(log_level="INFO"))
        assert wallet_logger.handlers == []

    def test_handler_added_once(self):
        """Test repeated configuration does not stack handlers."""
        wallet_logger = logging.getLogger(ROOT_LOGGER_NAME)
        wallet_logger.handlers.clear()
        try:
            configure_logging(WalletSettings(log_level="INFO"), attach_handler=True)
            configure_logging(WalletSettings(log_level="INFO"), attach_handler=True)
            assert len(wallet_logger.handlers) == 1
        finally:
            wallet_logger.handlers.clear()
