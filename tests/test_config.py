"""Tests for settings and logging configuration."""

import pytest
import structlog
from pydantic import ValidationError

from py_realm.config import Settings
from py_realm.logging_config import configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        for key in ["LOG_LEVEL", "LOG_FORMAT", "VASSAL_CYCLE_GUARD", "ROUTE_HEURISTIC", "TAX_SHARE"]:
            monkeypatch.delenv(f"PY_REALM_{key}", raising=False)
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.vassal_cycle_guard is True
        assert settings.route_heuristic == "euclidean"
        assert settings.tax_share == 0.1

    def test_environment_override(self, monkeypatch):
        """Test values read from prefixed environment variables."""
        monkeypatch.setenv("PY_REALM_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PY_REALM_VASSAL_CYCLE_GUARD", "false")
        monkeypatch.setenv("PY_REALM_TAX_SHARE", "0.25")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.vassal_cycle_guard is False
        assert settings.tax_share == 0.25

    def test_invalid_heuristic_rejected(self, monkeypatch):
        """Test that an unknown heuristic fails when settings are read."""
        monkeypatch.setenv("PY_REALM_ROUTE_HEURISTIC", "manhattan")
        with pytest.raises(ValidationError):
            Settings()

    def test_tax_share_bounds(self):
        """Test that the tax share must lie between 0 and 1."""
        with pytest.raises(ValidationError):
            Settings(tax_share=1.5)
        with pytest.raises(ValidationError):
            Settings(tax_share=-0.1)


class TestLogging:
    """Test structlog configuration."""

    def test_json_renderer(self):
        """Test JSON output configuration."""
        configure_logging(Settings(log_format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        """Test plain output configuration."""
        configure_logging(Settings(log_format="plain", log_level="debug"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
