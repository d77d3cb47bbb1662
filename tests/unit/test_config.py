"""Tests for configuration validation"""
import pytest

from healthquest import config
from healthquest.exceptions import ConfigurationError


class TestConfigValidation:
    """Test validate_config against module-level settings"""

    def test_defaults_are_valid(self, monkeypatch):
        """Test that the default settings pass validation"""
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        monkeypatch.setattr(config, "SESSION_TICK_SECONDS", 1.0)
        monkeypatch.setattr(config, "SESSION_GRACE_SECONDS", 2.0)

        config.validate_config()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "debug")
        monkeypatch.setattr(config, "SESSION_TICK_SECONDS", 1.0)
        monkeypatch.setattr(config, "SESSION_GRACE_SECONDS", 2.0)

        config.validate_config()

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "CHATTY")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "LOG_LEVEL"

    def test_non_positive_tick(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        monkeypatch.setattr(config, "SESSION_TICK_SECONDS", 0.0)

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "SESSION_TICK_SECONDS"

    def test_negative_grace(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        monkeypatch.setattr(config, "SESSION_TICK_SECONDS", 1.0)
        monkeypatch.setattr(config, "SESSION_GRACE_SECONDS", -1.0)

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_config()

        assert exc_info.value.config_key == "SESSION_GRACE_SECONDS"

    def test_zero_grace_allowed(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        monkeypatch.setattr(config, "SESSION_TICK_SECONDS", 1.0)
        monkeypatch.setattr(config, "SESSION_GRACE_SECONDS", 0.0)

        config.validate_config()
