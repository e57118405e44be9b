"""Unit tests for settings and logging setup."""

import pytest
import structlog
from decision_engine import config
from decision_engine.logging_config import configure_logging, get_logger


@pytest.fixture
def fresh_settings():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, fresh_settings, monkeypatch):
        """Test documented defaults."""
        for name in ["RETRY_MAX_RETRIES", "RETRY_BASE_DELAY", "LOG_LEVEL"]:
            monkeypatch.delenv(f"DECISION_ENGINE_{name}", raising=False)
        settings = config.get_settings()

        assert settings.RETRY_MAX_RETRIES == 3
        assert settings.RETRY_BASE_DELAY == 0.5
        assert settings.RETRY_MAX_DELAY == 10.0
        assert settings.DEFAULT_CONFIDENCE_LEVEL == 0.95
        assert settings.STRICT_CONFIDENCE_LEVELS is False
        assert settings.GAMMA_MAX_ITERATIONS == 10000

    def test_env_override(self, fresh_settings, monkeypatch):
        """Test prefixed environment variables override defaults."""
        monkeypatch.setenv("DECISION_ENGINE_RETRY_MAX_RETRIES", "6")
        monkeypatch.setenv("DECISION_ENGINE_LOG_LEVEL", " debug ")

        settings = config.get_settings()
        assert settings.RETRY_MAX_RETRIES == 6
        assert settings.LOG_LEVEL == "DEBUG"

    def test_strict_levels_from_env(self, fresh_settings, monkeypatch):
        """Test strict confidence policy can be enabled by environment."""
        from decision_engine.core import confidence
        from decision_engine.exceptions import PreconditionError

        monkeypatch.setenv("DECISION_ENGINE_STRICT_CONFIDENCE_LEVELS", "true")
        with pytest.raises(PreconditionError):
            confidence.confidence_interval([1.0, 2.0], level=0.8)


    def test_default_confidence_level_from_env(self, fresh_settings, monkeypatch):
        """Test confidence_interval uses the configured level when none is given."""
        from decision_engine.core import confidence

        monkeypatch.setenv("DECISION_ENGINE_DEFAULT_CONFIDENCE_LEVEL", "0.99")
        values = [2, 4, 4, 4, 5, 5, 7, 9]

        result = confidence.confidence_interval(values)
        explicit = confidence.confidence_interval(values, level=0.99)

        assert result.level == 0.99
        assert result.lower == pytest.approx(explicit.lower)
        assert result.margin == pytest.approx(2.576 * 2 / 8 ** 0.5)


class TestLogging:
    """Tests for structlog configuration."""

    def test_configure_and_log(self, capsys):
        """Test JSON output carries the event name."""
        configure_logging(level="INFO", json=True)
        get_logger("test").info("channel_refresh", channels=3)

        out = capsys.readouterr().out
        assert '"event": "channel_refresh"' in out
        assert '"channels": 3' in out
        structlog.reset_defaults()

    def test_level_filtering(self, capsys):
        """Test debug events are dropped at INFO level."""
        configure_logging(level="INFO", json=True)
        get_logger("test").debug("hidden_event")

        assert "hidden_event" not in capsys.readouterr().out
        structlog.reset_defaults()
