"""
Unit tests for application settings.
"""
import pytest

from agrowatch.config import Settings


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RANDOM_SEED", raising=False)
        monkeypatch.delenv("RATE_LIMIT_REQUESTS", raising=False)

        config = Settings(_env_file=None)

        assert config.random_seed is None
        assert config.rate_limit_requests == 100
        assert config.max_retry_attempts == 3

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RANDOM_SEED", "42")
        monkeypatch.setenv("DASHBOARD_LATITUDE", "36.7378")

        config = Settings(_env_file=None)

        assert config.random_seed == 42
        assert config.dashboard_latitude == 36.7378

    def test_only_used_settings_are_declared(self):
        assert "debug" not in Settings.model_fields


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
