"""Tests for settings loading."""

from intake.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ACCEPT_THRESHOLD", "USER_TIMEZONE", "SENTRY_DSN"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.accept_threshold == 0.7
        assert settings.heuristic_threshold == 0.3
        assert settings.fallback_confidence == 0.3
        assert settings.fallback_title_length == 100
        assert settings.user_timezone == "UTC"
        assert settings.has_sentry is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ACCEPT_THRESHOLD", "0.5")
        monkeypatch.setenv("STRATEGY_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example/1")

        settings = Settings(_env_file=None)

        assert settings.accept_threshold == 0.5
        assert settings.strategy_timeout_seconds == 2.5
        assert settings.has_sentry is True
