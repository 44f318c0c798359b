"""Unit tests for AppSettings and sub-configs."""

import pytest

from config import (
    AppSettings,
    EmailSettings,
    HashingSettings,
    JWTSettings,
    LoggingSettings,
    PistonSettings,
    SentrySettings,
)


class TestJWTSettings:
    def test_secret_defaults_to_empty(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        assert JWTSettings().jwt_secret == ""

    def test_secret_loaded(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "s" * 40)
        assert JWTSettings().jwt_secret == "s" * 40


class TestHashingSettings:
    def test_defaults(self, monkeypatch):
        for var in ("HASH_TIME_COST", "HASH_MEMORY_COST", "HASH_PARALLELISM"):
            monkeypatch.delenv(var, raising=False)
        s = HashingSettings()
        assert (s.hash_time_cost, s.hash_memory_cost, s.hash_parallelism) == (3, 65536, 4)

    def test_override(self, monkeypatch):
        monkeypatch.setenv("HASH_TIME_COST", "5")
        assert HashingSettings().hash_time_cost == 5


class TestPistonSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PISTON_EXECUTE_URL", "PISTON_API_KEY", "PISTON_MIN_INTERVAL_MS"):
            monkeypatch.delenv(var, raising=False)
        s = PistonSettings()
        assert s.piston_execute_url == "https://emkc.org/api/v2/piston/execute"
        assert s.piston_api_key is None
        assert s.piston_min_interval_ms == 200

    def test_api_key(self, monkeypatch):
        monkeypatch.setenv("PISTON_API_KEY", "k")
        assert PistonSettings().piston_api_key == "k"


class TestEmailSettings:
    def test_console_by_default(self, monkeypatch):
        monkeypatch.delenv("EMAIL_BACKEND", raising=False)
        assert EmailSettings().email_backend == "console"


class TestLoggingSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        s = LoggingSettings()
        assert s.log_level == "INFO"
        assert s.log_format == "console"


class TestSentrySettings:
    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)
        assert SentrySettings().sentry_dsn == ""


class TestAppSettings:
    def test_sub_configs_populated(self):
        s = AppSettings()
        assert isinstance(s.jwt, JWTSettings)
        assert isinstance(s.hashing, HashingSettings)
        assert isinstance(s.piston, PistonSettings)
        assert isinstance(s.email, EmailSettings)
        assert isinstance(s.logging, LoggingSettings)
        assert isinstance(s.sentry, SentrySettings)

    def test_explicit_sub_config_kept(self):
        s = AppSettings(jwt=JWTSettings(jwt_secret="x" * 32))
        assert s.jwt.jwt_secret == "x" * 32

    @pytest.mark.parametrize("env, expected", [("production", True), ("development", False)])
    def test_is_production(self, monkeypatch, env, expected):
        monkeypatch.setenv("ENV", env)
        assert AppSettings().is_production is expected

    def test_frontend_base_url(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_BASE_URL", "https://app.example.com")
        assert AppSettings().frontend_base_url == "https://app.example.com"
