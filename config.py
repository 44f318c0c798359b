"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The signing secret is a single shared HS256 key held for the process
lifetime; rotating JWT_SECRET invalidates every outstanding token.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_secret: str = ""


class HashingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # argon2id parameters; raise time/memory cost to make brute force slower
    hash_time_cost: int = 3
    hash_memory_cost: int = 65536
    hash_parallelism: int = 4


class PistonSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    piston_execute_url: str = "https://emkc.org/api/v2/piston/execute"
    piston_api_key: Optional[str] = None
    piston_timeout_seconds: float = 10.0
    # The public Piston instance rejects requests closer than 200 ms apart
    piston_min_interval_ms: int = 200


class EmailSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    email_backend: str = "console"  # "console" | "zepto"
    zepto_api_token: str = ""
    zepto_from_email: str = "noreply@codespaces.dev"
    zepto_from_name: str = "Code Spaces"


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "Code Spaces"
    frontend_base_url: str = "http://localhost:3000"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    jwt: Optional[JWTSettings] = None
    hashing: Optional[HashingSettings] = None
    piston: Optional[PistonSettings] = None
    email: Optional[EmailSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.hashing is None:
            self.hashing = HashingSettings()
        if self.piston is None:
            self.piston = PistonSettings()
        if self.email is None:
            self.email = EmailSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
