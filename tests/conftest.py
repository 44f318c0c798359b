"""
Shared test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during tests; tests control config exclusively through monkeypatch.setenv()
or explicit constructor arguments.

Also provides the deterministic building blocks most tests need: a frozen
clock, a cheap argon2 hasher and a token service signed with a fixed key.
"""

from datetime import datetime, timezone

import pytest

from services.token_service import TokenService
from shared.clock import FrozenClock
from shared.crypto import CredentialHasher

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"
EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(EPOCH)


@pytest.fixture
def hasher() -> CredentialHasher:
    # Minimum argon2 cost; production parameters come from HashingSettings
    return CredentialHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def tokens(clock) -> TokenService:
    return TokenService(TEST_SECRET, clock)


@pytest.fixture
def secret_key() -> str:
    return TEST_SECRET
