"""
API key creation and parsing.

A raw key is ``<prefix>.<secret>``: an 8-character alphanumeric prefix used
for lookup and display, and a base64 secret from 32 random bytes. Only the
prefix and the hash of the whole raw key are persisted; the raw key is
shown to the user once.
"""

from __future__ import annotations

from typing import NamedTuple

from errors import InvalidAPIKeyError
from shared.crypto import CredentialHasher
from shared.generators import generate_api_key_secret, generate_random_string

API_KEY_PREFIX_LENGTH = 8
API_KEY_SECRET_NBYTES = 32
API_KEY_SEPARATOR = "."


class CreatedAPIKey(NamedTuple):
    prefix: str
    raw_key: str
    hashed_key: str


class APIKeyCodec:
    def __init__(self, hasher: CredentialHasher) -> None:
        self._hasher = hasher

    def create(self) -> CreatedAPIKey:
        """Generate a new key. Persist ``prefix`` and ``hashed_key`` only."""
        prefix = generate_random_string(API_KEY_PREFIX_LENGTH)
        secret = generate_api_key_secret(API_KEY_SECRET_NBYTES)
        raw_key = f"{prefix}{API_KEY_SEPARATOR}{secret}"
        return CreatedAPIKey(prefix, raw_key, self._hasher.hash(raw_key))

    def parse(self, key: str) -> tuple[str, str]:
        """Split *key* into ``(prefix, secret)`` at the first separator.

        Raises:
            InvalidAPIKeyError: the separator is absent.
        """
        prefix, sep, secret = key.partition(API_KEY_SEPARATOR)
        if not sep:
            raise InvalidAPIKeyError("failed to parse prefix and secret of API key")
        return prefix, secret

    def verify(self, hashed_key: str, raw_key: str) -> bool:
        return self._hasher.verify(hashed_key, raw_key)
