"""
Credential hashing for passwords and API keys.

Uses argon2id (via argon2-cffi). The time/memory cost parameters are the
work factor: raising them makes every guess in a brute-force attack more
expensive. Argon2 accepts far longer inputs than bcrypt's 72 bytes, so the
ceiling here is an explicit MAX_CREDENTIAL_BYTES rather than a property of
the primitive.
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError

from errors import CredentialTooLongError, HashingError

MAX_CREDENTIAL_BYTES = 1024


class CredentialHasher:
    """Salted, deliberately slow one-way hashing.

    ``hash`` raises on oversized input or primitive failure; ``verify``
    never raises and reports every failure as ``False``.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    def hash(self, plaintext: str) -> str:
        """Hash *plaintext* with argon2id.

        Returns:
            Argon2 hash string (includes algorithm parameters and salt).

        Raises:
            CredentialTooLongError: *plaintext* exceeds MAX_CREDENTIAL_BYTES.
            HashingError: the argon2 primitive failed.
        """
        if len(plaintext.encode("utf-8")) > MAX_CREDENTIAL_BYTES:
            raise CredentialTooLongError(
                f"credential exceeds {MAX_CREDENTIAL_BYTES} bytes"
            )
        try:
            return self._hasher.hash(plaintext)
        except Argon2HashingError as e:
            raise HashingError("argon2 hashing failed") from e

    def verify(self, hashed: str, plaintext: str) -> bool:
        """Verify *plaintext* against an argon2 *hashed* value.

        Returns:
            ``True`` if the credential matches, ``False`` for any failure
            (wrong credential, malformed hash, oversized input, etc.).
        """
        try:
            if len(plaintext.encode("utf-8")) > MAX_CREDENTIAL_BYTES:
                return False
            return self._hasher.verify(hashed, plaintext)
        except Exception:
            return False
