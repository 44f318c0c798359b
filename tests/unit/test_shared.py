"""
Unit tests for the shared/ utility modules.

Covers:
- shared.crypto          (CredentialHasher)
- shared.generators      (generate_random_string, generate_api_key_secret,
                          generate_code_space_name)
- shared.validators      (validate_password)
- shared.datetime_utils  (parse_expiry)
- shared.clock           (FrozenClock, SystemClock)
- shared.logging         (redact_sensitive_fields)
"""

from __future__ import annotations

import base64
import re
from datetime import datetime, timedelta, timezone

import pytest

from errors import CredentialTooLongError, HashingError
from shared.clock import FrozenClock, SystemClock
from shared.crypto import MAX_CREDENTIAL_BYTES, CredentialHasher
from shared.datetime_utils import parse_expiry
from shared.generators import (
    ALPHANUMERIC,
    generate_api_key_secret,
    generate_code_space_name,
    generate_random_string,
)
from shared.logging import redact_sensitive_fields
from shared.validators import validate_password


# ---------------------------------------------------------------------------
# shared.crypto
# ---------------------------------------------------------------------------


class TestCredentialHasher:
    def test_hash_then_verify(self, hasher):
        hashed = hasher.hash("Secr3t!pass")
        assert hashed.startswith("$argon2id$")
        assert hasher.verify(hashed, "Secr3t!pass") is True

    def test_wrong_plaintext(self, hasher):
        hashed = hasher.hash("Secr3t!pass")
        assert hasher.verify(hashed, "Secr3t!pasS") is False

    def test_salted(self, hasher):
        assert hasher.hash("same") != hasher.hash("same")

    def test_malformed_hash_is_false(self, hasher):
        assert hasher.verify("not-a-hash", "anything") is False

    def test_empty_hash_is_false(self, hasher):
        assert hasher.verify("", "anything") is False

    def test_at_ceiling_is_accepted(self, hasher):
        plaintext = "a" * MAX_CREDENTIAL_BYTES
        assert hasher.verify(hasher.hash(plaintext), plaintext) is True

    def test_over_ceiling_raises(self, hasher):
        with pytest.raises(CredentialTooLongError):
            hasher.hash("a" * (MAX_CREDENTIAL_BYTES + 1))

    def test_ceiling_counts_bytes_not_characters(self, hasher):
        # "é" is two bytes in UTF-8
        with pytest.raises(CredentialTooLongError):
            hasher.hash("é" * (MAX_CREDENTIAL_BYTES // 2 + 1))

    def test_verify_over_ceiling_is_false(self, hasher):
        hashed = hasher.hash("short")
        assert hasher.verify(hashed, "a" * (MAX_CREDENTIAL_BYTES + 1)) is False

    def test_primitive_failure_wrapped(self, hasher, mocker):
        from argon2 import PasswordHasher
        from argon2.exceptions import HashingError as Argon2HashingError

        mocker.patch.object(PasswordHasher, "hash", side_effect=Argon2HashingError("boom"))
        with pytest.raises(HashingError):
            hasher.hash("anything")

    def test_errors_are_500(self):
        assert CredentialTooLongError("x").status_code == 500
        assert HashingError("x").status_code == 500


# ---------------------------------------------------------------------------
# shared.generators
# ---------------------------------------------------------------------------


class TestGenerators:
    @pytest.mark.parametrize("length", [0, 1, 8, 64])
    def test_random_string_length(self, length):
        assert len(generate_random_string(length)) == length

    def test_random_string_alphabet(self):
        assert set(generate_random_string(500)) <= set(ALPHANUMERIC)

    def test_random_string_custom_alphabet(self):
        assert set(generate_random_string(100, "ab")) <= {"a", "b"}

    def test_api_key_secret_is_base64_of_32_bytes(self):
        secret = generate_api_key_secret()
        assert len(secret) == 44
        assert len(base64.b64decode(secret)) == 32
        assert "." not in secret

    def test_api_key_secrets_differ(self):
        assert generate_api_key_secret() != generate_api_key_secret()

    def test_code_space_name_shape(self):
        assert re.fullmatch(r"[a-z]+-[a-z]+-[a-z0-9]{4}", generate_code_space_name())


# ---------------------------------------------------------------------------
# shared.validators
# ---------------------------------------------------------------------------


class TestValidatePassword:
    def test_strong_password(self):
        assert validate_password("Str0ng!Pass") == (True, [])

    def test_empty(self):
        ok, missing = validate_password("")
        assert ok is False
        assert missing == ["Password is required"]

    @pytest.mark.parametrize(
        "password, fragment",
        [
            ("Sh0rt!", "At least 8 characters"),
            ("nouppercase1!", "uppercase"),
            ("NOLOWERCASE1!", "lowercase"),
            ("NoNumbers!!", "number"),
            ("NoSpecial123", "special"),
        ],
    )
    def test_missing_requirement(self, password, fragment):
        ok, missing = validate_password(password)
        assert ok is False
        assert any(fragment in m for m in missing)

    def test_too_long(self):
        ok, missing = validate_password("Aa1!" * 40)
        assert ok is False
        assert any("Maximum" in m for m in missing)


# ---------------------------------------------------------------------------
# shared.datetime_utils
# ---------------------------------------------------------------------------


class TestParseExpiry:
    def test_none(self):
        assert parse_expiry(None) is None

    def test_epoch_seconds(self):
        assert parse_expiry(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_iso_with_z(self):
        assert parse_expiry("2030-01-01T00:00:00Z") == datetime(
            2030, 1, 1, tzinfo=timezone.utc
        )

    def test_naive_assumed_utc(self):
        assert parse_expiry("2030-01-01T00:00:00").tzinfo == timezone.utc

    def test_offset_converted_to_utc(self):
        assert parse_expiry("2030-01-01T02:00:00+02:00") == datetime(
            2030, 1, 1, tzinfo=timezone.utc
        )

    def test_garbage(self):
        assert parse_expiry("next tuesday") is None


# ---------------------------------------------------------------------------
# shared.clock
# ---------------------------------------------------------------------------


class TestClock:
    def test_system_clock_is_utc(self):
        assert SystemClock().now().tzinfo == timezone.utc

    def test_frozen_clock_stays_put(self):
        at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        clock = FrozenClock(at)
        assert clock.now() == at
        assert clock.now() == at

    def test_frozen_clock_advance_and_set(self):
        at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        clock = FrozenClock(at)
        clock.advance(timedelta(hours=2))
        assert clock.now() == at + timedelta(hours=2)
        clock.set(at)
        assert clock.now() == at


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestRedactSensitiveFields:
    def test_redacts_credentials(self):
        event = redact_sensitive_fields(
            None,
            "info",
            {
                "event": "x",
                "password": "hunter2",
                "refresh_token": "abc",
                "raw_key": "prefix.secret",
                "jwt_secret": "s",
            },
        )
        assert event["event"] == "x"
        assert event["password"] == "***REDACTED***"
        assert event["refresh_token"] == "***REDACTED***"
        assert event["raw_key"] == "***REDACTED***"
        assert event["jwt_secret"] == "***REDACTED***"

    def test_keeps_identifiers(self):
        event = redact_sensitive_fields(
            None, "info", {"event": "x", "user_uuid": "u", "key_id": 3, "prefix": "abc"}
        )
        assert event == {"event": "x", "user_uuid": "u", "key_id": 3, "prefix": "abc"}
