"""
Random string and secret generators.

Everything here backs a credential or an identifier a user can guess at,
so all randomness comes from the ``secrets`` module.
"""

from __future__ import annotations

import base64
import secrets
import string

ALPHANUMERIC = string.ascii_lowercase + string.ascii_uppercase + string.digits

_ADJECTIVES = (
    "amber", "brave", "calm", "clever", "cosmic", "crimson", "dusty", "eager",
    "fuzzy", "gentle", "golden", "hidden", "jolly", "lucky", "mellow", "misty",
    "noble", "quiet", "rapid", "silent", "sleepy", "sunny", "swift", "witty",
)
_NOUNS = (
    "badger", "compiler", "falcon", "kernel", "lambda", "lantern", "meadow",
    "otter", "parser", "pixel", "quasar", "raven", "river", "socket", "thunder",
    "tuple", "vector", "walrus", "willow", "wizard",
)


def generate_random_string(length: int, alphabet: str = ALPHANUMERIC) -> str:
    """Generate a cryptographically secure random string.

    Args:
        length: Number of characters.
        alphabet: Characters to draw from (default letters and digits).
    """
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_api_key_secret(n_bytes: int = 32) -> str:
    """Return *n_bytes* of secure randomness, standard-base64 encoded.

    32 bytes encode to 44 characters (including one ``=`` pad). The
    standard alphabet never produces ``.``.
    """
    return base64.b64encode(secrets.token_bytes(n_bytes)).decode("ascii")


def generate_code_space_name() -> str:
    """Generate a readable code space name, e.g. ``swift-otter-x4k9``."""
    suffix = generate_random_string(4, string.ascii_lowercase + string.digits)
    return f"{secrets.choice(_ADJECTIVES)}-{secrets.choice(_NOUNS)}-{suffix}"
