"""
Input validators: pure functions, no framework dependencies.
"""

from __future__ import annotations

import re

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

_SPECIAL_CHARS = r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>\/?~`]'


def validate_password(password: str) -> tuple[bool, list[str]]:
    """Check *password* against the account password policy.

    Returns:
        ``(is_valid, missing_requirements)``
    """
    if not password:
        return False, ["Password is required"]

    missing = []
    if len(password) < MIN_PASSWORD_LENGTH:
        missing.append(f"At least {MIN_PASSWORD_LENGTH} characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        missing.append(f"Maximum {MAX_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        missing.append("At least one uppercase letter")
    if not re.search(r"[a-z]", password):
        missing.append("At least one lowercase letter")
    if not re.search(r"[0-9]", password):
        missing.append("At least one number")
    if not re.search(_SPECIAL_CHARS, password):
        missing.append("At least one special character")

    return not missing, missing
