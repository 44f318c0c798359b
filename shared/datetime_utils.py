"""
Expiry timestamp parsing for API keys.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def parse_expiry(value: Any) -> Optional[datetime]:
    """Normalize a client-supplied expiry to an aware UTC datetime.

    ``int``/``float`` values are Unix epoch seconds; strings are ISO 8601,
    with a trailing ``Z`` and naive values both read as UTC. Returns
    ``None`` for ``None`` and for anything unparseable, so callers that
    must tell the two apart check for ``None`` input first.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
