"""
API key document model.

hashed_key stores argon2(raw_key); the raw key is shown once at creation
and never stored. prefix (8 chars, the part before the ".") is stored in
plaintext for lookup and display.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import DocumentModel


class ApiKeyDoc(DocumentModel):
    """Document model for the `api-keys` collection."""

    id: Optional[int] = None
    user_uuid: str
    prefix: str
    hashed_key: str
    name: str
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or self.expires_at > now
