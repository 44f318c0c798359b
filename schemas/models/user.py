"""
User document model.

Users register inactive and are activated through the link carried by an
activation token. password_hash is the argon2 hash; plaintext is never stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import DocumentModel


class UserDoc(DocumentModel):
    """Document model for the `users` collection."""

    uuid: str
    email: str
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    is_active: bool = False
    is_superuser: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
