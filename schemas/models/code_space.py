"""
Code space and code space access document models.

A code space's author implicitly holds READ_WRITE; that is derived from
author_uuid and never stored as a CodeSpaceAccessDoc. Every other user's
access comes from an accepted invitation.
"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Optional

from schemas.models.base import DocumentModel


class AccessLevel(IntEnum):
    """Ordered access levels; a higher level includes every lower capability."""

    READ_ONLY = 1
    READ_WRITE = 2

    def to_api(self) -> str:
        return _API_NAMES[self]

    @classmethod
    def from_api(cls, value: str) -> "AccessLevel":
        for level, name in _API_NAMES.items():
            if name == value:
                return level
        raise ValueError(f"unknown access level {value!r}")


_API_NAMES = {
    AccessLevel.READ_ONLY: "R",
    AccessLevel.READ_WRITE: "W",
}


class CodeSpaceDoc(DocumentModel):
    """Document model for the `code-spaces` collection."""

    id: Optional[int] = None
    author_uuid: Optional[str] = None
    name: str
    language: str
    contents: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CodeSpaceAccessDoc(DocumentModel):
    """Document model for the `code-space-access` collection.

    At most one record exists per (user_uuid, code_space_id).
    """

    id: Optional[int] = None
    user_uuid: str
    code_space_id: int
    level: AccessLevel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
