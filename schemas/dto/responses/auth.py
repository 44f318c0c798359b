"""
Response DTOs for authentication endpoints.

UserResponse           — POST /auth/users, GET/PATCH /auth/users/me
TokenPairResponse      — POST /auth/tokens
AccessTokenResponse    — POST /auth/tokens/refresh
TokenValidityResponse  — POST /auth/tokens/validate
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.user import UserDoc


class UserResponse(BaseModel):
    """Public user profile; never includes the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    uuid: str
    email: str
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, user: UserDoc) -> "UserResponse":
        return cls(
            uuid=user.uuid,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenPairResponse(BaseModel):
    access: str
    refresh: str


class AccessTokenResponse(BaseModel):
    access: str


class TokenValidityResponse(BaseModel):
    valid: bool
