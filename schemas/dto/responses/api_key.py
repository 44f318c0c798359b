"""
Response DTOs for API key management endpoints.

ApiKeyResponse        — one key entry in GET /auth/api-keys
ApiKeyCreatedResponse — POST /auth/api-keys (201), includes ``raw_key`` once
ApiKeysListResponse   — GET /auth/api-keys (200)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.api_key import ApiKeyDoc


class ApiKeyResponse(BaseModel):
    """A single API key entry. Only the ``prefix`` is shown, never the key."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_uuid: str
    prefix: str
    name: str
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, api_key: ApiKeyDoc) -> "ApiKeyResponse":
        return cls(
            id=api_key.id,
            user_uuid=api_key.user_uuid,
            prefix=api_key.prefix,
            name=api_key.name,
            expires_at=api_key.expires_at,
            created_at=api_key.created_at,
            updated_at=api_key.updated_at,
        )


class ApiKeyCreatedResponse(ApiKeyResponse):
    """The ONLY response that carries the full key; it is hashed before storage."""

    raw_key: str


class ApiKeysListResponse(BaseModel):
    keys: list[ApiKeyResponse]
