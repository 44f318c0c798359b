"""
Request DTOs for API key management endpoints.

CreateApiKeyRequest — POST /auth/api-keys
UpdateApiKeyRequest — PATCH /auth/api-keys/{key_id}
"""

from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, field_validator

from shared.datetime_utils import parse_expiry


def _check_expires_at(v):
    if v is not None and parse_expiry(v) is None:
        raise ValueError("expires_at must be an ISO 8601 datetime or epoch seconds")
    return v


# ISO 8601 string or Unix epoch seconds; null means no expiration
ExpiresAt = Annotated[Optional[Union[str, int, float]], AfterValidator(_check_expires_at)]


class CreateApiKeyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    expires_at: ExpiresAt = None

    @field_validator("name", mode="after")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v


class UpdateApiKeyRequest(BaseModel):
    """Only fields present in the body are applied; ``expires_at: null`` clears expiry."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    expires_at: ExpiresAt = None

    @field_validator("name", mode="after")
    @classmethod
    def _name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude_unset=True)
        if "expires_at" in fields:
            fields["expires_at"] = parse_expiry(fields["expires_at"])
        if fields.get("name") is None:
            fields.pop("name", None)
        return fields
