"""
Request DTOs for code space endpoints.

CreateCodeSpaceRequest  — POST /code/space
UpdateCodeSpaceRequest  — PATCH /code/space/{name}
InviteUserRequest       — POST /code/space/{name}/access
RemoveUserRequest       — DELETE /code/space/{name}/access
AcceptInvitationRequest — POST /code/space/{name}/access/accept
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from schemas.models.code_space import AccessLevel
from services.languages import LANGUAGES


class CreateCodeSpaceRequest(BaseModel):
    language: str

    @field_validator("language", mode="after")
    @classmethod
    def _supported(cls, v: str) -> str:
        if v not in LANGUAGES:
            raise ValueError(f"language must be one of: {', '.join(sorted(LANGUAGES))}")
        return v


class UpdateCodeSpaceRequest(BaseModel):
    contents: Optional[str] = None


class InviteUserRequest(BaseModel):
    email: EmailStr
    access_level: str

    @field_validator("access_level", mode="after")
    @classmethod
    def _known_level(cls, v: str) -> str:
        AccessLevel.from_api(v)
        return v

    @property
    def level(self) -> AccessLevel:
        return AccessLevel.from_api(self.access_level)


class RemoveUserRequest(BaseModel):
    user_uuid: str


class AcceptInvitationRequest(BaseModel):
    token: str
