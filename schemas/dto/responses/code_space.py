"""
Response DTOs for code space endpoints.

CodeSpaceResponse      — a code space plus the caller's access level ("R"/"W")
CodeSpacesListResponse — GET /code/space
CodeSpaceUserResponse  — one entry of GET /code/space/{name}/access
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from schemas.models.code_space import AccessLevel, CodeSpaceDoc
from schemas.models.user import UserDoc


class CodeSpaceResponse(BaseModel):
    id: int
    author_uuid: Optional[str] = None
    name: str
    language: str
    contents: str
    access_level: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, code_space: CodeSpaceDoc, level: AccessLevel) -> "CodeSpaceResponse":
        return cls(
            id=code_space.id,
            author_uuid=code_space.author_uuid,
            name=code_space.name,
            language=code_space.language,
            contents=code_space.contents,
            access_level=AccessLevel(level).to_api(),
            created_at=code_space.created_at,
            updated_at=code_space.updated_at,
        )


class CodeSpacesListResponse(BaseModel):
    code_spaces: list[CodeSpaceResponse]


class CodeSpaceUserResponse(BaseModel):
    uuid: str
    email: str
    first_name: str
    last_name: str
    access_level: str

    @classmethod
    def from_doc(cls, user: UserDoc, level: AccessLevel) -> "CodeSpaceUserResponse":
        return cls(
            uuid=user.uuid,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            access_level=AccessLevel(level).to_api(),
        )


class CodeSpaceUsersListResponse(BaseModel):
    users: list[CodeSpaceUserResponse]
