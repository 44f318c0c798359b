"""Repository protocols — services depend on these, not on a storage engine."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from schemas.models.api_key import ApiKeyDoc
from schemas.models.code_space import CodeSpaceAccessDoc, CodeSpaceDoc
from schemas.models.user import UserDoc


class UserRepository(Protocol):
    async def create(self, user: UserDoc) -> UserDoc: ...

    async def get_by_uuid(self, user_uuid: str) -> Optional[UserDoc]: ...

    async def get_by_email(self, email: str) -> Optional[UserDoc]: ...

    async def activate(self, user_uuid: str) -> bool: ...

    async def update(self, user_uuid: str, fields: dict[str, Any]) -> Optional[UserDoc]: ...


class ApiKeyRepository(Protocol):
    async def create(self, api_key: ApiKeyDoc) -> ApiKeyDoc: ...

    async def list_by_user(self, user_uuid: str) -> list[ApiKeyDoc]: ...

    async def list_active_by_prefix(self, prefix: str, now: datetime) -> list[ApiKeyDoc]: ...

    async def update(
        self, user_uuid: str, key_id: int, fields: dict[str, Any]
    ) -> Optional[ApiKeyDoc]: ...

    async def delete(self, user_uuid: str, key_id: int) -> bool: ...


class CodeSpaceRepository(Protocol):
    async def create(self, code_space: CodeSpaceDoc) -> CodeSpaceDoc: ...

    async def get(self, code_space_id: int) -> Optional[CodeSpaceDoc]: ...

    async def get_by_name(self, name: str) -> Optional[CodeSpaceDoc]: ...

    async def list_for_user(
        self, user_uuid: str
    ) -> list[tuple[CodeSpaceDoc, Optional[CodeSpaceAccessDoc]]]: ...

    async def update_contents(
        self, code_space_id: int, contents: str
    ) -> Optional[CodeSpaceDoc]: ...

    async def delete(self, code_space_id: int) -> bool: ...

    async def get_access(
        self, user_uuid: str, code_space_id: int
    ) -> Optional[CodeSpaceAccessDoc]: ...

    async def upsert_access(self, access: CodeSpaceAccessDoc) -> CodeSpaceAccessDoc: ...

    async def list_access(self, code_space_id: int) -> list[CodeSpaceAccessDoc]: ...

    async def delete_access(self, user_uuid: str, code_space_id: int) -> bool: ...
