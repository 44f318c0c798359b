"""
In-memory repositories.

Dict-backed implementations of the repository protocols, used by the
development ASGI entry point and by tests. Records are stored as copies so
callers can't mutate stored state by holding on to a model.
"""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Any, Optional

from errors import UserAlreadyExistsError
from schemas.models.api_key import ApiKeyDoc
from schemas.models.code_space import CodeSpaceAccessDoc, CodeSpaceDoc
from schemas.models.user import UserDoc
from shared.clock import Clock, SystemClock


class InMemoryUserRepository:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._users: dict[str, UserDoc] = {}

    async def create(self, user: UserDoc) -> UserDoc:
        email = user.email.lower()
        if any(u.email.lower() == email for u in self._users.values()):
            raise UserAlreadyExistsError("user already exists")
        now = self._clock.now()
        stored = user.model_copy(update={"created_at": now, "updated_at": now})
        self._users[stored.uuid] = stored
        return stored.model_copy()

    async def get_by_uuid(self, user_uuid: str) -> Optional[UserDoc]:
        user = self._users.get(user_uuid)
        return user.model_copy() if user else None

    async def get_by_email(self, email: str) -> Optional[UserDoc]:
        email = email.lower()
        for user in self._users.values():
            if user.email.lower() == email:
                return user.model_copy()
        return None

    async def activate(self, user_uuid: str) -> bool:
        return await self.update(user_uuid, {"is_active": True}) is not None

    async def update(self, user_uuid: str, fields: dict[str, Any]) -> Optional[UserDoc]:
        user = self._users.get(user_uuid)
        if user is None:
            return None
        updated = user.model_copy(update={**fields, "updated_at": self._clock.now()})
        self._users[user_uuid] = updated
        return updated.model_copy()


class InMemoryApiKeyRepository:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._keys: dict[int, ApiKeyDoc] = {}
        self._ids = itertools.count(1)

    async def create(self, api_key: ApiKeyDoc) -> ApiKeyDoc:
        now = self._clock.now()
        stored = api_key.model_copy(
            update={"id": next(self._ids), "created_at": now, "updated_at": now}
        )
        self._keys[stored.id] = stored
        return stored.model_copy()

    async def list_by_user(self, user_uuid: str) -> list[ApiKeyDoc]:
        return [k.model_copy() for k in self._keys.values() if k.user_uuid == user_uuid]

    async def list_active_by_prefix(self, prefix: str, now: datetime) -> list[ApiKeyDoc]:
        return [
            k.model_copy()
            for k in self._keys.values()
            if k.prefix == prefix and k.is_active(now)
        ]

    async def update(
        self, user_uuid: str, key_id: int, fields: dict[str, Any]
    ) -> Optional[ApiKeyDoc]:
        key = self._keys.get(key_id)
        if key is None or key.user_uuid != user_uuid:
            return None
        updated = key.model_copy(update={**fields, "updated_at": self._clock.now()})
        self._keys[key_id] = updated
        return updated.model_copy()

    async def delete(self, user_uuid: str, key_id: int) -> bool:
        key = self._keys.get(key_id)
        if key is None or key.user_uuid != user_uuid:
            return False
        del self._keys[key_id]
        return True


class InMemoryCodeSpaceRepository:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._spaces: dict[int, CodeSpaceDoc] = {}
        self._access: dict[tuple[str, int], CodeSpaceAccessDoc] = {}
        self._space_ids = itertools.count(1)
        self._access_ids = itertools.count(1)

    async def create(self, code_space: CodeSpaceDoc) -> CodeSpaceDoc:
        now = self._clock.now()
        stored = code_space.model_copy(
            update={"id": next(self._space_ids), "created_at": now, "updated_at": now}
        )
        self._spaces[stored.id] = stored
        return stored.model_copy()

    async def get(self, code_space_id: int) -> Optional[CodeSpaceDoc]:
        space = self._spaces.get(code_space_id)
        return space.model_copy() if space else None

    async def get_by_name(self, name: str) -> Optional[CodeSpaceDoc]:
        for space in self._spaces.values():
            if space.name == name:
                return space.model_copy()
        return None

    async def list_for_user(
        self, user_uuid: str
    ) -> list[tuple[CodeSpaceDoc, Optional[CodeSpaceAccessDoc]]]:
        results = []
        for space in self._spaces.values():
            access = self._access.get((user_uuid, space.id))
            if space.author_uuid == user_uuid or access is not None:
                results.append(
                    (space.model_copy(), access.model_copy() if access else None)
                )
        return results

    async def update_contents(
        self, code_space_id: int, contents: str
    ) -> Optional[CodeSpaceDoc]:
        space = self._spaces.get(code_space_id)
        if space is None:
            return None
        updated = space.model_copy(
            update={"contents": contents, "updated_at": self._clock.now()}
        )
        self._spaces[code_space_id] = updated
        return updated.model_copy()

    async def delete(self, code_space_id: int) -> bool:
        if self._spaces.pop(code_space_id, None) is None:
            return False
        for key in [k for k in self._access if k[1] == code_space_id]:
            del self._access[key]
        return True

    async def get_access(
        self, user_uuid: str, code_space_id: int
    ) -> Optional[CodeSpaceAccessDoc]:
        access = self._access.get((user_uuid, code_space_id))
        return access.model_copy() if access else None

    async def upsert_access(self, access: CodeSpaceAccessDoc) -> CodeSpaceAccessDoc:
        key = (access.user_uuid, access.code_space_id)
        now = self._clock.now()
        existing = self._access.get(key)
        if existing is None:
            stored = access.model_copy(
                update={"id": next(self._access_ids), "created_at": now, "updated_at": now}
            )
        else:
            stored = existing.model_copy(update={"level": access.level, "updated_at": now})
        self._access[key] = stored
        return stored.model_copy()

    async def list_access(self, code_space_id: int) -> list[CodeSpaceAccessDoc]:
        return [a.model_copy() for a in self._access.values() if a.code_space_id == code_space_id]

    async def delete_access(self, user_uuid: str, code_space_id: int) -> bool:
        return self._access.pop((user_uuid, code_space_id), None) is not None
