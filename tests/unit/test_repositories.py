"""Unit tests for the in-memory repositories."""

from datetime import timedelta

import pytest

from errors import UserAlreadyExistsError
from repositories.memory import (
    InMemoryApiKeyRepository,
    InMemoryCodeSpaceRepository,
    InMemoryUserRepository,
)
from schemas.models.api_key import ApiKeyDoc
from schemas.models.code_space import AccessLevel, CodeSpaceAccessDoc, CodeSpaceDoc
from schemas.models.user import UserDoc


def _user(uuid: str = "u1", email: str = "a@example.com") -> UserDoc:
    return UserDoc(uuid=uuid, email=email, password_hash="h")


def _key(user_uuid: str = "u1", prefix: str = "abcd1234", **kw) -> ApiKeyDoc:
    return ApiKeyDoc(user_uuid=user_uuid, prefix=prefix, hashed_key="h", name="k", **kw)


class TestInMemoryUserRepository:
    async def test_create_stamps_times(self, clock):
        repo = InMemoryUserRepository(clock)
        user = await repo.create(_user())
        assert user.created_at == clock.now()
        assert user.updated_at == clock.now()

    async def test_duplicate_email_case_insensitive(self, clock):
        repo = InMemoryUserRepository(clock)
        await repo.create(_user())
        with pytest.raises(UserAlreadyExistsError):
            await repo.create(_user(uuid="u2", email="A@Example.com"))

    async def test_get_by_email_case_insensitive(self, clock):
        repo = InMemoryUserRepository(clock)
        await repo.create(_user())
        assert (await repo.get_by_email("A@EXAMPLE.COM")).uuid == "u1"

    async def test_activate(self, clock):
        repo = InMemoryUserRepository(clock)
        await repo.create(_user())
        assert await repo.activate("u1") is True
        assert (await repo.get_by_uuid("u1")).is_active is True

    async def test_activate_unknown(self, clock):
        assert await InMemoryUserRepository(clock).activate("nope") is False

    async def test_update_bumps_updated_at(self, clock):
        repo = InMemoryUserRepository(clock)
        await repo.create(_user())
        clock.advance(timedelta(minutes=5))
        user = await repo.update("u1", {"first_name": "Ada"})
        assert user.first_name == "Ada"
        assert user.updated_at == clock.now()
        assert user.created_at == clock.now() - timedelta(minutes=5)

    async def test_returned_models_are_copies(self, clock):
        repo = InMemoryUserRepository(clock)
        user = await repo.create(_user())
        user.first_name = "mutated"
        assert (await repo.get_by_uuid("u1")).first_name == ""


class TestInMemoryApiKeyRepository:
    async def test_ids_increment(self, clock):
        repo = InMemoryApiKeyRepository(clock)
        assert (await repo.create(_key())).id == 1
        assert (await repo.create(_key())).id == 2

    async def test_list_by_user(self, clock):
        repo = InMemoryApiKeyRepository(clock)
        await repo.create(_key("u1"))
        await repo.create(_key("u2"))
        assert [k.user_uuid for k in await repo.list_by_user("u1")] == ["u1"]

    async def test_list_active_by_prefix_skips_expired(self, clock):
        repo = InMemoryApiKeyRepository(clock)
        await repo.create(_key(expires_at=clock.now() + timedelta(days=1)))
        await repo.create(_key(expires_at=clock.now()))
        await repo.create(_key(prefix="zzzz9999"))
        active = await repo.list_active_by_prefix("abcd1234", clock.now())
        assert [k.id for k in active] == [1]

    async def test_update_scoped_to_owner(self, clock):
        repo = InMemoryApiKeyRepository(clock)
        key = await repo.create(_key("u1"))
        assert await repo.update("u2", key.id, {"name": "x"}) is None
        assert (await repo.update("u1", key.id, {"name": "x"})).name == "x"

    async def test_delete_scoped_to_owner(self, clock):
        repo = InMemoryApiKeyRepository(clock)
        key = await repo.create(_key("u1"))
        assert await repo.delete("u2", key.id) is False
        assert await repo.delete("u1", key.id) is True
        assert await repo.list_by_user("u1") == []


class TestInMemoryCodeSpaceRepository:
    async def _space(self, repo, author="u1", name="calm-otter-0000"):
        return await repo.create(CodeSpaceDoc(author_uuid=author, name=name, language="python"))

    async def test_create_and_get(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        space = await self._space(repo)
        assert (await repo.get(space.id)).name == "calm-otter-0000"
        assert (await repo.get_by_name("calm-otter-0000")).id == space.id
        assert await repo.get_by_name("missing") is None

    async def test_list_for_user(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        own = await self._space(repo, "u1", "a")
        shared = await self._space(repo, "u2", "b")
        await self._space(repo, "u2", "c")
        await repo.upsert_access(
            CodeSpaceAccessDoc(user_uuid="u1", code_space_id=shared.id, level=AccessLevel.READ_ONLY)
        )
        listed = await repo.list_for_user("u1")
        assert [(s.id, a.level if a else None) for s, a in listed] == [
            (own.id, None),
            (shared.id, AccessLevel.READ_ONLY),
        ]

    async def test_upsert_access_keeps_single_record(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        space = await self._space(repo)
        first = await repo.upsert_access(
            CodeSpaceAccessDoc(user_uuid="u2", code_space_id=space.id, level=AccessLevel.READ_ONLY)
        )
        second = await repo.upsert_access(
            CodeSpaceAccessDoc(user_uuid="u2", code_space_id=space.id, level=AccessLevel.READ_WRITE)
        )
        assert first.id == second.id
        assert second.level is AccessLevel.READ_WRITE
        assert len(await repo.list_access(space.id)) == 1

    async def test_update_contents(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        space = await self._space(repo)
        assert (await repo.update_contents(space.id, "print(1)")).contents == "print(1)"
        assert await repo.update_contents(999, "x") is None

    async def test_delete_cascades_access(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        space = await self._space(repo)
        await repo.upsert_access(
            CodeSpaceAccessDoc(user_uuid="u2", code_space_id=space.id, level=AccessLevel.READ_ONLY)
        )
        assert await repo.delete(space.id) is True
        assert await repo.get_access("u2", space.id) is None
        assert await repo.delete(space.id) is False

    async def test_delete_access(self, clock):
        repo = InMemoryCodeSpaceRepository(clock)
        space = await self._space(repo)
        await repo.upsert_access(
            CodeSpaceAccessDoc(user_uuid="u2", code_space_id=space.id, level=AccessLevel.READ_ONLY)
        )
        assert await repo.delete_access("u2", space.id) is True
        assert await repo.delete_access("u2", space.id) is False
