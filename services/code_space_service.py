"""
CodeSpaceService — code space CRUD, execution and collaboration.

Every operation resolves the caller's effective level through
AccessControl before touching the repository. A user with no access at
all gets CodeSpaceNotFoundError (the space's existence is not revealed);
a user with too little access gets CodeSpaceAccessDeniedError.
"""

from __future__ import annotations

from typing import Optional

from errors import (
    CodeSpaceAccessDeniedError,
    CodeSpaceNotFoundError,
    UnsupportedLanguageError,
    UserNotFoundError,
)
from infrastructure.email.protocol import EmailProvider
from infrastructure.piston import PistonClient
from repositories.protocol import CodeSpaceRepository, UserRepository
from schemas.dto.piston import PistonExecuteRequest, PistonExecuteResponse, PistonFile
from schemas.models.code_space import AccessLevel, CodeSpaceAccessDoc, CodeSpaceDoc
from schemas.models.user import UserDoc
from services.access_control import AccessControl
from services.languages import get_language
from shared.generators import generate_code_space_name
from shared.logging import get_logger

log = get_logger(__name__)

FRONTEND_CODE_SPACE_INVITATION_ROUTE = "/code/space/{name}/invitation/{token}"


class CodeSpaceService:
    def __init__(
        self,
        code_spaces: CodeSpaceRepository,
        users: UserRepository,
        access_control: AccessControl,
        piston: PistonClient,
        email: EmailProvider,
        frontend_base_url: str,
    ) -> None:
        self._code_spaces = code_spaces
        self._users = users
        self._access = access_control
        self._piston = piston
        self._email = email
        self._frontend_base_url = frontend_base_url.rstrip("/")

    async def _resolve(
        self, user_uuid: str, name: str, required: AccessLevel
    ) -> tuple[CodeSpaceDoc, AccessLevel, Optional[CodeSpaceAccessDoc]]:
        code_space = await self._code_spaces.get_by_name(name)
        if code_space is None:
            raise CodeSpaceNotFoundError("code space not found")

        access = await self._code_spaces.get_access(user_uuid, code_space.id)
        level = self._access.effective_level(user_uuid, code_space, access)
        if level is None:
            raise CodeSpaceNotFoundError("code space not found")
        if not self._access.authorize(user_uuid, code_space, required, access):
            log.warning(
                "code_space_access_denied",
                user_uuid=user_uuid,
                code_space_id=code_space.id,
                required=required.name,
            )
            raise CodeSpaceAccessDeniedError("code space access denied")
        return code_space, level, access

    async def create_code_space(
        self, user_uuid: str, language: str
    ) -> tuple[CodeSpaceDoc, AccessLevel]:
        config = get_language(language)
        if config is None:
            raise UnsupportedLanguageError(f"unknown language {language}", field="language")

        code_space = await self._code_spaces.create(
            CodeSpaceDoc(
                author_uuid=user_uuid,
                name=generate_code_space_name(),
                language=language,
                contents=config.template,
            )
        )
        log.info("code_space_created", user_uuid=user_uuid, code_space_id=code_space.id)
        return code_space, AccessLevel.READ_WRITE

    async def list_code_spaces(
        self, user_uuid: str
    ) -> list[tuple[CodeSpaceDoc, AccessLevel]]:
        results = []
        for code_space, access in await self._code_spaces.list_for_user(user_uuid):
            level = self._access.effective_level(user_uuid, code_space, access)
            if level is not None:
                results.append((code_space, level))
        return results

    async def get_code_space(
        self, user_uuid: str, name: str
    ) -> tuple[CodeSpaceDoc, AccessLevel]:
        code_space, level, _ = await self._resolve(user_uuid, name, AccessLevel.READ_ONLY)
        return code_space, level

    async def update_code_space(
        self, user_uuid: str, name: str, contents: Optional[str]
    ) -> tuple[CodeSpaceDoc, AccessLevel]:
        code_space, level, _ = await self._resolve(user_uuid, name, AccessLevel.READ_WRITE)
        if contents is None:
            return code_space, level

        updated = await self._code_spaces.update_contents(code_space.id, contents)
        if updated is None:
            raise CodeSpaceNotFoundError("code space not found")
        return updated, level

    async def delete_code_space(self, user_uuid: str, name: str) -> None:
        code_space, _, _ = await self._resolve(user_uuid, name, AccessLevel.READ_WRITE)
        await self._code_spaces.delete(code_space.id)
        log.info("code_space_deleted", user_uuid=user_uuid, code_space_id=code_space.id)

    async def run_code_space(self, user_uuid: str, name: str) -> PistonExecuteResponse:
        code_space, _, _ = await self._resolve(user_uuid, name, AccessLevel.READ_ONLY)

        config = get_language(code_space.language)
        if config is None:
            raise UnsupportedLanguageError(f"unknown language {code_space.language}")

        request = PistonExecuteRequest(
            language=code_space.language,
            version=config.version,
            files=[PistonFile(name=config.file_name, content=code_space.contents)],
        )
        return await self._piston.execute(request)

    async def list_code_space_users(
        self, user_uuid: str, name: str
    ) -> list[tuple[UserDoc, AccessLevel]]:
        """List everyone with access, the author first."""
        code_space, _, _ = await self._resolve(user_uuid, name, AccessLevel.READ_WRITE)

        results = []
        if code_space.author_uuid is not None:
            author = await self._users.get_by_uuid(code_space.author_uuid)
            if author is not None:
                results.append((author, AccessLevel.READ_WRITE))

        for access in await self._code_spaces.list_access(code_space.id):
            if access.user_uuid == code_space.author_uuid:
                continue
            user = await self._users.get_by_uuid(access.user_uuid)
            if user is not None:
                results.append((user, AccessLevel(access.level)))
        return results

    async def invite_user(
        self,
        user_uuid: str,
        name: str,
        invitee_email: str,
        level: AccessLevel,
    ) -> str:
        """Invite *invitee_email* and mail them the link; returns the token."""
        code_space = await self._code_spaces.get_by_name(name)
        access = None
        if code_space is not None:
            access = await self._code_spaces.get_access(user_uuid, code_space.id)
            if self._access.effective_level(user_uuid, code_space, access) is None:
                code_space = None

        token = self._access.invite(user_uuid, code_space, invitee_email, level, access)

        invitation_url = self._frontend_base_url + FRONTEND_CODE_SPACE_INVITATION_ROUTE.format(
            name=code_space.name, token=token
        )
        sent = await self._email.send_code_space_invitation_email(
            invitee_email, code_space.name, invitation_url
        )
        if not sent:
            log.error("code_space_invitation_email_failed", code_space_id=code_space.id)
        else:
            log.info(
                "code_space_invitation_sent",
                user_uuid=user_uuid,
                code_space_id=code_space.id,
                level=AccessLevel(level).name,
            )
        return token

    async def remove_user(self, user_uuid: str, name: str, invitee_uuid: str) -> None:
        code_space, _, _ = await self._resolve(user_uuid, name, AccessLevel.READ_WRITE)
        await self._code_spaces.delete_access(invitee_uuid, code_space.id)
        log.info(
            "code_space_user_removed",
            user_uuid=user_uuid,
            invitee_uuid=invitee_uuid,
            code_space_id=code_space.id,
        )

    async def accept_invitation(
        self, name: str, token: str
    ) -> tuple[CodeSpaceDoc, CodeSpaceAccessDoc]:
        """Persist the grant carried by an invitation token.

        Acceptance is an upsert keyed on (invitee, code space), so replaying
        the same token re-applies the same level rather than duplicating it.
        """
        grant = self._access.accept(token)

        code_space = await self._code_spaces.get(grant.code_space_id)
        if code_space is None or code_space.name != name:
            raise CodeSpaceNotFoundError("code space not found")

        invitee = await self._users.get_by_email(grant.invitee_email)
        if invitee is None:
            raise UserNotFoundError("user not found")

        if invitee.uuid == code_space.author_uuid:
            # The author already holds READ_WRITE; no access record is stored
            log.info(
                "code_space_invitation_accepted_by_author",
                user_uuid=invitee.uuid,
                code_space_id=code_space.id,
            )
            return code_space, CodeSpaceAccessDoc(
                user_uuid=invitee.uuid,
                code_space_id=code_space.id,
                level=AccessLevel.READ_WRITE,
            )

        access = await self._code_spaces.upsert_access(
            CodeSpaceAccessDoc(
                user_uuid=invitee.uuid,
                code_space_id=code_space.id,
                level=grant.level,
            )
        )
        log.info(
            "code_space_invitation_accepted",
            user_uuid=invitee.uuid,
            code_space_id=code_space.id,
            level=grant.level.name,
        )
        return code_space, access
