"""
Who may read or write a code space.

Decisions only: callers hand in the records they already fetched and
persist whatever grant comes back. Authorship implies READ_WRITE; anyone
else needs an access record created by accepting an invitation.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from errors import CodeSpaceAccessDeniedError, CodeSpaceNotFoundError, InvalidTokenError
from schemas.models.code_space import AccessLevel, CodeSpaceAccessDoc, CodeSpaceDoc
from services.token_service import TokenService


class InvitationGrant(NamedTuple):
    code_space_id: int
    invitee_email: str
    level: AccessLevel
    inviter_uuid: str


class AccessControl:
    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    @staticmethod
    def effective_level(
        user_uuid: str,
        code_space: CodeSpaceDoc,
        access: Optional[CodeSpaceAccessDoc] = None,
    ) -> Optional[AccessLevel]:
        """Return the level *user_uuid* holds on *code_space*, or None."""
        if code_space.author_uuid is not None and code_space.author_uuid == user_uuid:
            return AccessLevel.READ_WRITE
        if (
            access is not None
            and access.user_uuid == user_uuid
            and access.code_space_id == code_space.id
        ):
            return AccessLevel(access.level)
        return None

    def authorize(
        self,
        user_uuid: str,
        code_space: CodeSpaceDoc,
        required: AccessLevel,
        access: Optional[CodeSpaceAccessDoc] = None,
    ) -> bool:
        level = self.effective_level(user_uuid, code_space, access)
        return level is not None and level >= required

    def invite(
        self,
        inviter_uuid: str,
        code_space: Optional[CodeSpaceDoc],
        invitee_email: str,
        level: AccessLevel,
        access: Optional[CodeSpaceAccessDoc] = None,
    ) -> str:
        """Return a signed invitation token.

        Raises:
            CodeSpaceNotFoundError: *code_space* is None.
            CodeSpaceAccessDeniedError: the inviter lacks READ_WRITE.
        """
        if code_space is None or code_space.id is None:
            raise CodeSpaceNotFoundError("code space not found")
        if not self.authorize(inviter_uuid, code_space, AccessLevel.READ_WRITE, access):
            raise CodeSpaceAccessDeniedError("code space access denied")
        return self._tokens.issue_code_space_invitation_token(
            inviter_uuid, invitee_email, code_space.id, AccessLevel(level)
        )

    def accept(self, token: str) -> InvitationGrant:
        """Turn a valid invitation token into the grant the caller must persist.

        Raises:
            InvalidTokenError: the token is invalid, expired or of another kind.
        """
        claims = self._tokens.validate_code_space_invitation_token(token)
        if claims is None:
            raise InvalidTokenError("invalid token")
        return InvitationGrant(
            code_space_id=claims.code_space_id,
            invitee_email=claims.invitee_email,
            level=claims.access_level,
            inviter_uuid=claims.sub,
        )
