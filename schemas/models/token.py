"""
Signed token kinds and their claim sets.

Claim names match the JWT payload keys. Every kind carries sub, token_type,
iat, exp and jti; invitations additionally carry the invitee e-mail, the
target code space and the proposed access level.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict

from schemas.models.code_space import AccessLevel


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
    ACTIVATION = "activation"
    CODE_SPACE_INVITATION = "codespaceinvitation"


class TokenClaims(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sub: str
    token_type: str
    iat: int
    exp: int
    jti: str

    @property
    def subject(self) -> str:
        return self.sub

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class AuthTokenClaims(TokenClaims):
    """Claims of access and refresh tokens."""


class ActivationTokenClaims(TokenClaims):
    """Claims of account activation tokens."""


class CodeSpaceInvitationTokenClaims(TokenClaims):
    """Claims of code space invitation tokens."""

    invitee_email: str
    code_space_id: int
    access_level: AccessLevel
