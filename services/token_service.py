"""
Signed, time-boxed tokens (HS256 JWTs).

Four kinds share one signing key and one claim layout:

    access               1 hour    authorizes API calls
    refresh              30 days   mints new access tokens, nothing else
    activation           30 days   activates an account
    codespaceinvitation  7 days    grants an access level on a code space

Tokens are stateless: there is no revocation list, expiry is the only
lifetime bound. A token is valid only while ``now < exp`` and only for the
kind it was issued as; validation never raises and never says which check
failed.
"""

from __future__ import annotations

import hmac
import uuid
from datetime import timedelta
from typing import Any, Optional, Type, TypeVar

import jwt
from pydantic import ValidationError as PydanticValidationError

from errors import InvalidTokenTypeError
from schemas.models.code_space import AccessLevel
from schemas.models.token import (
    ActivationTokenClaims,
    AuthTokenClaims,
    CodeSpaceInvitationTokenClaims,
    TokenClaims,
    TokenType,
)
from shared.clock import Clock, SystemClock

ALGORITHM = "HS256"

TOKEN_LIFETIMES = {
    TokenType.ACCESS: timedelta(hours=1),
    TokenType.REFRESH: timedelta(days=30),
    TokenType.ACTIVATION: timedelta(days=30),
    TokenType.CODE_SPACE_INVITATION: timedelta(days=7),
}

_AUTH_TOKEN_TYPES = (TokenType.ACCESS, TokenType.REFRESH)

# iat/exp are checked against the injected clock, not PyJWT's wall clock
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": ["sub", "iat", "exp", "jti"],
}

ClaimsT = TypeVar("ClaimsT", bound=TokenClaims)


class TokenService:
    def __init__(self, secret_key: str, clock: Optional[Clock] = None) -> None:
        self._secret_key = secret_key
        self._clock = clock or SystemClock()

    # ── Issuing ──────────────────────────────────────────────────────────────

    def _issue(self, subject: str, token_type: TokenType, **extra: Any) -> str:
        now = self._clock.now()
        claims = {
            "sub": subject,
            "token_type": token_type.value,
            "iat": int(now.timestamp()),
            "exp": int((now + TOKEN_LIFETIMES[token_type]).timestamp()),
            "jti": str(uuid.uuid4()),
            **extra,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def issue_auth_token(self, subject: str, token_type: TokenType) -> str:
        """Issue an access or refresh token for *subject*.

        Raises:
            InvalidTokenTypeError: *token_type* is neither access nor refresh.
        """
        if token_type not in _AUTH_TOKEN_TYPES:
            raise InvalidTokenTypeError(
                f"invalid token type {token_type}, expected "
                f"{TokenType.ACCESS.value} or {TokenType.REFRESH.value}"
            )
        return self._issue(subject, TokenType(token_type))

    def issue_activation_token(self, subject: str) -> str:
        return self._issue(subject, TokenType.ACTIVATION)

    def issue_code_space_invitation_token(
        self,
        subject: str,
        invitee_email: str,
        code_space_id: int,
        access_level: AccessLevel,
    ) -> str:
        """Issue an invitation from *subject* (the inviter) to *invitee_email*."""
        return self._issue(
            subject,
            TokenType.CODE_SPACE_INVITATION,
            invitee_email=invitee_email,
            code_space_id=code_space_id,
            access_level=int(access_level),
        )

    # ── Validating ───────────────────────────────────────────────────────────

    def _validate(
        self, token: str, token_type: TokenType, claims_model: Type[ClaimsT]
    ) -> Optional[ClaimsT]:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
            )
            claims = claims_model.model_validate(payload)
        except (jwt.InvalidTokenError, PydanticValidationError, TypeError):
            return None

        expected = str(getattr(token_type, "value", token_type))
        if not hmac.compare_digest(
            claims.token_type.encode("utf-8"), expected.encode("utf-8")
        ):
            return None

        try:
            expires_at = claims.expires_at
        except (OverflowError, OSError, ValueError):
            return None
        if self._clock.now() >= expires_at:
            return None

        return claims

    def validate_auth_token(
        self, token: str, token_type: TokenType
    ) -> Optional[AuthTokenClaims]:
        """Return the claims if *token* is a valid, unexpired *token_type* token."""
        return self._validate(token, token_type, AuthTokenClaims)

    def validate_activation_token(self, token: str) -> Optional[ActivationTokenClaims]:
        return self._validate(token, TokenType.ACTIVATION, ActivationTokenClaims)

    def validate_code_space_invitation_token(
        self, token: str
    ) -> Optional[CodeSpaceInvitationTokenClaims]:
        return self._validate(
            token, TokenType.CODE_SPACE_INVITATION, CodeSpaceInvitationTokenClaims
        )
