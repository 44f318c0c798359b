"""
AuthService — user accounts, JWT pairs and API keys.

Orchestrates the credential primitives (hasher, token service, API key
codec) against the user and API key repositories. All failures surface as
AppError subclasses; logging happens here, never in the primitives.
"""

from __future__ import annotations

import secrets
import uuid
from datetime import datetime
from typing import Any, Optional

from errors import (
    APIKeyNotFoundError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from infrastructure.email.protocol import EmailProvider
from repositories.protocol import ApiKeyRepository, UserRepository
from schemas.models.api_key import ApiKeyDoc
from schemas.models.token import TokenType
from schemas.models.user import UserDoc
from services.api_key_codec import APIKeyCodec
from services.token_service import TokenService
from shared.clock import Clock, SystemClock
from shared.crypto import CredentialHasher
from shared.logging import get_logger

log = get_logger(__name__)

FRONTEND_ACTIVATION_ROUTE = "/signup/activate/{token}"

# Stand-in subject for failed logins so both paths issue tokens
_DUMMY_USER_UUID = "93c58b3c-f087-4e97-805a-1e4676cdd5ec"


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        api_keys: ApiKeyRepository,
        hasher: CredentialHasher,
        tokens: TokenService,
        api_key_codec: APIKeyCodec,
        email: EmailProvider,
        frontend_base_url: str,
        clock: Optional[Clock] = None,
    ) -> None:
        self._users = users
        self._api_keys = api_keys
        self._hasher = hasher
        self._tokens = tokens
        self._codec = api_key_codec
        self._email = email
        self._frontend_base_url = frontend_base_url.rstrip("/")
        self._clock = clock or SystemClock()
        # Verified against when the user is unknown, keeping login timing flat
        self._dummy_password_hash = hasher.hash(secrets.token_urlsafe(32))

    # ── Users ────────────────────────────────────────────────────────────────

    async def create_user(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> UserDoc:
        """Register an inactive user and e-mail them an activation link.

        Raises:
            UserAlreadyExistsError: the e-mail is already registered.
        """
        user = UserDoc(
            uuid=str(uuid.uuid4()),
            email=email,
            password_hash=self._hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            is_active=False,
        )
        user = await self._users.create(user)
        log.info("user_created", user_uuid=user.uuid)

        token = self._tokens.issue_activation_token(user.uuid)
        activation_url = self._frontend_base_url + FRONTEND_ACTIVATION_ROUTE.format(
            token=token
        )
        sent = await self._email.send_activation_email(user.email, activation_url)
        if not sent:
            log.error("activation_email_failed", user_uuid=user.uuid)

        return user

    async def activate_user(self, token: str) -> None:
        claims = self._tokens.validate_activation_token(token)
        if claims is None:
            log.warning("user_activation_failed", reason="invalid_token")
            raise InvalidTokenError("invalid token")

        if not await self._users.activate(claims.sub):
            raise UserNotFoundError("user not found")
        log.info("user_activated", user_uuid=claims.sub)

    async def get_user(self, user_uuid: str) -> UserDoc:
        user = await self._users.get_by_uuid(user_uuid)
        if user is None:
            raise UserNotFoundError("user not found")
        return user

    async def update_user(
        self,
        user_uuid: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserDoc:
        fields: dict[str, Any] = {}
        if first_name is not None:
            fields["first_name"] = first_name
        if last_name is not None:
            fields["last_name"] = last_name

        user = await self._users.update(user_uuid, fields)
        if user is None:
            raise UserNotFoundError("user not found")
        return user

    # ── JWTs ─────────────────────────────────────────────────────────────────

    async def create_token_pair(self, email: str, password: str) -> tuple[str, str]:
        """Authenticate by e-mail and password; return ``(access, refresh)``.

        Unknown, inactive and wrong-password logins all do one hash
        verification and issue tokens before failing, so they cost the same.

        Raises:
            InvalidCredentialsError: authentication failed, for any reason.
        """
        user = await self._users.get_by_email(email)
        failed = user is None or not user.is_active

        subject = _DUMMY_USER_UUID if failed else user.uuid
        hashed = self._dummy_password_hash if failed else user.password_hash
        if not self._hasher.verify(hashed, password):
            failed = True
            subject = _DUMMY_USER_UUID

        access_token = self._tokens.issue_auth_token(subject, TokenType.ACCESS)
        refresh_token = self._tokens.issue_auth_token(subject, TokenType.REFRESH)

        if failed:
            log.warning("token_create_failed", reason="invalid_credentials")
            raise InvalidCredentialsError("incorrect email or password")

        log.info("token_pair_created", user_uuid=subject)
        return access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        claims = self._tokens.validate_auth_token(refresh_token, TokenType.REFRESH)
        if claims is None:
            log.warning("token_refresh_failed", reason="invalid_token")
            raise InvalidTokenError("invalid token")
        return self._tokens.issue_auth_token(claims.sub, TokenType.ACCESS)

    def validate_access_token(self, token: str) -> bool:
        return self._tokens.validate_auth_token(token, TokenType.ACCESS) is not None

    # ── API keys ─────────────────────────────────────────────────────────────

    async def create_api_key(
        self,
        user_uuid: str,
        name: str,
        expires_at: Optional[datetime] = None,
    ) -> tuple[ApiKeyDoc, str]:
        """Create a key for *user_uuid*; return the stored doc and the raw key.

        The raw key is returned only here and is never persisted.
        """
        created = self._codec.create()
        api_key = ApiKeyDoc(
            user_uuid=user_uuid,
            prefix=created.prefix,
            hashed_key=created.hashed_key,
            name=name,
            expires_at=expires_at,
        )
        api_key = await self._api_keys.create(api_key)
        log.info("api_key_created", user_uuid=user_uuid, key_id=api_key.id, prefix=created.prefix)
        return api_key, created.raw_key

    async def list_api_keys(self, user_uuid: str) -> list[ApiKeyDoc]:
        return await self._api_keys.list_by_user(user_uuid)

    async def find_api_key(self, raw_key: str) -> ApiKeyDoc:
        """Resolve a presented raw key to its stored, unexpired record.

        Raises:
            InvalidAPIKeyError: *raw_key* has no prefix separator.
            APIKeyNotFoundError: no active key with this prefix matches.
        """
        prefix, _ = self._codec.parse(raw_key)
        now = self._clock.now()

        for api_key in await self._api_keys.list_active_by_prefix(prefix, now):
            if api_key.is_active(now) and self._codec.verify(api_key.hashed_key, raw_key):
                return api_key

        log.warning("api_key_invalid", prefix=prefix, reason="not_found")
        raise APIKeyNotFoundError("api key not found")

    async def update_api_key(
        self, user_uuid: str, key_id: int, fields: dict[str, Any]
    ) -> ApiKeyDoc:
        """Apply *fields* (``name`` and/or ``expires_at``, which may be None)."""
        allowed = {k: v for k, v in fields.items() if k in ("name", "expires_at")}
        api_key = await self._api_keys.update(user_uuid, key_id, allowed)
        if api_key is None:
            raise APIKeyNotFoundError("api key not found")
        return api_key

    async def delete_api_key(self, user_uuid: str, key_id: int) -> None:
        if not await self._api_keys.delete(user_uuid, key_id):
            raise APIKeyNotFoundError("api key not found")
        log.info("api_key_deleted", user_uuid=user_uuid, key_id=key_id)
