"""
FastAPI dependency providers.

Services are built once in create_app() and stored on app.state; the
providers here hand them to routes. Two authentication dependencies mirror
the two credential kinds:

- get_current_user_uuid  — ``Authorization: Bearer <access JWT>``
- get_api_key_user_uuid  — ``Authorization: X-API-Key <prefix.secret>``
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request

from config import AppSettings
from errors import (
    APIKeyNotFoundError,
    InvalidAPIKeyError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingCredentialsError,
)
from schemas.models.token import TokenType
from services.auth_service import AuthService
from services.code_space_service import CodeSpaceService
from services.token_service import TokenService

BEARER_SCHEME = "Bearer"
API_KEY_SCHEME = "X-API-Key"


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_code_space_service(request: Request) -> CodeSpaceService:
    return request.app.state.code_space_service


def get_authorization_credentials(request: Request, scheme: str) -> Optional[str]:
    """Return the credentials after *scheme* in the Authorization header."""
    header = request.headers.get("Authorization", "").strip()
    if not header.startswith(scheme):
        return None
    credentials = header[len(scheme):].strip()
    return credentials or None


async def get_current_user_uuid(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> str:
    token = get_authorization_credentials(request, BEARER_SCHEME)
    if token is None:
        raise MissingCredentialsError("no token was provided")

    claims = tokens.validate_auth_token(token, TokenType.ACCESS)
    if claims is None:
        raise InvalidTokenError("provided token is invalid")
    return claims.sub


async def get_api_key_user_uuid(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> str:
    raw_key = get_authorization_credentials(request, API_KEY_SCHEME)
    if raw_key is None:
        raise MissingCredentialsError("no API key was provided")

    try:
        api_key = await auth.find_api_key(raw_key)
    except (InvalidAPIKeyError, APIKeyNotFoundError):
        raise InvalidCredentialsError("provided API key is invalid")
    return api_key.user_uuid
