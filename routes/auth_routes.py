"""
User and JWT endpoints.

POST  /auth/users              — register (sends activation e-mail)
GET   /auth/users/me           — current user (access JWT)
PATCH /auth/users/me           — update names (access JWT)
GET   /api/v1/auth/users/me    — current user (API key)
POST  /auth/users/activate     — activate with an activation token
POST  /auth/tokens             — e-mail + password → access + refresh
POST  /auth/tokens/refresh     — refresh → access
POST  /auth/tokens/validate    — is this access token valid?
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from dependencies import get_api_key_user_uuid, get_auth_service, get_current_user_uuid
from schemas.dto.requests.auth import (
    ActivateUserRequest,
    CreateTokenRequest,
    CreateUserRequest,
    RefreshTokenRequest,
    UpdateUserRequest,
    ValidateTokenRequest,
)
from schemas.dto.responses.auth import (
    AccessTokenResponse,
    TokenPairResponse,
    TokenValidityResponse,
    UserResponse,
)
from schemas.dto.responses.common import ErrorResponse
from services.auth_service import AuthService

router = APIRouter(tags=["auth"], responses={401: {"model": ErrorResponse}})


@router.post("/auth/users", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    body: CreateUserRequest, auth: AuthService = Depends(get_auth_service)
) -> UserResponse:
    user = await auth.create_user(body.email, body.password, body.first_name, body.last_name)
    return UserResponse.from_doc(user)


@router.get("/auth/users/me", response_model=UserResponse)
async def get_user_me(
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return UserResponse.from_doc(await auth.get_user(user_uuid))


@router.patch("/auth/users/me", response_model=UserResponse)
async def update_user_me(
    body: UpdateUserRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await auth.update_user(user_uuid, body.first_name, body.last_name)
    return UserResponse.from_doc(user)


@router.get("/api/v1/auth/users/me", response_model=UserResponse)
async def get_user_me_with_api_key(
    user_uuid: str = Depends(get_api_key_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return UserResponse.from_doc(await auth.get_user(user_uuid))


@router.post("/auth/users/activate", status_code=status.HTTP_200_OK)
async def activate_user(
    body: ActivateUserRequest, auth: AuthService = Depends(get_auth_service)
) -> Response:
    await auth.activate_user(body.token)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/auth/tokens", status_code=status.HTTP_201_CREATED, response_model=TokenPairResponse)
async def create_tokens(
    body: CreateTokenRequest, auth: AuthService = Depends(get_auth_service)
) -> TokenPairResponse:
    access, refresh = await auth.create_token_pair(body.email, body.password)
    return TokenPairResponse(access=access, refresh=refresh)


@router.post(
    "/auth/tokens/refresh",
    status_code=status.HTTP_201_CREATED,
    response_model=AccessTokenResponse,
)
async def refresh_token(
    body: RefreshTokenRequest, auth: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    return AccessTokenResponse(access=await auth.refresh_access_token(body.refresh))


@router.post("/auth/tokens/validate", response_model=TokenValidityResponse)
async def validate_token(
    body: ValidateTokenRequest, auth: AuthService = Depends(get_auth_service)
) -> TokenValidityResponse:
    return TokenValidityResponse(valid=auth.validate_access_token(body.token))
