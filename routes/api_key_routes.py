"""
API key management endpoints (access JWT required).

POST   /auth/api-keys           — create; the raw key is returned once
GET    /auth/api-keys           — list the caller's keys
PATCH  /auth/api-keys/{key_id}  — rename / change expiry
DELETE /auth/api-keys/{key_id}  — delete
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from dependencies import get_auth_service, get_current_user_uuid
from schemas.dto.requests.api_key import CreateApiKeyRequest, UpdateApiKeyRequest
from schemas.dto.responses.api_key import (
    ApiKeyCreatedResponse,
    ApiKeyResponse,
    ApiKeysListResponse,
)
from schemas.dto.responses.common import ErrorResponse
from services.auth_service import AuthService
from shared.datetime_utils import parse_expiry

router = APIRouter(
    prefix="/auth/api-keys",
    tags=["api-keys"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiKeyCreatedResponse)
async def create_api_key(
    body: CreateApiKeyRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> ApiKeyCreatedResponse:
    api_key, raw_key = await auth.create_api_key(
        user_uuid, body.name, parse_expiry(body.expires_at)
    )
    return ApiKeyCreatedResponse(
        **ApiKeyResponse.from_doc(api_key).model_dump(), raw_key=raw_key
    )


@router.get("", response_model=ApiKeysListResponse)
async def list_api_keys(
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> ApiKeysListResponse:
    keys = await auth.list_api_keys(user_uuid)
    return ApiKeysListResponse(keys=[ApiKeyResponse.from_doc(k) for k in keys])


@router.patch("/{key_id}", response_model=ApiKeyResponse)
async def update_api_key(
    key_id: int,
    body: UpdateApiKeyRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> ApiKeyResponse:
    api_key = await auth.update_api_key(user_uuid, key_id, body.to_fields())
    return ApiKeyResponse.from_doc(api_key)


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_api_key(
    key_id: int,
    user_uuid: str = Depends(get_current_user_uuid),
    auth: AuthService = Depends(get_auth_service),
) -> Response:
    await auth.delete_api_key(user_uuid, key_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
