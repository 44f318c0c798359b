"""
Code space endpoints.

POST   /code/space                        — create (access JWT)
GET    /code/space                        — list accessible spaces
GET    /code/space/{name}                 — read (R)
PATCH  /code/space/{name}                 — update contents (W)
DELETE /code/space/{name}                 — delete (W)
POST   /code/space/{name}/run             — execute via Piston (R)
POST   /api/v1/code/space/{name}/run      — same, authenticated by API key
GET    /code/space/{name}/access          — list collaborators (W)
POST   /code/space/{name}/access          — invite by e-mail (W)
DELETE /code/space/{name}/access          — revoke a collaborator (W)
POST   /code/space/{name}/access/accept   — accept an invitation token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from dependencies import get_api_key_user_uuid, get_code_space_service, get_current_user_uuid
from schemas.dto.piston import PistonExecuteResponse
from schemas.dto.requests.code_space import (
    AcceptInvitationRequest,
    CreateCodeSpaceRequest,
    InviteUserRequest,
    RemoveUserRequest,
    UpdateCodeSpaceRequest,
)
from schemas.dto.responses.code_space import (
    CodeSpaceResponse,
    CodeSpacesListResponse,
    CodeSpaceUserResponse,
    CodeSpaceUsersListResponse,
)
from schemas.dto.responses.common import ErrorResponse
from services.code_space_service import CodeSpaceService

router = APIRouter(
    tags=["code-spaces"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.post("/code/space", status_code=status.HTTP_201_CREATED, response_model=CodeSpaceResponse)
async def create_code_space(
    body: CreateCodeSpaceRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpaceResponse:
    code_space, level = await svc.create_code_space(user_uuid, body.language)
    return CodeSpaceResponse.from_doc(code_space, level)


@router.get("/code/space", response_model=CodeSpacesListResponse)
async def list_code_spaces(
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpacesListResponse:
    spaces = await svc.list_code_spaces(user_uuid)
    return CodeSpacesListResponse(
        code_spaces=[CodeSpaceResponse.from_doc(cs, level) for cs, level in spaces]
    )


@router.get("/code/space/{name}", response_model=CodeSpaceResponse)
async def get_code_space(
    name: str,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpaceResponse:
    code_space, level = await svc.get_code_space(user_uuid, name)
    return CodeSpaceResponse.from_doc(code_space, level)


@router.patch("/code/space/{name}", response_model=CodeSpaceResponse)
async def update_code_space(
    name: str,
    body: UpdateCodeSpaceRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpaceResponse:
    code_space, level = await svc.update_code_space(user_uuid, name, body.contents)
    return CodeSpaceResponse.from_doc(code_space, level)


@router.delete("/code/space/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_code_space(
    name: str,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> Response:
    await svc.delete_code_space(user_uuid, name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/code/space/{name}/run", response_model=PistonExecuteResponse)
async def run_code_space(
    name: str,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> PistonExecuteResponse:
    return await svc.run_code_space(user_uuid, name)


@router.post("/api/v1/code/space/{name}/run", response_model=PistonExecuteResponse)
async def run_code_space_with_api_key(
    name: str,
    user_uuid: str = Depends(get_api_key_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> PistonExecuteResponse:
    return await svc.run_code_space(user_uuid, name)


@router.get("/code/space/{name}/access", response_model=CodeSpaceUsersListResponse)
async def list_code_space_users(
    name: str,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpaceUsersListResponse:
    users = await svc.list_code_space_users(user_uuid, name)
    return CodeSpaceUsersListResponse(
        users=[CodeSpaceUserResponse.from_doc(u, level) for u, level in users]
    )


@router.post("/code/space/{name}/access", status_code=status.HTTP_202_ACCEPTED)
async def invite_code_space_user(
    name: str,
    body: InviteUserRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> Response:
    await svc.invite_user(user_uuid, name, body.email, body.level)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.delete("/code/space/{name}/access", status_code=status.HTTP_204_NO_CONTENT)
async def remove_code_space_user(
    name: str,
    body: RemoveUserRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> Response:
    await svc.remove_user(user_uuid, name, body.user_uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/code/space/{name}/access/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=CodeSpaceResponse,
)
async def accept_code_space_invitation(
    name: str,
    body: AcceptInvitationRequest,
    user_uuid: str = Depends(get_current_user_uuid),
    svc: CodeSpaceService = Depends(get_code_space_service),
) -> CodeSpaceResponse:
    code_space, access = await svc.accept_invitation(name, body.token)
    return CodeSpaceResponse.from_doc(code_space, access.level)
