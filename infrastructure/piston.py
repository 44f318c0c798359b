"""Piston remote code execution client.

The public Piston instance rate-limits aggressively, so every call goes
through a RequestSpacer: one request in flight, 200 ms apart by default.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from errors import CodeExecutionError
from infrastructure.http_client import HttpClient
from infrastructure.rate_limiter import RequestSpacer
from schemas.dto.piston import PistonExecuteRequest, PistonExecuteResponse
from shared.logging import get_logger

log = get_logger(__name__)

PISTON_EXECUTE_URL = "https://emkc.org/api/v2/piston/execute"


class PistonClient:
    def __init__(
        self,
        http_client: HttpClient,
        spacer: RequestSpacer,
        api_key: Optional[str] = None,
        execute_url: str = PISTON_EXECUTE_URL,
    ) -> None:
        self._http = http_client
        self._spacer = spacer
        self._api_key = api_key
        self._execute_url = execute_url

    async def execute(self, request: PistonExecuteRequest) -> PistonExecuteResponse:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = self._api_key

        try:
            async with self._spacer:
                response = await self._http.post(
                    self._execute_url,
                    json=request.model_dump(exclude_none=True),
                    headers=headers,
                )
        except httpx.HTTPError as e:
            log.error(
                "piston_request_failed",
                language=request.language,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise CodeExecutionError("code execution service unavailable") from e

        if response.status_code != 200:
            log.error(
                "piston_execute_failed",
                language=request.language,
                status_code=response.status_code,
                response=response.text[:200],
            )
            raise CodeExecutionError(
                f"code execution service returned status {response.status_code}"
            )

        try:
            return PistonExecuteResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            log.error("piston_response_invalid", language=request.language, error=str(e))
            raise CodeExecutionError("code execution service returned an invalid response") from e
