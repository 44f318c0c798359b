"""
Piston code execution DTOs.

Mirror the JSON bodies of POST https://emkc.org/api/v2/piston/execute.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

PISTON_FILE_ENCODING = "utf8"


class PistonFile(BaseModel):
    name: Optional[str] = None
    content: str
    encoding: Optional[str] = PISTON_FILE_ENCODING


class PistonExecuteRequest(BaseModel):
    language: str
    version: str
    files: list[PistonFile]
    stdin: Optional[str] = None
    args: Optional[list[str]] = None
    compile_timeout: Optional[int] = None
    run_timeout: Optional[int] = None
    compile_memory_limit: Optional[int] = None
    run_memory_limit: Optional[int] = None


class PistonResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    stdout: str = ""
    stderr: str = ""
    output: str = ""
    code: Optional[int] = None
    signal: Optional[str] = None


class PistonExecuteResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    language: str
    version: str
    run: PistonResults
    compile: Optional[PistonResults] = None
