"""
Request DTOs for authentication endpoints.

CreateUserRequest      — POST /auth/users
UpdateUserRequest      — PATCH /auth/users/me
ActivateUserRequest    — POST /auth/users/activate
CreateTokenRequest     — POST /auth/tokens
RefreshTokenRequest    — POST /auth/tokens/refresh
ValidateTokenRequest   — POST /auth/tokens/validate
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.validators import validate_password


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)

    @field_validator("password", mode="after")
    @classmethod
    def _password_strength(cls, v: str) -> str:
        ok, missing = validate_password(v)
        if not ok:
            raise ValueError("password must contain: " + ", ".join(missing))
        return v


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class ActivateUserRequest(BaseModel):
    token: str


class CreateTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str


class RefreshTokenRequest(BaseModel):
    refresh: str


class ValidateTokenRequest(BaseModel):
    token: str
