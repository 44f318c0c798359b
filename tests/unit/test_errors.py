"""Unit tests for AppError hierarchy and the FastAPI error handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from errors import (
    APIKeyNotFoundError,
    AppError,
    AuthenticationError,
    CodeExecutionError,
    CodeSpaceAccessDeniedError,
    CodeSpaceNotFoundError,
    ConflictError,
    ForbiddenError,
    InvalidAPIKeyError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidTokenTypeError,
    MissingCredentialsError,
    NotFoundError,
    UnsupportedLanguageError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
    register_error_handlers,
)


class TestAppErrorSubclasses:
    @pytest.mark.parametrize(
        "cls, status, code",
        [
            (ValidationError, 400, "validation_error"),
            (AuthenticationError, 401, "authentication_error"),
            (ForbiddenError, 403, "forbidden"),
            (NotFoundError, 404, "not_found"),
            (ConflictError, 409, "conflict"),
            (MissingCredentialsError, 401, "missing_credentials"),
            (InvalidCredentialsError, 401, "invalid_credentials"),
            (InvalidTokenError, 401, "invalid_token"),
            (InvalidTokenTypeError, 400, "invalid_token_type"),
            (InvalidAPIKeyError, 400, "invalid_api_key"),
            (CodeSpaceAccessDeniedError, 403, "access_denied"),
            (UnsupportedLanguageError, 400, "unsupported_language"),
            (CodeExecutionError, 502, "code_execution_failed"),
        ],
    )
    def test_status_and_code(self, cls, status, code):
        e = cls("message")
        assert e.status_code == status
        assert e.error_code == code
        assert e.message == "message"

    @pytest.mark.parametrize(
        "cls", [UserNotFoundError, APIKeyNotFoundError, CodeSpaceNotFoundError]
    )
    def test_not_found_family(self, cls):
        assert issubclass(cls, NotFoundError)
        assert cls("x").status_code == 404

    def test_user_already_exists_is_conflict(self):
        assert UserAlreadyExistsError("x").status_code == 409


class TestAppErrorToDict:
    def test_basic(self):
        e = CodeSpaceNotFoundError("code space not found")
        assert e.to_dict() == {"error": "code space not found", "code": "not_found"}

    @pytest.mark.parametrize(
        "kwargs, key, value",
        [
            ({"field": "language"}, "field", "language"),
            ({"details": {"min": 1, "max": 10}}, "details", {"min": 1, "max": 10}),
        ],
        ids=["with_field", "with_details"],
    )
    def test_optional_key_present(self, kwargs, key, value):
        e = ValidationError("invalid", **kwargs)
        assert e.to_dict()[key] == value

    def test_no_optional_keys_when_absent(self):
        d = NotFoundError("missing").to_dict()
        assert "field" not in d
        assert "details" not in d


class TestErrorHandlers:
    def _app(self) -> FastAPI:
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/app-error")
        async def app_error():
            raise CodeSpaceAccessDeniedError("code space access denied")

        @app.get("/crash")
        async def crash():
            raise RuntimeError("boom")

        return app

    def test_app_error_rendered(self):
        resp = TestClient(self._app()).get("/app-error")
        assert resp.status_code == 403
        assert resp.json() == {"error": "code space access denied", "code": "access_denied"}

    def test_unhandled_is_500(self):
        resp = TestClient(self._app(), raise_server_exceptions=False).get("/crash")
        assert resp.status_code == 500
        assert resp.json()["code"] == "internal_error"

    def test_base_error_is_500(self):
        assert AppError("x").status_code == 500
