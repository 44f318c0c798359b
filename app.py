"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppSettings
from errors import register_error_handlers
from infrastructure.email.console import ConsoleEmailProvider
from infrastructure.email.protocol import EmailProvider
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient
from infrastructure.piston import PistonClient
from infrastructure.rate_limiter import RequestSpacer
from repositories.memory import (
    InMemoryApiKeyRepository,
    InMemoryCodeSpaceRepository,
    InMemoryUserRepository,
)
from repositories.protocol import ApiKeyRepository, CodeSpaceRepository, UserRepository
from routes.api_key_routes import router as api_key_router
from routes.auth_routes import router as auth_router
from routes.code_space_routes import router as code_space_router
from routes.health_routes import router as health_router
from services.access_control import AccessControl
from services.api_key_codec import APIKeyCodec
from services.auth_service import AuthService
from services.code_space_service import CodeSpaceService
from services.token_service import TokenService
from shared.clock import Clock, SystemClock
from shared.crypto import CredentialHasher
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    users: Optional[UserRepository] = None,
    api_keys: Optional[ApiKeyRepository] = None,
    code_spaces: Optional[CodeSpaceRepository] = None,
    email: Optional[EmailProvider] = None,
    http_client: Optional[HttpClient] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    Repositories, the e-mail provider, the HTTP client and the clock may be
    injected; anything left out falls back to the in-memory / configured
    default.

    Raises:
        RuntimeError: JWT_SECRET is not set.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging, settings.env)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    if not settings.jwt.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set")

    if clock is None:
        clock = SystemClock()
    if users is None:
        users = InMemoryUserRepository(clock)
    if api_keys is None:
        api_keys = InMemoryApiKeyRepository(clock)
    if code_spaces is None:
        code_spaces = InMemoryCodeSpaceRepository(clock)
    if http_client is None:
        http_client = HttpClient(timeout=settings.piston.piston_timeout_seconds)

    if email is None:
        if settings.email.email_backend == "zepto":
            email = ZeptoMailProvider(settings.email, http_client)
        else:
            email = ConsoleEmailProvider()

    hasher = CredentialHasher(
        time_cost=settings.hashing.hash_time_cost,
        memory_cost=settings.hashing.hash_memory_cost,
        parallelism=settings.hashing.hash_parallelism,
    )
    tokens = TokenService(settings.jwt.jwt_secret, clock)
    piston = PistonClient(
        http_client,
        RequestSpacer(settings.piston.piston_min_interval_ms / 1000),
        api_key=settings.piston.piston_api_key,
        execute_url=settings.piston.piston_execute_url,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("app_started", env=settings.env, email_backend=settings.email.email_backend)
        yield
        await http_client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = tokens
    app.state.auth_service = AuthService(
        users=users,
        api_keys=api_keys,
        hasher=hasher,
        tokens=tokens,
        api_key_codec=APIKeyCodec(hasher),
        email=email,
        frontend_base_url=settings.frontend_base_url,
        clock=clock,
    )
    app.state.code_space_service = CodeSpaceService(
        code_spaces=code_spaces,
        users=users,
        access_control=AccessControl(tokens),
        piston=piston,
        email=email,
        frontend_base_url=settings.frontend_base_url,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(api_key_router)
    app.include_router(code_space_router)

    return app
