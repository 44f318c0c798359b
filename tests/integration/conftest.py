"""
Integration fixtures: a fully wired app from create_app() with in-memory
repositories, the console e-mail provider, a frozen clock and a mocked
Piston transport. No real network connections are made.
"""

from __future__ import annotations

import re

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, HashingSettings, JWTSettings, PistonSettings
from infrastructure.email.console import ConsoleEmailProvider
from infrastructure.http_client import HttpClient

PASSWORD = "Str0ng!Pass"

PISTON_OK = {
    "language": "python",
    "version": "3.10.0",
    "run": {"stdout": "Hello, world!\n", "stderr": "", "output": "Hello, world!\n", "code": 0},
}


@pytest.fixture
def settings(secret_key) -> AppSettings:
    return AppSettings(
        frontend_base_url="https://app.example.com",
        jwt=JWTSettings(jwt_secret=secret_key),
        hashing=HashingSettings(hash_time_cost=1, hash_memory_cost=1024, hash_parallelism=1),
        piston=PistonSettings(piston_min_interval_ms=0),
    )


@pytest.fixture
def outbox() -> ConsoleEmailProvider:
    return ConsoleEmailProvider()


@pytest.fixture
def piston_requests() -> list:
    return []


@pytest.fixture
def client(settings, outbox, clock, piston_requests):
    def piston(request: httpx.Request) -> httpx.Response:
        piston_requests.append(request)
        return httpx.Response(200, json=PISTON_OK)

    app = create_app(
        settings,
        email=outbox,
        http_client=HttpClient(transport=httpx.MockTransport(piston)),
        clock=clock,
    )
    with TestClient(app) as test_client:
        yield test_client


class Api:
    """Small helper that drives the public endpoints the way a frontend would."""

    def __init__(self, client: TestClient, outbox: ConsoleEmailProvider) -> None:
        self.client = client
        self.outbox = outbox

    def register(self, email: str, password: str = PASSWORD) -> dict:
        resp = self.client.post("/auth/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        token = re.search(r"/signup/activate/(\S+)", self.outbox.outbox[-1]["body"]).group(1)
        assert self.client.post("/auth/users/activate", json={"token": token}).status_code == 200
        return resp.json()

    def login(self, email: str, password: str = PASSWORD) -> dict:
        resp = self.client.post("/auth/tokens", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return resp.json()

    def bearer(self, email: str) -> dict:
        return {"Authorization": f"Bearer {self.login(email)['access']}"}

    def last_invitation_token(self) -> str:
        return re.search(r"/invitation/(\S+)", self.outbox.outbox[-1]["body"]).group(1)


@pytest.fixture
def api(client, outbox) -> Api:
    return Api(client, outbox)
