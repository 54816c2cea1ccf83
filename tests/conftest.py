"""Shared fixtures: a scripted Transsmart API behind httpx.MockTransport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from transsmart.infra.client.transsmart_client import TranssmartClient

ACCOUNT = "acme"
TEST_URL = "https://accept-api.transsmart.com"
PROD_URL = "https://api.transsmart.com"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeTranssmart:
    """Answers ``/login`` with ``login`` and everything else with ``api``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.login: Handler = lambda request: httpx.Response(200, json={"token": "abc"})
        self.api: Handler = lambda request: httpx.Response(200, json={"ok": True})
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/login":
            return self.login(request)

        return self.api(request)

    @property
    def logins(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/login"]

    @property
    def calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != "/login"]


@pytest.fixture
def fake_api() -> FakeTranssmart:
    return FakeTranssmart()


@pytest.fixture
def client(fake_api) -> TranssmartClient:
    return TranssmartClient("user", "secret", ACCOUNT, test_mode=True, transport=fake_api.transport)
