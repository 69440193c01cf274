from __future__ import annotations

import os
import sys
from typing import Any

import httpx
import pytest

# Add repository root to sys.path for `import gamma_mcp.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gamma_mcp.client import GammaClient  # noqa: E402

TEST_BASE = "https://gamma.test/v0.2"


class FakeClock:
    """Clock whose sleeps advance simulated time instantly."""

    def __init__(self) -> None:
        self.t = 0.0
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.t

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.t += seconds


class FakeGammaApi:
    """Scripted Gamma endpoints served through ``httpx.MockTransport``.

    Status responses are consumed in order; the last one repeats once the
    script runs out.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.create_response = httpx.Response(200, json={"generationId": "gen_123", "status": "pending"})
        self.status_script: list[httpx.Response] = [httpx.Response(200, json={"generationId": "gen_123", "status": "pending"})]

    def script_statuses(self, *statuses: str, **extra: Any) -> None:
        self.status_script = [httpx.Response(200, json={"generationId": "gen_123", "status": s, **extra}) for s in statuses]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            template = self.create_response
        elif len(self.status_script) > 1:
            template = self.status_script.pop(0)
        else:
            template = self.status_script[0]
        # fresh copy; a response object is consumed by the client that receives it
        return httpx.Response(template.status_code, content=template.content, headers=template.headers)

    @property
    def status_calls(self) -> int:
        return sum(1 for r in self.requests if r.method == "GET")

    @property
    def create_calls(self) -> int:
        return sum(1 for r in self.requests if r.method == "POST")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gamma_api() -> FakeGammaApi:
    return FakeGammaApi()


@pytest.fixture
def gamma_client(gamma_api: FakeGammaApi) -> GammaClient:
    return GammaClient("test-key", base_url=TEST_BASE, transport=httpx.MockTransport(gamma_api.handler))


@pytest.fixture
def anonymous_client(gamma_api: FakeGammaApi) -> GammaClient:
    return GammaClient(None, base_url=TEST_BASE, transport=httpx.MockTransport(gamma_api.handler))
