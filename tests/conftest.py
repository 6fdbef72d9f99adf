"""
Pytest Configuration and Fixtures for Habitica MCP Tests.

Architecture:
    - HabiticaStub: httpx.MockTransport handler standing in for the Habitica API
    - MockHabiticaClient: async mock of HabiticaClient for tool tests
    - Fixtures: settings, clients and a fake MCP request context
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, AsyncIterator, Callable

import httpx
import pytest

from habitica_mcp.client import HabiticaClient
from habitica_mcp.settings import HabiticaSettings


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "client: HabiticaClient tests")
    config.addinivalue_line("markers", "tools: MCP tool tests")
    config.addinivalue_line("markers", "settings: Configuration tests")
    config.addinivalue_line("markers", "errors: Error handling tests")


HABITICA_ENV_VARS = (
    "HABITICA_USER_ID",
    "HABITICA_API_TOKEN",
    "HABITICA_CLIENT",
    "HABITICA_API_BASE_URL",
    "HABITICA_LOG_LEVEL",
)

BASE_URL = "https://habitica.test/api/v3"


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Remove Habitica variables and step away from any local .env file."""
    for name in HABITICA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def settings() -> HabiticaSettings:
    """Settings built directly, independent of the environment."""
    return HabiticaSettings(
        user_id="user-123",
        api_token="token-abc",
        client="habitica-mcp-tests",
        api_base_url=BASE_URL,
        _env_file=None,
    )


# =============================================================================
# Habitica API Stub
# =============================================================================


class HabiticaStub:
    """
    Stand-in for the Habitica API behind httpx.MockTransport.

    Records every request and answers with the queued response, or with a
    default ``{"success": true, "data": {}}`` envelope.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        """Queue a response; kwargs are passed to httpx.Response (json=, text=, headers=)."""
        self._responses.append(httpx.Response(status_code, **kwargs))

    def respond_data(self, data: Any) -> None:
        """Queue a successful envelope carrying ``data``."""
        self.respond(200, json={"success": True, "data": data})

    def raise_error(self, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self._responses.append(handler)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={"success": True, "data": {}})
        response = self._responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def habitica() -> HabiticaStub:
    return HabiticaStub()


@pytest.fixture
async def client(settings: HabiticaSettings, habitica: HabiticaStub) -> AsyncIterator[HabiticaClient]:
    """A real HabiticaClient wired to the stub transport."""
    async with HabiticaClient(settings, transport=httpx.MockTransport(habitica)) as client:
        yield client


# =============================================================================
# Mock Client for Tool Tests
# =============================================================================


class MockHabiticaClient:
    """
    Async mock for HabiticaClient.

    Returns canned payloads, records calls for verification, and raises the
    exception configured in ``should_fail`` for a method.
    """

    def __init__(self) -> None:
        self.tasks: list[dict[str, Any]] = [
            {"id": "t1", "type": "todo", "text": "File taxes"},
            {"id": "t2", "type": "habit", "text": "Drink water"},
        ]
        self.user: dict[str, Any] = {
            "id": "user-123",
            "profile": {"name": "Tester"},
            "stats": {"hp": 50, "mp": 30, "exp": 12, "gp": 4.5, "lvl": 3},
        }
        self.call_history: list[tuple[str, tuple, dict]] = []
        self.should_fail: dict[str, Exception | None] = {}

    def _record_call(self, method: str, args: tuple, kwargs: dict) -> None:
        self.call_history.append((method, args, kwargs))
        if self.should_fail.get(method):
            raise self.should_fail[method]

    def assert_called(self, method: str) -> tuple[tuple, dict]:
        for name, args, kwargs in self.call_history:
            if name == method:
                return args, kwargs
        raise AssertionError(f"{method} was not called")

    def assert_not_called(self, method: str | None = None) -> None:
        names = [name for name, _, _ in self.call_history]
        if method is None:
            assert not names, f"unexpected calls: {names}"
        else:
            assert method not in names, f"{method} was called"

    async def list_tasks(self, *args: Any, **kwargs: Any) -> list[dict[str, Any]]:
        self._record_call("list_tasks", args, kwargs)
        return self.tasks

    async def create_task(self, task_type: Any, text: str, **kwargs: Any) -> dict[str, Any]:
        self._record_call("create_task", (task_type, text), kwargs)
        return {"id": "new-task", "type": "todo", "text": text}

    async def update_task(self, task_id: str, **kwargs: Any) -> dict[str, Any]:
        self._record_call("update_task", (task_id,), kwargs)
        return {"id": task_id, **{k: v for k, v in kwargs.items() if k == "text"}}

    async def score_task(self, task_id: str, direction: Any) -> dict[str, Any]:
        self._record_call("score_task", (task_id, direction), {})
        return {"delta": 1.0, "exp": 15, "gp": 5.2}

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        self._record_call("delete_task", (task_id,), {})
        return {"deleted": True, "taskId": task_id}

    async def get_user(self) -> dict[str, Any]:
        self._record_call("get_user", (), {})
        return self.user


@pytest.fixture
def mock_client() -> MockHabiticaClient:
    return MockHabiticaClient()


@pytest.fixture
def ctx(mock_client: MockHabiticaClient) -> SimpleNamespace:
    """Minimal stand-in for the FastMCP Context seen by tool functions."""
    return SimpleNamespace(
        request_context=SimpleNamespace(lifespan_context={"client": mock_client}),
    )
