"""
Habitica API Client.

This module provides HabiticaClient, the only component that talks HTTP.
It builds authenticated requests, unwraps Habitica's response envelope and
translates between the MCP-facing field names and the API's own.

Habitica responses follow the envelope convention:

    {"success": true, "data": {...}}
    {"success": false, "error": "...", "message": "..."}
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Iterable, TypeVar

import httpx

from habitica_mcp.constants import ScoreDirection, TaskType, to_api_task_type
from habitica_mcp.exceptions import (
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaNotFoundError,
)
from habitica_mcp.settings import HabiticaSettings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="HabiticaClient")

JSONValue = Any


class HabiticaClient:
    """
    Async client for the Habitica v3 REST API.

    Every method performs exactly one request. There are no retries and no
    timeout beyond httpx's default.

    Usage:
        async with HabiticaClient(settings) as client:
            todos = await client.list_tasks(TaskType.TODOS)
            await client.score_task(todos[0]["id"], ScoreDirection.UP)
    """

    def __init__(
        self,
        settings: HabiticaSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            headers=self._default_headers(),
            transport=transport,
        )

    def _default_headers(self) -> dict[str, str]:
        return {
            "x-api-user": self._settings.user_id,
            "x-api-key": self._settings.api_token,
            "x-client": self._settings.client,
            "content-type": "application/json",
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self: T) -> T:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> JSONValue:
        logger.debug("%s %s", method, path)
        response = await self._http.request(method, path, params=params, json=body)

        is_json = "application/json" in response.headers.get("content-type", "")
        payload: JSONValue = response.json() if is_json else response.text
        envelope = payload if is_json and isinstance(payload, dict) else None

        if not response.is_success or (envelope is not None and envelope.get("success") is False):
            raise self._error_for(response, envelope)

        if envelope is not None and "data" in envelope:
            return envelope["data"]
        return payload

    @staticmethod
    def _error_for(response: httpx.Response, envelope: dict[str, Any] | None) -> HabiticaAPIError:
        message = envelope.get("message") if envelope is not None else None
        if not message and not response.is_success:
            message = response.reason_phrase
        if not message:
            message = f"Habitica request failed with status {response.status_code}"

        logger.warning(
            "Habitica %s %s failed (%d): %s",
            response.request.method,
            response.request.url.path,
            response.status_code,
            message,
        )

        if response.status_code == 401:
            error_cls = HabiticaAuthenticationError
        elif response.status_code == 404:
            error_cls = HabiticaNotFoundError
        else:
            error_cls = HabiticaAPIError
        return error_cls(message, status_code=response.status_code, body=envelope)

    # =========================================================================
    # Conversion
    # =========================================================================

    @staticmethod
    def _task_body(
        *,
        task_type: str | TaskType | None = None,
        text: str | None = None,
        notes: str | None = None,
        priority: float | None = None,
        tags: list[str] | None = None,
        checklist: Iterable[str] | None = None,
        due_date: str | None = None,
    ) -> dict[str, Any]:
        """
        Build a task request body in Habitica's field vocabulary.

        Only supplied fields are included. The due date travels as ``date``
        and checklist strings are wrapped as ``{"text": ...}`` items.
        """
        body: dict[str, Any] = {}
        api_type = to_api_task_type(task_type)
        if api_type is not None:
            body["type"] = api_type
        if text is not None:
            body["text"] = text
        if notes is not None:
            body["notes"] = notes
        if priority is not None:
            body["priority"] = priority
        if tags is not None:
            body["tags"] = list(tags)
        if checklist is not None:
            body["checklist"] = [{"text": item} for item in checklist]
        if due_date is not None:
            body["date"] = due_date
        return body

    # =========================================================================
    # Tasks
    # =========================================================================

    async def list_tasks(self, task_type: str | TaskType | None = None) -> list[dict[str, Any]]:
        """List the user's tasks, optionally restricted to one type."""
        api_type = to_api_task_type(task_type)
        params = {"type": api_type} if api_type else None
        return await self._request("GET", "/tasks/user", params=params)

    async def create_task(
        self,
        task_type: str | TaskType,
        text: str,
        *,
        notes: str | None = None,
        priority: float | None = None,
        tags: list[str] | None = None,
        checklist: list[str] | None = None,
        due_date: str | None = None,
    ) -> dict[str, Any]:
        """Create a task and return it as Habitica stored it."""
        body = self._task_body(
            task_type=task_type,
            text=text,
            notes=notes,
            priority=priority,
            tags=tags,
            checklist=checklist,
            due_date=due_date,
        )
        return await self._request("POST", "/tasks/user", body=body)

    async def update_task(
        self,
        task_id: str,
        *,
        text: str | None = None,
        notes: str | None = None,
        priority: float | None = None,
        tags: list[str] | None = None,
        checklist: list[str] | None = None,
        due_date: str | None = None,
        task_type: str | TaskType | None = None,
    ) -> dict[str, Any]:
        """Update only the supplied fields of a task."""
        body = self._task_body(
            task_type=task_type,
            text=text,
            notes=notes,
            priority=priority,
            tags=tags,
            checklist=checklist,
            due_date=due_date,
        )
        return await self._request("PUT", f"/tasks/{task_id}", body=body)

    async def score_task(self, task_id: str, direction: str | ScoreDirection) -> dict[str, Any]:
        """Score a task up or down and return the resulting stat deltas."""
        direction = ScoreDirection(direction)
        return await self._request("POST", f"/tasks/{task_id}/score/{direction.value}")

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        # Habitica answers a delete with an empty data field.
        await self._request("DELETE", f"/tasks/{task_id}")
        return {"deleted": True, "taskId": task_id}

    # =========================================================================
    # User
    # =========================================================================

    async def get_user(self) -> dict[str, Any]:
        """Fetch the authenticated user's full profile."""
        return await self._request("GET", "/user")
