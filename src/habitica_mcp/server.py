#!/usr/bin/env python3
"""
Habitica MCP Server.

This server exposes Habitica task management to MCP hosts over stdio.

Features:
    - Task management (list, create, update, score, delete)
    - User statistics

Environment Variables:
    Required:
        HABITICA_USER_ID
        HABITICA_API_TOKEN

    Optional:
        HABITICA_CLIENT        (default: habitica-mcp-server)
        HABITICA_API_BASE_URL  (default: https://habitica.com/api/v3)
        HABITICA_LOG_LEVEL     (default: INFO)
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from mcp.server.fastmcp import FastMCP, Context
from mcp.types import CallToolResult, ToolAnnotations

from habitica_mcp import __version__
from habitica_mcp.client import HabiticaClient
from habitica_mcp.constants import DEFAULT_CLIENT
from habitica_mcp.exceptions import (
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaConfigurationError,
    HabiticaNotFoundError,
)
from habitica_mcp.settings import HabiticaSettings, load_settings
from habitica_mcp.tools.formatting import tool_error, tool_result
from habitica_mcp.tools.inputs import (
    TaskListInput,
    TaskCreateInput,
    TaskUpdateInput,
    TaskScoreInput,
    TaskDeleteInput,
)

# Configure logging. stdout carries the MCP protocol, so diagnostics go to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

SERVER_NAME = DEFAULT_CLIENT

INSTRUCTIONS = (
    "MCP server for Habitica. Set HABITICA_USER_ID and HABITICA_API_TOKEN "
    "(and optional HABITICA_CLIENT, HABITICA_API_BASE_URL) before running."
)


def get_client(ctx: Context) -> HabiticaClient:
    """Get the Habitica client from context."""
    return ctx.request_context.lifespan_context["client"]


# =============================================================================
# Error Handling
# =============================================================================


def handle_error(e: Exception, operation: str) -> str:
    """
    Log a failed tool call and return the message for the host.

    Habitica's own message and transport errors pass through unchanged;
    hints only go to the log.
    """
    logger.exception("Error in %s: %s", operation, e)

    if isinstance(e, HabiticaAuthenticationError):
        logger.error("Ensure HABITICA_USER_ID and HABITICA_API_TOKEN are set correctly.")
    elif isinstance(e, HabiticaNotFoundError):
        logger.error("Verify the task ID is correct and the task exists.")

    if isinstance(e, (HabiticaAPIError, httpx.HTTPError)):
        return str(e)
    return f"Unexpected error: {e}"


# =============================================================================
# Task Tools
# =============================================================================


async def list_tasks(ctx: Context, params: TaskListInput = TaskListInput()) -> CallToolResult:
    """
    List Habitica tasks for the authenticated user.

    Args:
        params: Filter parameters:
            - type (str): Optional task type ('habits', 'dailys', 'todos', 'rewards')

    Returns:
        The user's tasks under "tasks".
    """
    try:
        tasks = await get_client(ctx).list_tasks(params.type)
    except Exception as e:
        return tool_error(handle_error(e, "list_tasks"))
    return tool_result("tasks", tasks)


async def create_task(params: TaskCreateInput, ctx: Context) -> CallToolResult:
    """
    Create a new Habitica task.

    Args:
        params: Task creation parameters including:
            - type (str): 'habits', 'dailys', 'todos' or 'rewards' (required)
            - text (str): Task name (required)
            - notes (str): Notes
            - priority (float): 0.1 (trivial), 1 (easy), 1.5 (medium), 2 (hard)
            - tags (list): Tag IDs
            - checklist (list): Checklist item texts
            - dueDate (str): ISO 8601 due date, todos only

    Returns:
        The created task under "task".

    Examples:
        - Simple todo: type="todos", text="Buy groceries"
        - Hard habit: type="habits", text="Exercise", priority=2
        - Todo with checklist: type="todos", text="Pack", checklist=["Passport", "Charger"]
    """
    try:
        task = await get_client(ctx).create_task(
            params.type,
            params.text,
            notes=params.notes,
            priority=params.priority,
            tags=params.tags,
            checklist=params.checklist,
            due_date=params.due_date,
        )
    except Exception as e:
        return tool_error(handle_error(e, "create_task"))
    return tool_result("task", task)


async def update_task(params: TaskUpdateInput, ctx: Context) -> CallToolResult:
    """
    Update an existing Habitica task.

    Only the supplied fields are sent; everything else is left untouched.

    Args:
        params: taskId (required) plus any of text, notes, priority, tags,
            checklist, dueDate and type.

    Returns:
        The updated task under "task".
    """
    try:
        task = await get_client(ctx).update_task(params.task_id, **params.updates())
    except Exception as e:
        return tool_error(handle_error(e, "update_task"))
    return tool_result("task", task)


async def score_task(params: TaskScoreInput, ctx: Context) -> CallToolResult:
    """
    Score (complete/check or mark down) a Habitica task.

    Scoring up completes a todo or daily and rewards a positive habit;
    scoring down penalizes.

    Returns:
        Habitica's stat deltas under "result".
    """
    try:
        result = await get_client(ctx).score_task(params.task_id, params.direction)
    except Exception as e:
        return tool_error(handle_error(e, "score_task"))
    return tool_result("result", result)


async def delete_task(params: TaskDeleteInput, ctx: Context) -> CallToolResult:
    """Delete a Habitica task. This cannot be undone."""
    try:
        result = await get_client(ctx).delete_task(params.task_id)
    except Exception as e:
        return tool_error(handle_error(e, "delete_task"))
    return tool_result("result", result)


# =============================================================================
# User Tools
# =============================================================================


async def get_user_stats(ctx: Context) -> CallToolResult:
    """
    Fetch stats for the authenticated Habitica user.

    Returns the profile's stats block (hp, mp, exp, gp, lvl, class, ...)
    under "stats", or the whole profile if it has none.
    """
    try:
        user: Any = await get_client(ctx).get_user()
    except Exception as e:
        return tool_error(handle_error(e, "get_user_stats"))

    stats = user.get("stats") if isinstance(user, dict) else None
    if stats is None:
        stats = user
    return tool_result("stats", stats)


# =============================================================================
# Server
# =============================================================================


TOOLS = (
    (
        list_tasks,
        "list_tasks",
        ToolAnnotations(
            title="List Tasks",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ),
    (
        create_task,
        "create_task",
        ToolAnnotations(
            title="Create Task",
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    ),
    (
        update_task,
        "update_task",
        ToolAnnotations(
            title="Update Task",
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ),
    (
        score_task,
        "score_task",
        ToolAnnotations(
            title="Score Task",
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    ),
    (
        delete_task,
        "delete_task",
        ToolAnnotations(
            title="Delete Task",
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ),
    (
        get_user_stats,
        "get_user_stats",
        ToolAnnotations(
            title="Get User Stats",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ),
)


def create_server(settings: HabiticaSettings) -> FastMCP:
    """Build the FastMCP server with all Habitica tools registered."""

    @asynccontextmanager
    async def lifespan(mcp: FastMCP) -> AsyncIterator[dict[str, Any]]:
        """Open the Habitica client on startup and close it on shutdown."""
        logger.info("Initializing Habitica MCP Server (%s)...", settings.api_base_url)
        async with HabiticaClient(settings) as client:
            logger.info("Habitica MCP server is running on stdio")
            yield {"client": client}
        logger.info("Habitica client closed")

    mcp = FastMCP(
        SERVER_NAME,
        instructions=INSTRUCTIONS,
        lifespan=lifespan,
        log_level=settings.log_level,
    )
    # FastMCP 1.x (pinned <2) takes no version argument; the low-level Server
    # reports this attribute in its initialize result.
    mcp._mcp_server.version = __version__

    for fn, name, annotations in TOOLS:
        mcp.add_tool(fn, name=name, annotations=annotations)
    return mcp


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """Main entry point for the Habitica MCP server."""
    try:
        settings = load_settings()
    except HabiticaConfigurationError as e:
        logger.error("Habitica MCP server failed to start: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    create_server(settings).run()


if __name__ == "__main__":
    main()
