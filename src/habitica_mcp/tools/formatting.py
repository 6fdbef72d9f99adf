"""
Result formatting for Habitica MCP tools.

Every tool answers with the same value twice: pretty-printed JSON for
display and structured content for programmatic use.
"""

from __future__ import annotations

import json
from typing import Any

from mcp.types import CallToolResult, TextContent


def to_json(data: Any) -> str:
    """Serialize a result for display."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def tool_result(key: str, value: Any) -> CallToolResult:
    """Build a dual-format tool result, wrapping ``value`` under ``key`` in the structured half."""
    return CallToolResult(
        content=[TextContent(type="text", text=to_json(value))],
        structuredContent={key: value},
    )


def tool_error(message: str) -> CallToolResult:
    """Build a failed tool result carrying ``message`` unchanged."""
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        isError=True,
    )
