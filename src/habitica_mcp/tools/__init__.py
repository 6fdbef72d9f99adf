"""
Habitica MCP Tools Package.

Input models and result formatting for the Habitica MCP tools:
    - Task tools (list, create, update, score, delete)
    - User tools (stats)
"""

from habitica_mcp.tools.inputs import (
    TaskListInput,
    TaskCreateInput,
    TaskUpdateInput,
    TaskScoreInput,
    TaskDeleteInput,
)
from habitica_mcp.tools.formatting import to_json, tool_error, tool_result

__all__ = [
    "TaskListInput",
    "TaskCreateInput",
    "TaskUpdateInput",
    "TaskScoreInput",
    "TaskDeleteInput",
    "tool_error",
    "to_json",
    "tool_result",
]
