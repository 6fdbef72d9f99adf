"""
Habitica constants and vocabulary translation.

The MCP tools speak the plural task-type vocabulary Habitica uses for its
task lists (habits, dailys, todos, rewards). The REST API expects the
singular form on the wire.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_API_BASE_URL = "https://habitica.com/api/v3"
DEFAULT_CLIENT = "habitica-mcp-server"


class TaskType(str, Enum):
    """Task type as exposed to MCP hosts."""

    HABITS = "habits"
    DAILYS = "dailys"
    TODOS = "todos"
    REWARDS = "rewards"


class ApiTaskType(str, Enum):
    """Task type as sent to the Habitica API."""

    HABIT = "habit"
    DAILY = "daily"
    TODO = "todo"
    REWARD = "reward"


class ScoreDirection(str, Enum):
    """Scoring direction. Up rewards the user, down penalizes."""

    UP = "up"
    DOWN = "down"


class TaskPriority(float, Enum):
    """Habitica task difficulty."""

    TRIVIAL = 0.1
    EASY = 1
    MEDIUM = 1.5
    HARD = 2


PRIORITY_VALUES = frozenset(p.value for p in TaskPriority)

_TO_API: dict[str, ApiTaskType] = {
    TaskType.HABITS.value: ApiTaskType.HABIT,
    TaskType.DAILYS.value: ApiTaskType.DAILY,
    TaskType.TODOS.value: ApiTaskType.TODO,
    TaskType.REWARDS.value: ApiTaskType.REWARD,
}
_FROM_API: dict[str, TaskType] = {api.value: TaskType(local) for local, api in _TO_API.items()}


def _raw(value: str | Enum | None) -> str | None:
    if isinstance(value, Enum):
        return value.value
    return value


def to_api_task_type(task_type: str | TaskType | None) -> str | None:
    """
    Translate a plural task type to Habitica's singular form.

    Unknown or missing values yield None so the field is simply omitted
    from the request.
    """
    mapped = _TO_API.get(_raw(task_type))  # type: ignore[arg-type]
    return mapped.value if mapped else None


def from_api_task_type(task_type: str | ApiTaskType | None) -> str | None:
    """Translate Habitica's singular task type back to the plural form."""
    mapped = _FROM_API.get(_raw(task_type))  # type: ignore[arg-type]
    return mapped.value if mapped else None
