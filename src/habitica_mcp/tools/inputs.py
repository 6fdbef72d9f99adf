"""
Pydantic Input Models for Habitica MCP Tools.

This module defines the input validation models used by the MCP tools.
Field names are snake_case in Python and camelCase on the wire
(``taskId``, ``dueDate``).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional, List

from pydantic import BaseModel, Field, ConfigDict, field_validator

from habitica_mcp.constants import PRIORITY_VALUES, ScoreDirection, TaskType

# Date and time with optional fraction and optional Z or +HH:MM offset.
ISO_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$"
)


class BaseMCPInput(BaseModel):
    """Base input model with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        populate_by_name=True,
        extra="forbid",
    )


class TaskFieldsInput(BaseMCPInput):
    """Optional task fields shared by create and update."""

    notes: Optional[str] = Field(
        default=None,
        description="Optional notes",
    )
    priority: Optional[float] = Field(
        default=None,
        strict=True,
        description="Habitica priority: 0.1 (trivial), 1 (easy), 1.5 (medium), 2 (hard)",
    )
    tags: Optional[List[str]] = Field(
        default=None,
        description="Tag IDs to attach (replaces existing on update)",
    )
    checklist: Optional[List[str]] = Field(
        default=None,
        description="Checklist item texts, in order",
    )
    due_date: Optional[str] = Field(
        default=None,
        alias="dueDate",
        description="ISO 8601 due date (todos only), e.g. '2025-01-15T17:00:00Z'",
    )

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v not in PRIORITY_VALUES:
            raise ValueError("priority must be one of 0.1 (trivial), 1 (easy), 1.5 (medium), 2 (hard)")
        return v

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, v: Optional[str]) -> Optional[str]:
        # Kept as given; Habitica parses the string itself.
        if v is None:
            return None
        match = ISO_TIMESTAMP.match(v)
        if match is None:
            raise ValueError(f"dueDate must be an ISO 8601 timestamp like 2025-01-15T17:00:00Z: {v!r}")
        try:
            datetime.strptime(" ".join(match.groups()), "%Y-%m-%d %H:%M:%S")
        except ValueError as e:
            raise ValueError(f"dueDate is not a valid ISO 8601 timestamp: {v!r}") from e
        return v


# =============================================================================
# Task Input Models
# =============================================================================


class TaskListInput(BaseMCPInput):
    """Input for listing tasks."""

    type: Optional[TaskType] = Field(
        default=None,
        description="Only list tasks of this type: 'habits', 'dailys', 'todos' or 'rewards'",
    )


class TaskCreateInput(TaskFieldsInput):
    """Input for creating a new task."""

    type: TaskType = Field(
        ...,
        description="Task type: 'habits', 'dailys', 'todos' or 'rewards'",
    )
    text: str = Field(
        ...,
        description="Task name (e.g., 'Drink water', 'File taxes')",
        min_length=1,
    )


class TaskUpdateInput(TaskFieldsInput):
    """Input for updating a task. Only the supplied fields are changed."""

    task_id: str = Field(
        ...,
        alias="taskId",
        description="Habitica task ID to update",
        min_length=1,
    )
    text: Optional[str] = Field(
        default=None,
        description="New task name",
        min_length=1,
    )
    type: Optional[TaskType] = Field(
        default=None,
        description="New task type",
    )

    def updates(self) -> dict[str, Any]:
        """Supplied fields other than the task ID, as keyword arguments for update_task."""
        fields = self.model_dump(exclude={"task_id"}, exclude_none=True)
        if "type" in fields:
            fields["task_type"] = fields.pop("type")
        return fields


class TaskScoreInput(BaseMCPInput):
    """Input for scoring a task."""

    task_id: str = Field(
        ...,
        alias="taskId",
        description="Task ID to score",
        min_length=1,
    )
    direction: ScoreDirection = Field(
        ...,
        description="'up' to complete/check the task, 'down' to mark it down",
    )


class TaskDeleteInput(BaseMCPInput):
    """Input for deleting a task."""

    task_id: str = Field(
        ...,
        alias="taskId",
        description="Task ID to delete",
        min_length=1,
    )
