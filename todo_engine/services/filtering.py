"""
Task filtering.

A TaskFilter is a conjunction of optional criteria (status, priority,
category, overdue-ness). FilterBuilder assembles one criterion at a time
and refuses to set the same kind of criterion twice.

FilterBuilder.build() returns None when nothing was set, so callers can tell
"show everything" apart from a filter that happens to match nothing.
"""

from collections.abc import Iterable
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from todo_engine.exceptions import FilterConflictError, ValidationError
from todo_engine.models.task import Priority, Task, TaskStatus


class OverdueFilter(str, Enum):
    ALL = "All"
    ONLY_OVERDUE = "OnlyOverdue"
    ONLY_NOT_OVERDUE = "OnlyNotOverdue"


class TaskFilter(BaseModel):
    """Criteria a task must all satisfy. Unset criteria match anything."""

    model_config = ConfigDict(frozen=True)

    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    overdue: OverdueFilter = OverdueFilter.ALL
    category: Optional[str] = None

    def matches(self, task: Task, today: Optional[date] = None) -> bool:
        if self.status is not None and task.status != self.status:
            return False

        if self.priority is not None and task.priority != self.priority:
            return False

        if self.overdue is not OverdueFilter.ALL:
            overdue = task.is_overdue(today)
            if self.overdue is OverdueFilter.ONLY_OVERDUE and not overdue:
                return False
            if self.overdue is OverdueFilter.ONLY_NOT_OVERDUE and overdue:
                return False

        # Exact, case-sensitive; a task without a category never matches
        if self.category is not None and task.category != self.category:
            return False

        return True


class FilterBuilder:
    """Builds a TaskFilter one criterion at a time."""

    def __init__(self) -> None:
        self._status: Optional[TaskStatus] = None
        self._priority: Optional[Priority] = None
        self._overdue: Optional[OverdueFilter] = None
        self._category: Optional[str] = None

    def with_status(self, status: TaskStatus) -> "FilterBuilder":
        if self._status is not None:
            raise FilterConflictError(
                "status", "Cannot specify multiple status filters (done/todo)."
            )
        self._status = status
        return self

    def with_priority(self, priority: Priority) -> "FilterBuilder":
        if self._priority is not None:
            raise FilterConflictError(
                "priority", "Cannot specify multiple priority filters (high/medium/low)."
            )
        self._priority = priority
        return self

    def with_category(self, category: str) -> "FilterBuilder":
        if self._category is not None:
            raise FilterConflictError("category", "Cannot specify multiple category filters.")
        if not category.strip():
            raise ValidationError("Category name cannot be empty.")
        self._category = category
        return self

    def with_overdue(self, overdue: OverdueFilter = OverdueFilter.ONLY_OVERDUE) -> "FilterBuilder":
        if self._overdue is not None:
            raise FilterConflictError("overdue", "Cannot specify multiple overdue filters.")
        if overdue is OverdueFilter.ALL:
            raise ValidationError("Overdue filter must be OnlyOverdue or OnlyNotOverdue.")
        self._overdue = overdue
        return self

    def is_empty(self) -> bool:
        return (
            self._status is None
            and self._priority is None
            and self._category is None
            and self._overdue is None
        )

    def build(self) -> Optional[TaskFilter]:
        if self.is_empty():
            return None
        return TaskFilter(
            status=self._status,
            priority=self._priority,
            overdue=self._overdue or OverdueFilter.ALL,
            category=self._category,
        )


def apply_filter(
    tasks: Iterable[Task],
    task_filter: Optional[TaskFilter],
    today: Optional[date] = None,
) -> list[Task]:
    """Tasks matching the filter, in input order. None keeps every task."""
    if task_filter is None:
        return list(tasks)

    today = today or date.today()
    return [task for task in tasks if task_filter.matches(task, today)]
