"""
Task sorting.

Sorting is stable: tasks that tie on the chosen key keep their input order
in both directions. Tasks without a due date or a category are placed
last when ascending and first when descending.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Optional

from todo_engine.models.task import Priority, Task


class SortBy(str, Enum):
    ID = "id"
    PRIORITY = "priority"
    DUE_DATE = "due"
    CATEGORY = "category"
    STATUS = "status"

    @classmethod
    def parse(cls, text: str) -> Optional["SortBy"]:
        """Parse "id", "priority"/"pri", "due"/"due-date"/"duedate", "category"/"cat", "status"."""
        return _SORT_ALIASES.get(text.strip().lower())


_SORT_ALIASES = {
    "id": SortBy.ID,
    "priority": SortBy.PRIORITY,
    "pri": SortBy.PRIORITY,
    "due": SortBy.DUE_DATE,
    "due-date": SortBy.DUE_DATE,
    "duedate": SortBy.DUE_DATE,
    "category": SortBy.CATEGORY,
    "cat": SortBy.CATEGORY,
    "status": SortBy.STATUS,
}


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


# "Ascending" priority means most important first
_PRIORITY_SORT_POSITION = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def _split_missing(tasks: list[Task], attr: str) -> tuple[list[Task], list[Task]]:
    present = [t for t in tasks if getattr(t, attr) is not None]
    missing = [t for t in tasks if getattr(t, attr) is None]
    return present, missing


def _sort_key(sort_by: SortBy):
    if sort_by is SortBy.PRIORITY:
        return lambda t: _PRIORITY_SORT_POSITION[t.priority]
    if sort_by is SortBy.STATUS:
        return lambda t: t.completed  # pending (False) first
    if sort_by is SortBy.DUE_DATE:
        return lambda t: t.due_date
    if sort_by is SortBy.CATEGORY:
        return lambda t: t.category
    return lambda t: t.id


def sort_tasks(
    tasks: Iterable[Task],
    sort_by: SortBy = SortBy.ID,
    order: SortOrder = SortOrder.ASCENDING,
) -> list[Task]:
    """Return a new list of tasks ordered by one key."""
    task_list = list(tasks)
    key = _sort_key(sort_by)
    descending = order is SortOrder.DESCENDING

    if sort_by in (SortBy.DUE_DATE, SortBy.CATEGORY):
        attr = "due_date" if sort_by is SortBy.DUE_DATE else "category"
        present, missing = _split_missing(task_list, attr)
        # sorted(reverse=True) keeps ties in input order
        present = sorted(present, key=key, reverse=descending)
        return missing + present if descending else present + missing

    return sorted(task_list, key=key, reverse=descending)
