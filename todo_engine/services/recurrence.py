"""
Recurrence calculations and materialisation of recurring tasks.

next_due_date() is a pure date calculation:
- Daily:   due + 1 day
- Weekly:  due + 7 days
- Monthly: same day next month, clamped to the month's last day
           (Jan 31 -> Feb 28/29, Mar 31 -> Apr 30, Dec -> Jan of next year)

When a recurring task is completed, a fresh instance is created with the
next due date. Its subtasks are recreated as new, pending subtasks.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional

from todo_engine.logging_config import get_logger
from todo_engine.models.task import Priority, Recurrence
from todo_engine.schemas.task import BulkResult, TaskCreate

if TYPE_CHECKING:
    from todo_engine.services.store import TaskStore

logger = get_logger(__name__)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def next_due_date(
    due_date: Optional[date],
    recurrence: Optional[Recurrence],
) -> Optional[date]:
    """Next occurrence after due_date, or None if either input is missing."""
    if due_date is None or recurrence is None:
        return None

    if recurrence is Recurrence.DAILY:
        return due_date + timedelta(days=1)

    if recurrence is Recurrence.WEEKLY:
        return due_date + timedelta(days=7)

    # Monthly
    year, month = due_date.year, due_date.month + 1
    if month > 12:
        year, month = year + 1, 1
    day = min(due_date.day, days_in_month(year, month))
    return date(year, month, day)


@dataclass
class SubtaskSnapshot:
    description: str
    priority: Priority


@dataclass
class RecurringTaskSnapshot:
    """What is needed to recreate a recurring task after it is completed."""
    description: str
    priority: Priority
    category: Optional[str]
    parent_id: Optional[int]
    recurrence: Optional[Recurrence]
    next_due_date: Optional[date]
    subtasks: list[SubtaskSnapshot] = field(default_factory=list)


def snapshot_recurring_task(store: "TaskStore", task_id: int) -> Optional[RecurringTaskSnapshot]:
    """Capture a recurring task and its direct subtasks. None if missing or not recurring."""
    task = store.get(task_id)
    if task is None or not task.is_recurring:
        return None

    return RecurringTaskSnapshot(
        description=task.description,
        priority=task.priority,
        category=task.category,
        parent_id=task.parent_id,
        recurrence=task.recurrence,
        next_due_date=task.next_due_date(),
        subtasks=[
            SubtaskSnapshot(description=s.description, priority=s.priority)
            for s in store.get_subtasks(task_id)
        ],
    )


def recreate_recurring_task(store: "TaskStore", snapshot: RecurringTaskSnapshot) -> int:
    """
    Add a new pending instance of a recurring task and return its id.

    The new instance keeps the parent link when the parent still exists;
    otherwise it becomes a top-level task.
    """
    fields = TaskCreate(
        description=snapshot.description,
        priority=snapshot.priority,
        category=snapshot.category,
        recurrence=snapshot.recurrence,
        due_date=snapshot.next_due_date,
    )

    if snapshot.parent_id is not None and snapshot.parent_id in store:
        new_id = store.add_subtask(snapshot.parent_id, snapshot.description)
        store.set_priority(new_id, fields.priority)
        store.set_category(new_id, fields.category)
        store.set_recurrence(new_id, fields.recurrence)
        store.set_due_date(new_id, fields.due_date)
    else:
        new_id = store.add(fields)

    for sub in snapshot.subtasks:
        sub_id = store.add_subtask(new_id, sub.description)
        store.set_priority(sub_id, sub.priority)

    logger.info(
        f"Recreated recurring task id={new_id} '{snapshot.description}' "
        f"due={snapshot.next_due_date} subtasks={len(snapshot.subtasks)}"
    )
    return new_id


def complete_and_roll_forward(store: "TaskStore", task_id: int) -> Optional[int]:
    """
    Complete a task; if it was a pending recurring task, create its next instance.

    Returns the id of the new instance, or None when nothing was created
    (unknown id, task not recurring, or already completed).
    """
    task = store.get(task_id)
    if task is None:
        return None

    snapshot = None if task.completed else snapshot_recurring_task(store, task_id)
    store.complete(task_id)

    if snapshot is None:
        return None
    return recreate_recurring_task(store, snapshot)


def complete_many_and_roll_forward(
    store: "TaskStore",
    task_ids: Iterable[int],
) -> tuple[BulkResult, list[int]]:
    """
    Bulk variant of complete_and_roll_forward.

    Returns the completion summary and the ids of the created instances.
    """
    result = BulkResult()
    created: list[int] = []

    for task_id in dict.fromkeys(task_ids):
        if task_id not in store:
            result.not_found_ids.append(task_id)
            continue
        new_id = complete_and_roll_forward(store, task_id)
        result.success_count += 1
        if new_id is not None:
            created.append(new_id)

    return result, created
