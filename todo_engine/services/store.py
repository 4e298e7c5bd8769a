"""
In-memory task store.

The TaskStore is the single source of truth for a list of tasks:
- assigns ids (strictly increasing from 1, never reused)
- cascades removal from a parent to all of its subtasks
- validates dependency edges so the depends_on graph stays acyclic

Single-task operations return the affected Task, or None when the id does
not exist (nothing is changed in that case). Bulk operations apply each id
independently and report a BulkResult.

The store is not thread-safe; callers that share one across threads must
serialize access themselves.
"""

from collections.abc import Callable, Iterable, Iterator
from datetime import date
from typing import Optional

from todo_engine.exceptions import CycleDetectedError, NotFoundError, SelfDependencyError
from todo_engine.logging_config import get_logger
from todo_engine.models.task import Priority, Recurrence, Task
from todo_engine.schemas.statistics import TaskStatistics
from todo_engine.schemas.task import BulkResult, TaskCreate
from todo_engine.services.filtering import TaskFilter, apply_filter
from todo_engine.services.graph import would_create_cycle
from todo_engine.services.sorting import SortBy, SortOrder, sort_tasks
from todo_engine.services.statistics import compute_statistics

logger = get_logger(__name__)


class TaskStore:
    """A collection of tasks with its own id sequence."""

    def __init__(self) -> None:
        # dict preserves insertion order, which is the store order
        self._tasks: dict[int, Task] = {}
        self._next_id = 1

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task], next_id: int = 1) -> "TaskStore":
        """
        Rebuild a store from persisted tasks.

        next_id is raised above the highest stored id if needed so new ids
        never collide with loaded ones.
        """
        store = cls()
        for task in tasks:
            store._tasks[task.id] = task
        highest = max(store._tasks, default=0)
        store._next_id = max(next_id, highest + 1, 1)
        return store

    # ---- read access ----

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def tasks(self) -> list[Task]:
        """All tasks in store (insertion) order."""
        return list(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def is_empty(self) -> bool:
        return not self._tasks

    def get(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    # ---- creation ----

    def add(self, fields: TaskCreate | str) -> int:
        """Add a task and return its new id. Always succeeds."""
        if isinstance(fields, str):
            fields = TaskCreate(description=fields)

        task_id = self._next_id
        self._tasks[task_id] = Task(id=task_id, **fields.model_dump())
        self._next_id += 1

        logger.debug(f"Added task id={task_id} description='{fields.description}'")
        return task_id

    def add_subtask(self, parent_id: int, description: str) -> Optional[int]:
        """Add a subtask under parent_id. Returns None if the parent does not exist."""
        if parent_id not in self._tasks:
            logger.debug(f"Subtask not added: parent {parent_id} not found")
            return None

        task_id = self.add(description)
        self._tasks[task_id].parent_id = parent_id
        return task_id

    # ---- removal ----

    def remove(self, task_id: int) -> Optional[Task]:
        """Remove a task and, transitively, all of its subtasks. Returns the task."""
        removed = self.remove_with_subtasks(task_id)
        return removed[0] if removed else None

    def remove_with_subtasks(self, task_id: int) -> list[Task]:
        """
        Remove a task and every task whose parent chain leads to it.

        Returns the removed tasks, the requested one first; empty if the id
        does not exist. Tasks that merely depend on a removed task keep
        their (now dangling) dependency ids.
        """
        if task_id not in self._tasks:
            return []

        doomed = [task_id]
        frontier = {task_id}
        while frontier:
            children = [
                t.id for t in self._tasks.values()
                if t.parent_id in frontier and t.id not in doomed
            ]
            doomed.extend(children)
            frontier = set(children)

        removed = [self._tasks.pop(i) for i in doomed]
        logger.debug(f"Removed task id={task_id} with {len(removed) - 1} subtask(s)")
        return removed

    # ---- single-task mutations ----

    def _update(self, task_id: int, apply: Callable[[Task], None]) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None:
            return None
        apply(task)
        return task

    def complete(self, task_id: int) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "completed", True))

    def uncomplete(self, task_id: int) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "completed", False))

    def toggle(self, task_id: int) -> Optional[Task]:
        return self._update(task_id, Task.toggle_completion)

    def set_priority(self, task_id: int, priority: Priority) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "priority", priority))

    def set_due_date(self, task_id: int, due_date: Optional[date]) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "due_date", due_date))

    def set_category(self, task_id: int, category: Optional[str]) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "category", category))

    def set_recurrence(self, task_id: int, recurrence: Optional[Recurrence]) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "recurrence", recurrence))

    def edit_description(self, task_id: int, description: str) -> Optional[Task]:
        return self._update(task_id, lambda t: setattr(t, "description", description))

    # ---- bulk mutations ----

    def _bulk(self, task_ids: Iterable[int], op: Callable[[int], object]) -> BulkResult:
        result = BulkResult()
        for task_id in dict.fromkeys(task_ids):
            if op(task_id) is None:
                result.not_found_ids.append(task_id)
            else:
                result.success_count += 1
        if result.not_found_ids:
            logger.debug(f"Bulk operation skipped missing ids {result.not_found_ids}")
        return result

    def complete_many(self, task_ids: Iterable[int]) -> BulkResult:
        return self._bulk(task_ids, self.complete)

    def uncomplete_many(self, task_ids: Iterable[int]) -> BulkResult:
        return self._bulk(task_ids, self.uncomplete)

    def toggle_many(self, task_ids: Iterable[int]) -> BulkResult:
        return self._bulk(task_ids, self.toggle)

    def remove_many(self, task_ids: Iterable[int]) -> BulkResult:
        # Highest id first: a subtask always has a higher id than its parent,
        # so no requested id is swallowed by an earlier cascade.
        return self._bulk(sorted(set(task_ids), reverse=True), self.remove)

    def set_priority_many(self, task_ids: Iterable[int], priority: Priority) -> BulkResult:
        return self._bulk(task_ids, lambda i: self.set_priority(i, priority))

    def set_category_many(self, task_ids: Iterable[int], category: Optional[str]) -> BulkResult:
        return self._bulk(task_ids, lambda i: self.set_category(i, category))

    def set_recurrence_many(
        self, task_ids: Iterable[int], recurrence: Optional[Recurrence]
    ) -> BulkResult:
        return self._bulk(task_ids, lambda i: self.set_recurrence(i, recurrence))

    # ---- dependencies ----

    def add_dependency(self, task_id: int, depends_on_id: int) -> Task:
        """
        Record that task_id is blocked by depends_on_id.

        Raises SelfDependencyError, NotFoundError or CycleDetectedError and
        leaves the store unchanged when the edge is refused. Adding an edge
        that already exists is a no-op.
        """
        if task_id == depends_on_id:
            logger.warning(f"Self-dependency rejected: {task_id}")
            raise SelfDependencyError(task_id)

        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        if depends_on_id not in self._tasks:
            raise NotFoundError("Dependency task", depends_on_id)

        if depends_on_id in task.depends_on:
            return task

        if would_create_cycle(self._tasks, task_id, depends_on_id):
            logger.warning(f"Cycle detected: {task_id} -> {depends_on_id} would create a cycle")
            raise CycleDetectedError(task_id, depends_on_id)

        task.depends_on.add(depends_on_id)
        logger.debug(f"Added dependency {task_id} -> {depends_on_id}")
        return task

    def remove_dependency(self, task_id: int, depends_on_id: int) -> Optional[Task]:
        """Drop an edge. None if the task does not exist or has no such edge."""
        task = self._tasks.get(task_id)
        if task is None or depends_on_id not in task.depends_on:
            return None
        task.depends_on.discard(depends_on_id)
        return task

    def get_dependents(self, task_id: int) -> set[int]:
        """Ids of tasks that directly depend on task_id."""
        return {t.id for t in self._tasks.values() if task_id in t.depends_on}

    def get_dependencies(self, task_id: int) -> list[Task]:
        """Existing tasks that task_id depends on, ordered by id. Dangling ids are skipped."""
        task = self._tasks.get(task_id)
        if task is None:
            return []
        return [self._tasks[i] for i in sorted(task.depends_on) if i in self._tasks]

    def is_blocked(self, task_id: int) -> bool:
        """True if any existing dependency of the task is still pending."""
        return any(not dep.completed for dep in self.get_dependencies(task_id))

    # ---- subtasks ----

    def get_subtasks(self, parent_id: int) -> list[Task]:
        return [t for t in self._tasks.values() if t.parent_id == parent_id]

    def get_subtask_count(self, parent_id: int) -> int:
        return len(self.get_subtasks(parent_id))

    def get_completed_subtask_count(self, parent_id: int) -> int:
        return sum(1 for t in self.get_subtasks(parent_id) if t.completed)

    # ---- queries ----

    def get_completed_tasks(self) -> list[Task]:
        return [t for t in self._tasks.values() if t.completed]

    def get_pending_tasks(self) -> list[Task]:
        return [t for t in self._tasks.values() if not t.completed]

    def get_overdue_tasks(self, today: Optional[date] = None) -> list[Task]:
        today = today or date.today()
        return [t for t in self._tasks.values() if t.is_overdue(today)]

    def search(self, keyword: str) -> list[Task]:
        """Case-insensitive substring match on descriptions."""
        needle = keyword.lower()
        return [t for t in self._tasks.values() if needle in t.description.lower()]

    def all_categories(self) -> list[str]:
        return sorted({t.category for t in self._tasks.values() if t.category})

    def query(
        self,
        task_filter: Optional[TaskFilter] = None,
        sort_by: SortBy = SortBy.ID,
        order: SortOrder = SortOrder.ASCENDING,
        today: Optional[date] = None,
    ) -> list[Task]:
        """Filter then sort the stored tasks. No filter means every task."""
        filtered = apply_filter(self._tasks.values(), task_filter, today)
        return sort_tasks(filtered, sort_by, order)

    def statistics(self) -> TaskStatistics:
        return compute_statistics(self._tasks.values())
