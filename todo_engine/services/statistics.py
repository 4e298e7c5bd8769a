from collections.abc import Iterable

from todo_engine.models.task import Priority, Task
from todo_engine.schemas.statistics import TaskStatistics


def compute_statistics(tasks: Iterable[Task]) -> TaskStatistics:
    """Summarize a full (unfiltered) task set."""
    task_list = list(tasks)
    total = len(task_list)
    completed = sum(1 for t in task_list if t.completed)

    return TaskStatistics(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_percentage=(100.0 * completed / total) if total else 0.0,
        high_priority_count=sum(1 for t in task_list if t.priority is Priority.HIGH),
        medium_priority_count=sum(1 for t in task_list if t.priority is Priority.MEDIUM),
        low_priority_count=sum(1 for t in task_list if t.priority is Priority.LOW),
    )
