from todo_engine.models.task import Priority, Recurrence, Task, TaskStatus
from todo_engine.models.project import Project

__all__ = [
    "Priority",
    "Recurrence",
    "Task",
    "TaskStatus",
    "Project",
]
