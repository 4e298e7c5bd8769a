"""
todo-engine - task store and query engine with subtasks, dependencies and recurrence.
"""

from todo_engine.models import Priority, Project, Recurrence, Task, TaskStatus
from todo_engine.schemas import BulkResult, TaskCreate, TaskStatistics
from todo_engine.services.filtering import FilterBuilder, OverdueFilter, TaskFilter
from todo_engine.services.projects import ProjectManager
from todo_engine.services.sorting import SortBy, SortOrder
from todo_engine.services.storage import TaskStorage
from todo_engine.services.store import TaskStore

__version__ = "0.1.0"

__all__ = [
    "BulkResult",
    "FilterBuilder",
    "OverdueFilter",
    "Priority",
    "Project",
    "ProjectManager",
    "Recurrence",
    "SortBy",
    "SortOrder",
    "Task",
    "TaskCreate",
    "TaskFilter",
    "TaskStatistics",
    "TaskStatus",
    "TaskStorage",
    "TaskStore",
]
