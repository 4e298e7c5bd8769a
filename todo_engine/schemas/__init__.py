from todo_engine.schemas.task import TaskCreate, BulkResult
from todo_engine.schemas.statistics import TaskStatistics

__all__ = [
    "TaskCreate",
    "BulkResult",
    "TaskStatistics",
]
