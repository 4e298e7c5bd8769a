from pydantic import BaseModel


class TaskStatistics(BaseModel):
    """Counts and completion rate over a whole store."""
    total: int
    completed: int
    pending: int
    completion_percentage: float  # 0.0 when there are no tasks
    high_priority_count: int
    medium_priority_count: int
    low_priority_count: int
