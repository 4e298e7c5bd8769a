from datetime import date

from pydantic import BaseModel, Field

from todo_engine.models.task import Priority, Recurrence


class TaskCreate(BaseModel):
    """Initial fields for a new task. The store assigns the id."""
    description: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    category: str | None = None
    recurrence: Recurrence | None = None


class BulkResult(BaseModel):
    """Outcome of a bulk operation: how many ids succeeded, which were missing."""
    success_count: int = 0
    not_found_ids: list[int] = Field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return not self.not_found_ids
