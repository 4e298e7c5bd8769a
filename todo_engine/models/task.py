from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Priority(str, Enum):
    """
    Task priority, totally ordered Low < Medium < High.

    Values are the display names so they serialize as "Low"/"Medium"/"High".
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, text: str) -> Optional["Priority"]:
        """Parse "high"/"h", "medium"/"med"/"m", "low"/"l" (any case)."""
        return _PRIORITY_ALIASES.get(text.strip().lower())


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}
_PRIORITY_ALIASES = {
    "low": Priority.LOW,
    "l": Priority.LOW,
    "medium": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "m": Priority.MEDIUM,
    "high": Priority.HIGH,
    "h": Priority.HIGH,
}


class Recurrence(str, Enum):
    """How often a recurring task comes back."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"

    @classmethod
    def parse(cls, text: str) -> Optional["Recurrence"]:
        """Parse "daily"/"d", "weekly"/"w", "monthly"/"m" (any case)."""
        return _RECURRENCE_ALIASES.get(text.strip().lower())


_RECURRENCE_ALIASES = {
    "daily": Recurrence.DAILY,
    "d": Recurrence.DAILY,
    "weekly": Recurrence.WEEKLY,
    "w": Recurrence.WEEKLY,
    "monthly": Recurrence.MONTHLY,
    "m": Recurrence.MONTHLY,
}


class TaskStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


class Task(BaseModel):
    """
    A unit of work held by a TaskStore.

    Key fields:
    - id: assigned by the store, strictly increasing, never reused
    - parent_id: set for subtasks; removing the parent removes the subtask
    - depends_on: ids of tasks blocking this one. May point at tasks that
      have since been removed; readers skip such ids.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(ge=1)
    description: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: Optional[date] = None
    category: Optional[str] = None
    parent_id: Optional[int] = None
    recurrence: Optional[Recurrence] = None
    depends_on: set[int] = Field(default_factory=set)

    @field_serializer("depends_on")
    def _serialize_depends_on(self, value: set[int]) -> list[int]:
        return sorted(value)

    @property
    def is_subtask(self) -> bool:
        return self.parent_id is not None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.PENDING

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """Due date strictly before today. No due date is never overdue."""
        if self.due_date is None:
            return False
        return self.due_date < (today or date.today())

    def toggle_completion(self) -> None:
        self.completed = not self.completed

    def next_due_date(self) -> Optional[date]:
        from todo_engine.services.recurrence import next_due_date

        return next_due_date(self.due_date, self.recurrence)
