from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from todo_engine.services.store import TaskStore


def _new_store() -> "TaskStore":
    from todo_engine.services.store import TaskStore

    return TaskStore()


@dataclass
class Project:
    """Project - a named TaskStore with its own id sequence."""

    name: str
    store: "TaskStore" = field(default_factory=_new_store)
