"""
Pytest configuration and fixtures for todo-engine tests.
"""

from datetime import date

import pytest

from todo_engine.config import get_settings
from todo_engine.models.task import Priority
from todo_engine.schemas.task import TaskCreate
from todo_engine.services.store import TaskStore


# Fixed "today" so overdue checks do not depend on the clock
TODAY = date(2025, 6, 15)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data file at a temp dir and reset the settings cache."""
    monkeypatch.setenv("TODO_DATA_FILE", str(tmp_path / "tasks.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def store() -> TaskStore:
    """An empty store."""
    return TaskStore()


@pytest.fixture
def populated_store() -> TaskStore:
    """
    Five tasks covering the fields used by filters and sorting:

        1 "Write report"    High    due 2025-06-10  work      pending
        2 "Buy milk"        Low     no due          home      completed
        3 "Plan trip"       High    due 2025-07-01  no cat    pending
        4 "Fix bike"        Medium  due 2025-06-14  home      completed
        5 "Call plumber"    High    no due          no cat    pending
    """
    store = TaskStore()
    store.add(TaskCreate(description="Write report", priority=Priority.HIGH,
                         due_date=date(2025, 6, 10), category="work"))
    store.add(TaskCreate(description="Buy milk", priority=Priority.LOW,
                         category="home", completed=True))
    store.add(TaskCreate(description="Plan trip", priority=Priority.HIGH,
                         due_date=date(2025, 7, 1)))
    store.add(TaskCreate(description="Fix bike", priority=Priority.MEDIUM,
                         due_date=date(2025, 6, 14), category="home", completed=True))
    store.add(TaskCreate(description="Call plumber", priority=Priority.HIGH))
    return store
