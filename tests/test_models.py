"""
Task model, enums and statistics.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from todo_engine.models.task import Priority, Recurrence, Task, TaskStatus
from todo_engine.services.statistics import compute_statistics


class TestPriority:
    def test_ordering(self):
        assert Priority.LOW < Priority.MEDIUM < Priority.HIGH
        assert Priority.HIGH > Priority.LOW
        assert Priority.MEDIUM >= Priority.MEDIUM
        assert max([Priority.MEDIUM, Priority.HIGH, Priority.LOW]) is Priority.HIGH

    @pytest.mark.parametrize("text,expected", [
        ("high", Priority.HIGH),
        ("h", Priority.HIGH),
        ("HIGH", Priority.HIGH),
        ("medium", Priority.MEDIUM),
        ("med", Priority.MEDIUM),
        ("m", Priority.MEDIUM),
        ("low", Priority.LOW),
        ("l", Priority.LOW),
        ("invalid", None),
    ])
    def test_parse(self, text, expected):
        assert Priority.parse(text) is expected


class TestRecurrenceParse:
    @pytest.mark.parametrize("text,expected", [
        ("daily", Recurrence.DAILY),
        ("D", Recurrence.DAILY),
        ("Weekly", Recurrence.WEEKLY),
        ("w", Recurrence.WEEKLY),
        ("MONTHLY", Recurrence.MONTHLY),
        ("m", Recurrence.MONTHLY),
        ("", None),
        ("yearly", None),
    ])
    def test_parse(self, text, expected):
        assert Recurrence.parse(text) is expected


class TestTask:
    def test_status_and_toggle(self):
        task = Task(id=1, description="t")
        assert task.status is TaskStatus.PENDING
        task.toggle_completion()
        assert task.status is TaskStatus.COMPLETED

    def test_id_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Task(id=0, description="t")

    def test_assignment_is_validated(self):
        task = Task(id=1, description="t")
        task.priority = "High"
        assert task.priority is Priority.HIGH

    def test_json_shape(self):
        task = Task(id=3, description="t", priority=Priority.LOW, depends_on={5, 2})
        data = task.model_dump(mode="json")

        assert data["priority"] == "Low"
        assert data["depends_on"] == [2, 5]
        assert data["due_date"] is None


class TestStatistics:
    def test_empty(self, store):
        stats = store.statistics()

        assert stats.total == 0
        assert stats.completion_percentage == 0.0

    def test_half_completed(self, store):
        ids = [store.add(f"t{i}") for i in range(4)]
        store.complete_many(ids[:2])

        stats = store.statistics()

        assert stats.total == 4
        assert stats.completed == 2
        assert stats.pending == 2
        assert stats.completion_percentage == 50.0

    def test_priority_counts(self, populated_store):
        stats = compute_statistics(populated_store)

        assert stats.high_priority_count == 3
        assert stats.medium_priority_count == 1
        assert stats.low_priority_count == 1
        assert stats.completion_percentage == pytest.approx(40.0)
