"""
Filter construction and evaluation.
"""

from datetime import date

import pytest

from todo_engine.exceptions import FilterConflictError, ValidationError
from todo_engine.models.task import Priority, Task, TaskStatus
from todo_engine.services.filtering import (
    FilterBuilder,
    OverdueFilter,
    TaskFilter,
    apply_filter,
)


def ids(tasks):
    return [t.id for t in tasks]


class TestFilterBuilder:
    def test_empty_builder_builds_none(self):
        builder = FilterBuilder()
        assert builder.is_empty()
        assert builder.build() is None

    def test_combined_criteria(self):
        task_filter = (
            FilterBuilder()
            .with_status(TaskStatus.PENDING)
            .with_priority(Priority.HIGH)
            .with_category("work")
            .with_overdue()
            .build()
        )

        assert task_filter == TaskFilter(
            status=TaskStatus.PENDING,
            priority=Priority.HIGH,
            category="work",
            overdue=OverdueFilter.ONLY_OVERDUE,
        )

    @pytest.mark.parametrize("method,first,second", [
        ("with_status", TaskStatus.PENDING, TaskStatus.COMPLETED),
        ("with_priority", Priority.HIGH, Priority.LOW),
        ("with_category", "work", "home"),
        ("with_overdue", OverdueFilter.ONLY_OVERDUE, OverdueFilter.ONLY_NOT_OVERDUE),
    ])
    def test_second_value_conflicts(self, method, first, second):
        builder = getattr(FilterBuilder(), method)(first)

        with pytest.raises(FilterConflictError) as exc_info:
            getattr(builder, method)(second)

        assert "multiple" in exc_info.value.message
        assert exc_info.value.error_code == "filter_conflict"

    def test_conflict_keeps_first_value(self):
        builder = FilterBuilder().with_priority(Priority.HIGH)
        with pytest.raises(FilterConflictError):
            builder.with_priority(Priority.LOW)
        assert builder.build().priority is Priority.HIGH

    def test_blank_category_rejected(self):
        with pytest.raises(ValidationError):
            FilterBuilder().with_category("   ")

    def test_overdue_all_rejected(self):
        builder = FilterBuilder()
        with pytest.raises(ValidationError):
            builder.with_overdue(OverdueFilter.ALL)
        assert builder.build() is None

    def test_filter_matching_nothing_is_not_none(self, populated_store):
        task_filter = FilterBuilder().with_category("nope").build()

        assert task_filter is not None
        assert apply_filter(populated_store, task_filter) == []


class TestTaskFilter:
    def test_no_filter_keeps_everything(self, populated_store):
        assert ids(apply_filter(populated_store, None)) == [1, 2, 3, 4, 5]

    def test_status(self, populated_store, today):
        done = TaskFilter(status=TaskStatus.COMPLETED)
        todo = TaskFilter(status=TaskStatus.PENDING)

        assert ids(apply_filter(populated_store, done, today)) == [2, 4]
        assert ids(apply_filter(populated_store, todo, today)) == [1, 3, 5]

    def test_priority(self, populated_store, today):
        assert ids(apply_filter(populated_store, TaskFilter(priority=Priority.HIGH), today)) == [1, 3, 5]

    def test_category_is_exact_and_case_sensitive(self, populated_store, today):
        assert ids(apply_filter(populated_store, TaskFilter(category="home"), today)) == [2, 4]
        assert apply_filter(populated_store, TaskFilter(category="Home"), today) == []
        assert apply_filter(populated_store, TaskFilter(category="hom"), today) == []

    def test_overdue_modes(self, populated_store, today):
        overdue = TaskFilter(overdue=OverdueFilter.ONLY_OVERDUE)
        not_overdue = TaskFilter(overdue=OverdueFilter.ONLY_NOT_OVERDUE)

        assert ids(apply_filter(populated_store, overdue, today)) == [1, 4]
        assert ids(apply_filter(populated_store, not_overdue, today)) == [2, 3, 5]
        assert len(apply_filter(populated_store, TaskFilter(), today)) == 5

    def test_due_today_is_not_overdue(self, today):
        task = Task(id=1, description="t", due_date=today)
        assert not task.is_overdue(today)
        assert Task(id=2, description="t", due_date=date(2025, 6, 14)).is_overdue(today)
        assert not Task(id=3, description="t").is_overdue(today)

    def test_and_across_criteria(self, populated_store, today):
        task_filter = TaskFilter(
            status=TaskStatus.PENDING,
            priority=Priority.HIGH,
            overdue=OverdueFilter.ONLY_OVERDUE,
        )
        assert ids(apply_filter(populated_store, task_filter, today)) == [1]
