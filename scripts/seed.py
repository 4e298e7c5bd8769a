#!/usr/bin/env python3
"""
Seed script to generate a task file with realistic random data.

Generates:
- Top-level tasks with random priority, category, due date and recurrence
- Subtasks under some of them
- Dependency edges pointing only at earlier tasks (so the graph stays acyclic)
- A few completed tasks

Usage:
    python -m scripts.seed [--tasks 50] [--projects 1] [--output FILE]

Options:
    --tasks N       Number of top-level tasks per project (default: 50)
    --projects N    Number of projects to create (default: 1)
    --output FILE   Where to write the file (default: TODO_DATA_FILE setting)
    --seed N        Random seed for reproducible output
"""

import argparse
import random
from datetime import date, timedelta

from todo_engine.exceptions import DependencyRejectedError
from todo_engine.logging_config import setup_logging
from todo_engine.models.task import Priority, Recurrence
from todo_engine.schemas.task import TaskCreate
from todo_engine.services.graph import execution_order
from todo_engine.services.projects import DEFAULT_PROJECT, ProjectManager
from todo_engine.services.storage import TaskStorage
from todo_engine.services.store import TaskStore

TASK_TEMPLATES = [
    "Buy groceries",
    "Write documentation",
    "Review pull requests",
    "Update dependencies",
    "Fix bug in authentication",
    "Implement new feature",
    "Refactor legacy code",
    "Write unit tests",
    "Deploy to production",
    "Meeting with team",
    "Update README",
    "Optimize database queries",
    "Research new technology",
    "Client presentation",
    "Security audit",
    "Backup database",
]

SUBTASK_TEMPLATES = [
    "Research requirements",
    "Create outline",
    "Draft initial version",
    "Review and revise",
    "Get feedback",
    "Test thoroughly",
    "Notify stakeholders",
    "Verify results",
    "Update changelog",
    "Schedule follow-up",
]

CATEGORIES = [
    "work",
    "personal",
    "urgent",
    "bug",
    "feature",
    "documentation",
    "maintenance",
    "research",
]

PROJECT_NAMES = ["Work", "Personal", "Home", "Learning", "Side Projects"]


def generate_store(rng: random.Random, num_tasks: int) -> TaskStore:
    """
    Fill a new store with random tasks.

    Strategy:
    - 30% of tasks get 1-3 subtasks
    - 25% of tasks depend on 1-2 earlier top-level tasks
    - 20% are recurring, 15% are already completed
    - due dates fall within two weeks either side of today
    """
    store = TaskStore()
    top_level: list[int] = []
    today = date.today()

    for _ in range(num_tasks):
        has_due = rng.random() < 0.7
        fields = TaskCreate(
            description=rng.choice(TASK_TEMPLATES),
            priority=rng.choice(list(Priority)),
            category=rng.choice(CATEGORIES) if rng.random() < 0.8 else None,
            due_date=today + timedelta(days=rng.randint(-14, 14)) if has_due else None,
            recurrence=rng.choice(list(Recurrence)) if has_due and rng.random() < 0.2 else None,
            completed=rng.random() < 0.15,
        )
        task_id = store.add(fields)

        if rng.random() < 0.3:
            for _ in range(rng.randint(1, 3)):
                sub_id = store.add_subtask(task_id, rng.choice(SUBTASK_TEMPLATES))
                store.set_priority(sub_id, rng.choice(list(Priority)))

        if top_level and rng.random() < 0.25:
            for dep_id in rng.sample(top_level, k=min(len(top_level), rng.randint(1, 2))):
                try:
                    store.add_dependency(task_id, dep_id)
                except DependencyRejectedError:
                    pass

        top_level.append(task_id)

    return store


def print_stats(name: str, store: TaskStore) -> None:
    stats = store.statistics()
    num_deps = sum(len(t.depends_on) for t in store)
    num_subtasks = sum(1 for t in store if t.is_subtask)

    print(f"\n=== {name} ===")
    print(f"Tasks:        {stats.total} ({num_subtasks} subtasks)")
    print(f"Completed:    {stats.completed} ({stats.completion_percentage:.1f}%)")
    print(f"Priorities:   high={stats.high_priority_count} "
          f"medium={stats.medium_priority_count} low={stats.low_priority_count}")
    print(f"Dependencies: {num_deps}")
    print(f"Categories:   {', '.join(store.all_categories()) or '-'}")
    print(f"First in order: {execution_order(store)[:10]}")


def main():
    parser = argparse.ArgumentParser(description="Generate a task file with random data")
    parser.add_argument("--tasks", type=int, default=50, help="Top-level tasks per project")
    parser.add_argument("--projects", type=int, default=1, help="Number of projects")
    parser.add_argument("--output", type=str, default=None, help="Output file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()
    setup_logging()

    rng = random.Random(args.seed)
    storage = TaskStorage(args.output)

    print(f"=== todo-engine Seed Script ===")
    print(f"Generating {args.projects} project(s) x {args.tasks} tasks...")

    if args.projects <= 1:
        store = generate_store(rng, args.tasks)
        print_stats(DEFAULT_PROJECT, store)
        storage.save(store)
    else:
        manager = ProjectManager()
        names = [DEFAULT_PROJECT] + PROJECT_NAMES[: args.projects - 1]
        for name in names:
            manager.create_project(name)
            project = manager.get_project(name)
            project.store = generate_store(rng, args.tasks)
            print_stats(name, project.store)
        storage.save_projects(manager)

    print(f"\n=== Seeding Complete ===")
    print(f"Written to: {storage.path}")


if __name__ == "__main__":
    main()
