"""
JSON persistence for task stores and project managers.

The whole store is written as one document (tasks plus the next_id
counter) so that ids keep increasing after a reload. Files are written to
a temporary sibling and moved into place, so a crash never leaves a
half-written file behind.

Loading a projects file also accepts the single-store format and wraps it
in the default project.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from todo_engine.config import get_settings
from todo_engine.exceptions import StorageError
from todo_engine.logging_config import get_logger
from todo_engine.models.project import Project
from todo_engine.models.task import Task
from todo_engine.services.projects import DEFAULT_PROJECT, ProjectManager
from todo_engine.services.store import TaskStore

logger = get_logger(__name__)


# =============================================================================
# Document schemas
# =============================================================================

class StoreDocument(BaseModel):
    """Serialized form of one TaskStore."""
    model_config = ConfigDict(extra="forbid")

    tasks: list[Task] = []
    next_id: int = 1

    @field_validator("tasks")
    @classmethod
    def unique_ids(cls, v: list[Task]) -> list[Task]:
        seen: set[int] = set()
        for task in v:
            if task.id in seen:
                raise ValueError(f"Duplicate task id {task.id}")
            seen.add(task.id)
        return v

    @classmethod
    def from_store(cls, store: TaskStore) -> "StoreDocument":
        return cls(tasks=store.tasks, next_id=store.next_id)

    def to_store(self) -> TaskStore:
        return TaskStore.from_tasks(self.tasks, self.next_id)


class ProjectDocument(BaseModel):
    name: str
    store: StoreDocument


class ProjectsDocument(BaseModel):
    """Serialized form of a ProjectManager."""
    model_config = ConfigDict(extra="forbid")

    projects: list[ProjectDocument]
    current_project: str = DEFAULT_PROJECT


# =============================================================================
# Storage
# =============================================================================

class TaskStorage:
    """Reads and writes task files at a fixed path."""

    def __init__(self, path: Optional[str | Path] = None):
        self.path = Path(path).expanduser() if path is not None else get_settings().data_file

    def exists(self) -> bool:
        return self.path.exists()

    # ---- single store ----

    def save(self, store: TaskStore) -> None:
        self._write(StoreDocument.from_store(store).model_dump_json(indent=2))
        logger.info(f"Saved {len(store)} task(s) to {self.path}")

    def load(self) -> TaskStore:
        raw = self._read()
        try:
            document = StoreDocument.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise StorageError(f"Failed to parse task file: {exc}", str(self.path)) from exc

        store = document.to_store()
        logger.info(f"Loaded {len(store)} task(s) from {self.path}")
        return store

    # ---- projects ----

    def save_projects(self, manager: ProjectManager) -> None:
        document = ProjectsDocument(
            projects=[
                ProjectDocument(name=p.name, store=StoreDocument.from_store(p.store))
                for p in manager.projects
            ],
            current_project=manager.current_project_name,
        )
        self._write(document.model_dump_json(indent=2))
        logger.info(f"Saved {manager.project_count()} project(s) to {self.path}")

    def load_projects(self) -> ProjectManager:
        raw = self._read()

        try:
            document = ProjectsDocument.model_validate_json(raw)
        except PydanticValidationError:
            document = None

        if document is not None:
            projects = [Project(name=p.name, store=p.store.to_store()) for p in document.projects]
            manager = ProjectManager.from_projects(projects, document.current_project)
            logger.info(f"Loaded {manager.project_count()} project(s) from {self.path}")
            return manager

        # Older files hold a single task list
        try:
            store = StoreDocument.model_validate_json(raw).to_store()
        except PydanticValidationError as exc:
            raise StorageError(
                f"Failed to parse file as either projects or task list: {exc}",
                str(self.path),
            ) from exc

        logger.info(f"Loaded single task list from {self.path} into project '{DEFAULT_PROJECT}'")
        return ProjectManager.from_projects([Project(DEFAULT_PROJECT, store)], DEFAULT_PROJECT)

    # ---- file helpers ----

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read file: {exc}", str(self.path)) from exc

    def _write(self, payload: str) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Failed to write file: {exc}", str(self.path)) from exc
