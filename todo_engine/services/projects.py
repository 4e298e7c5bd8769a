"""
Multi-project container.

A ProjectManager holds independent TaskStores keyed by project name and
tracks which one is current. There is always at least one project; a
fresh manager starts with "default".
"""

from typing import Optional

from todo_engine.logging_config import get_logger
from todo_engine.models.project import Project
from todo_engine.services.store import TaskStore

logger = get_logger(__name__)

DEFAULT_PROJECT = "default"


class ProjectManager:
    def __init__(self) -> None:
        self._projects: dict[str, Project] = {DEFAULT_PROJECT: Project(DEFAULT_PROJECT)}
        self._current = DEFAULT_PROJECT

    @classmethod
    def from_projects(cls, projects: list[Project], current: str) -> "ProjectManager":
        manager = cls()
        if projects:
            manager._projects = {p.name: p for p in projects}
        if current in manager._projects:
            manager._current = current
        else:
            manager._current = sorted(manager._projects)[0]
        return manager

    @property
    def current_project_name(self) -> str:
        return self._current

    @property
    def current_store(self) -> TaskStore:
        return self._projects[self._current].store

    @property
    def projects(self) -> list[Project]:
        return [self._projects[name] for name in self.list_projects()]

    def get_project(self, name: str) -> Optional[Project]:
        return self._projects.get(name)

    def project_count(self) -> int:
        return len(self._projects)

    def list_projects(self) -> list[str]:
        return sorted(self._projects)

    def create_project(self, name: str) -> bool:
        if name in self._projects:
            return False
        self._projects[name] = Project(name)
        logger.info(f"Created project '{name}'")
        return True

    def delete_project(self, name: str) -> bool:
        """Delete a project. The current project cannot be deleted."""
        if name == self._current or name not in self._projects:
            return False
        del self._projects[name]
        logger.info(f"Deleted project '{name}'")
        return True

    def switch_project(self, name: str) -> bool:
        if name not in self._projects:
            return False
        self._current = name
        return True

    def rename_project(self, old_name: str, new_name: str) -> bool:
        if new_name in self._projects or old_name not in self._projects:
            return False

        project = self._projects.pop(old_name)
        project.name = new_name
        self._projects[new_name] = project
        if self._current == old_name:
            self._current = new_name

        logger.info(f"Renamed project '{old_name}' -> '{new_name}'")
        return True
