"""
Exceptions for todo-engine.

All errors raised by the engine derive from TodoEngineException and carry:
- a machine-readable error code (e.g. "not_found", "cycle_detected")
- a human-readable message
- optional structured details

Lookups and single-task mutations report a missing task by returning None;
the exceptions below are raised where a caller has to be told *why*
something was refused.
"""

from typing import Any, Dict, List, Optional


class TodoEngineException(Exception):
    """Base exception for all todo-engine errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(TodoEngineException):
    """Referenced task does not exist."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            message=f"{resource} with ID {resource_id} not found",
            error_code="not_found",
        )
        self.resource = resource
        self.resource_id = resource_id


# =============================================================================
# Dependency rejections
# =============================================================================

class DependencyRejectedError(TodoEngineException):
    """A dependency edge was refused; the store is unchanged."""


class SelfDependencyError(DependencyRejectedError):
    """Task cannot depend on itself."""

    def __init__(self, task_id: int):
        super().__init__(
            message="A task cannot depend on itself",
            error_code="self_dependency",
        )
        self.task_id = task_id


class CycleDetectedError(DependencyRejectedError):
    """Adding a dependency would create a cycle."""

    def __init__(self, task_id: int, depends_on_id: int):
        super().__init__(
            message="Adding this dependency would create a cycle in the task graph",
            error_code="cycle_detected",
            details=[{
                "loc": ["depends_on"],
                "msg": f"Dependency {task_id} -> {depends_on_id} would create a cycle",
                "type": "cycle_error",
            }],
        )
        self.task_id = task_id
        self.depends_on_id = depends_on_id


# =============================================================================
# Query construction / input
# =============================================================================

class FilterConflictError(TodoEngineException):
    """The same filter criterion was supplied twice."""

    def __init__(self, criterion: str, message: str):
        super().__init__(
            message=message,
            error_code="filter_conflict",
            details=[{"loc": [criterion], "msg": message, "type": "conflict_error"}],
        )
        self.criterion = criterion


class ValidationError(TodoEngineException):
    """Input validation error."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(
            message=message,
            error_code="validation_error",
            details=details,
        )


class StorageError(TodoEngineException):
    """Reading or writing the task file failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="storage_error",
        )
        self.path = path
