"""Data models for the dependency analyzer."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """A task record is structurally malformed (non-string id, bad dependencies)."""


def _coerce_hours(value: Any) -> float:
    """Apply the default-substitution policy for estimated hours.

    Anything that is not a finite, non-negative real number becomes 0.0.
    Booleans and numeric strings are treated as non-numeric.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        hours = float(value)
    except OverflowError:
        return 0.0
    if math.isnan(hours) or math.isinf(hours) or hours < 0:
        return 0.0
    return hours


@dataclass
class Task:
    """A single task record.

    Only ``id``, ``dependencies`` and ``estimated_hours`` carry meaning for
    the analyzer; the remaining fields are passed through untouched.
    """
    id: str
    dependencies: list[str] = field(default_factory=list)
    estimated_hours: float = 0.0
    title: str = ""
    description: str = ""
    category: str = ""
    priority: int = 1
    ambiguity_flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "estimatedHours": self.estimated_hours,
            "priority": self.priority,
            "dependencies": list(self.dependencies),
            "category": self.category,
            "ambiguityFlags": list(self.ambiguity_flags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        if not isinstance(data, dict):
            raise TaskValidationError(
                f"Task record must be an object, got {type(data).__name__}"
            )
        task_id = data.get("id")
        if not isinstance(task_id, str):
            raise TaskValidationError(
                f"Task id must be a string, got {type(task_id).__name__}"
            )

        deps = data.get("dependencies")
        if deps is None:
            deps = []
        if not isinstance(deps, list):
            raise TaskValidationError(
                f"Task {task_id!r}: dependencies must be an array"
            )
        for dep in deps:
            if not isinstance(dep, str):
                raise TaskValidationError(
                    f"Task {task_id!r}: dependency ids must be strings, "
                    f"got {type(dep).__name__}"
                )

        raw_hours = data.get("estimatedHours", data.get("estimated_hours"))
        hours = _coerce_hours(raw_hours)
        if raw_hours is not None and hours != raw_hours:
            logger.debug(
                "Task %r: estimatedHours %r replaced with %s", task_id, raw_hours, hours
            )

        return cls(
            id=task_id,
            dependencies=list(deps),
            estimated_hours=hours,
            title=data.get("title") or "",
            description=data.get("description") or "",
            category=data.get("category") or "",
            priority=data.get("priority", 1),
            ambiguity_flags=list(
                data.get("ambiguityFlags", data.get("ambiguity_flags")) or []
            ),
        )


def coerce_tasks(items: Iterable[Task | dict]) -> list[Task]:
    """Normalize a sequence of Task objects or raw records into Tasks."""
    return [t if isinstance(t, Task) else Task.from_dict(t) for t in items]


@dataclass
class InvalidReference:
    """A dependency id that does not name any task in the input."""
    task_id: str
    dependency_id: str

    def to_dict(self) -> dict:
        return {"taskId": self.task_id, "dependencyId": self.dependency_id}


@dataclass
class CycleReport:
    """Result of cycle detection."""
    has_cycle: bool = False
    cycle: list[str] = field(default_factory=list)
    suggestion: str = ""

    def to_dict(self) -> dict:
        return {
            "hasCycle": self.has_cycle,
            "cycle": list(self.cycle),
            "suggestion": self.suggestion,
        }


@dataclass
class CriticalPath:
    """Longest dependency chain and the project duration it implies."""
    path: list[str] = field(default_factory=list)
    total_hours: float = 0.0

    def to_dict(self) -> dict:
        return {"path": list(self.path), "totalHours": self.total_hours}


@dataclass
class ValidationReport:
    """Combined analysis of one task list."""
    is_valid: bool
    circular_dependencies: CycleReport
    critical_path: CriticalPath
    parallel_tasks: list[list[str]] = field(default_factory=list)
    total_tasks: int = 0
    invalid_references: list[InvalidReference] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "circularDependencies": self.circular_dependencies.to_dict(),
            "criticalPath": self.critical_path.to_dict(),
            "parallelTasks": [list(level) for level in self.parallel_tasks],
            "totalTasks": self.total_tasks,
            "invalidReferences": [r.to_dict() for r in self.invalid_references],
        }
