"""Analyzer — cycle detection, critical path and parallel levels for task graphs.

Every analysis is a pure function of a task list. Tasks may be given as
Task objects or as raw records with ``id``, ``dependencies`` and
``estimatedHours`` keys.

Usage:
    from PlanCheck.analyzer import DependencyAnalyzer

    report = DependencyAnalyzer().validate(tasks)
    print(report.critical_path.path, report.parallel_tasks)
"""

from .models import (
    Task,
    TaskValidationError,
    InvalidReference,
    CycleReport,
    CriticalPath,
    ValidationReport,
    coerce_tasks,
)
from .graph import build_graph, build_reverse_graph, find_invalid_references
from .cycles import detect_circular_dependencies
from .critical_path import calculate_critical_path
from .levels import CyclicDependencyError, find_parallel_tasks
from .validator import DependencyAnalyzer

__all__ = [
    "Task",
    "TaskValidationError",
    "InvalidReference",
    "CycleReport",
    "CriticalPath",
    "ValidationReport",
    "coerce_tasks",
    "build_graph",
    "build_reverse_graph",
    "find_invalid_references",
    "detect_circular_dependencies",
    "calculate_critical_path",
    "CyclicDependencyError",
    "find_parallel_tasks",
    "DependencyAnalyzer",
]
