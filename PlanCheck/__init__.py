"""PlanCheck — Task dependency graph analysis.

Checks a list of tasks for circular dependencies, computes the critical
path with the Critical Path Method and groups tasks into levels that can run
in parallel.

Modules:
    PlanCheck.analyzer  — Graph builder, cycle detector, critical path, leveler
    PlanCheck.server    — JSON HTTP API over the analyzer

Shared infrastructure:
    PlanCheck.config    — ServerConfig and logging setup
"""

from .analyzer import (
    Task,
    DependencyAnalyzer,
    detect_circular_dependencies,
    calculate_critical_path,
    find_parallel_tasks,
)
from .config import ServerConfig, setup_logging

__all__ = [
    "Task",
    "DependencyAnalyzer",
    "detect_circular_dependencies",
    "calculate_critical_path",
    "find_parallel_tasks",
    "ServerConfig",
    "setup_logging",
]
