"""DependencyAnalyzer — runs every analysis over one task list."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from .critical_path import calculate_critical_path
from .cycles import detect_circular_dependencies
from .graph import find_invalid_references, unique_tasks
from .levels import find_parallel_tasks
from .models import CriticalPath, CycleReport, Task, ValidationReport, coerce_tasks

logger = logging.getLogger(__name__)


class DependencyAnalyzer:
    """Stateless facade over the dependency analyses.

    Usage:
        analyzer = DependencyAnalyzer()
        report = analyzer.validate(tasks)
        if not report.is_valid:
            print(report.circular_dependencies.cycle)
    """

    def detect_cycles(self, tasks: Iterable[Task | dict]) -> CycleReport:
        return detect_circular_dependencies(tasks)

    def critical_path(self, tasks: Iterable[Task | dict]) -> CriticalPath:
        return calculate_critical_path(tasks)

    def parallel_levels(
        self, tasks: Iterable[Task | dict], strict: bool = False
    ) -> list[list[str]]:
        return find_parallel_tasks(tasks, strict=strict)

    def validate(self, tasks: Iterable[Task | dict]) -> ValidationReport:
        """Analyze a task list and combine the results into one report.

        The critical path and levels are only meaningful when
        ``report.is_valid`` is True.
        """
        task_list = coerce_tasks(tasks)
        distinct = unique_tasks(task_list)
        logger.info("Validating %d tasks", len(task_list))

        invalid = find_invalid_references(distinct)
        if invalid:
            # Analyses below see only valid edges, so each reference is logged once.
            ids = {t.id for t in distinct}
            distinct = [
                replace(t, dependencies=[d for d in t.dependencies if d in ids])
                for t in distinct
            ]

        cycles = detect_circular_dependencies(distinct)
        report = ValidationReport(
            is_valid=not cycles.has_cycle,
            circular_dependencies=cycles,
            critical_path=calculate_critical_path(distinct),
            parallel_tasks=find_parallel_tasks(distinct),
            total_tasks=len(task_list),
            invalid_references=invalid,
        )
        if cycles.has_cycle:
            logger.warning("Task list is invalid: cycle %s", cycles.cycle)
        return report
