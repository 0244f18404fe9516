"""Parallelism leveler — groups tasks into waves of mutually independent work."""

from __future__ import annotations

import logging
from typing import Iterable

from .graph import build_graph
from .models import Task

logger = logging.getLogger(__name__)


class CyclicDependencyError(ValueError):
    """Raised in strict mode when the remaining tasks cannot be levelled."""

    def __init__(self, remaining: list[str]):
        self.remaining = remaining
        super().__init__(
            f"Cannot level {len(remaining)} task(s) blocked by a dependency "
            f"cycle: {', '.join(remaining)}"
        )


def find_parallel_tasks(
    tasks: Iterable[Task | dict], strict: bool = False
) -> list[list[str]]:
    """Group task ids by execution level (topological layers).

    Each level can be executed in parallel. Levels must be executed in
    order (level 0 before level 1, etc.). Ids inside a level keep input
    order.

    If no remaining task can be placed, the graph has a cycle. By default
    all remaining tasks are dumped into the current level so the call always
    terminates; that level is not schedulable and should be ignored when
    cycle detection reports a cycle. With ``strict=True`` a
    CyclicDependencyError is raised instead.
    """
    graph = build_graph(tasks)
    placed: set[str] = set()
    remaining = list(graph)
    levels: list[list[str]] = []

    while remaining:
        ready = [
            task_id for task_id in remaining
            if all(dep in placed for dep in graph[task_id])
        ]
        if not ready:
            if strict:
                raise CyclicDependencyError(remaining)
            logger.warning(
                "No tasks ready for level %d, forcing remaining tasks: %s",
                len(levels), remaining,
            )
            ready = remaining
        levels.append(ready)
        placed.update(ready)
        remaining = [task_id for task_id in remaining if task_id not in placed]

    logger.debug("Grouped %d tasks into %d levels", len(graph), len(levels))
    return levels
