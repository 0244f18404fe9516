"""Cycle detector — depth-first search over the normalized dependency graph."""

from __future__ import annotations

import logging
from typing import Iterable

from .graph import Adjacency, build_graph
from .models import CycleReport, Task

logger = logging.getLogger(__name__)

NO_TASKS = "No tasks to analyze"
NO_CYCLES = "No circular dependencies found"
CYCLE_FOUND = (
    "Circular dependency detected. Review task dependencies and break the "
    "cycle by removing or restructuring dependencies."
)


def _find_cycle(start: str, graph: Adjacency, visited: set[str]) -> list[str]:
    """Walk the graph from ``start`` and return the first closed loop found.

    Uses an explicit stack of ``(task_id, next_edge_index)`` frames instead
    of recursion, so long dependency chains cannot hit the recursion limit.
    Returns an empty list when no cycle is reachable from ``start``.
    """
    path: list[str] = [start]
    on_stack: set[str] = {start}
    frames: list[tuple[str, int]] = [(start, 0)]
    visited.add(start)

    while frames:
        task_id, edge = frames[-1]
        deps = graph[task_id]
        if edge >= len(deps):
            frames.pop()
            path.pop()
            on_stack.discard(task_id)
            continue

        frames[-1] = (task_id, edge + 1)
        dep_id = deps[edge]

        if dep_id in on_stack:
            cycle = path[path.index(dep_id):]
            cycle.append(dep_id)
            return cycle

        if dep_id not in visited:
            visited.add(dep_id)
            on_stack.add(dep_id)
            path.append(dep_id)
            frames.append((dep_id, 0))
            logger.debug("Visiting %r, path: %s", dep_id, path)

    return []


def detect_circular_dependencies(tasks: Iterable[Task | dict]) -> CycleReport:
    """Report the first dependency cycle found, in input order.

    Roots are tried in the order tasks appear; dependencies are followed in
    adjacency order. The first loop walked is the one reported, which is not
    necessarily the shortest cycle in the graph.
    """
    graph = build_graph(tasks)
    if not graph:
        return CycleReport(has_cycle=False, cycle=[], suggestion=NO_TASKS)

    visited: set[str] = set()
    for task_id in graph:
        if task_id in visited:
            continue
        cycle = _find_cycle(task_id, graph, visited)
        if cycle:
            logger.info("Cycle detected: %s", " -> ".join(cycle))
            return CycleReport(has_cycle=True, cycle=cycle, suggestion=CYCLE_FOUND)

    logger.debug("No cycles detected among %d tasks", len(graph))
    return CycleReport(has_cycle=False, cycle=[], suggestion=NO_CYCLES)
