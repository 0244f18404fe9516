"""Critical-path calculator (CPM forward pass + backtrace).

Hours are summed as ``Decimal`` values built from each float's shortest
repr, so ``0.1 + 0.2`` equals ``0.3`` and ties in the backtrace are found by
exact comparison.
"""

from __future__ import annotations

import logging
from collections import deque
from decimal import Decimal
from typing import Iterable

from .graph import Adjacency, build_graph, build_reverse_graph, unique_tasks
from .models import CriticalPath, Task, coerce_tasks

logger = logging.getLogger(__name__)


def _exact(hours: float) -> Decimal:
    return Decimal(repr(float(hours)))


def _forward_pass(
    graph: Adjacency, hours: dict[str, Decimal]
) -> tuple[dict[str, Decimal], dict[str, Decimal], str | None]:
    """Kahn-style pass computing earliest start and finish times.

    Tasks on or behind a cycle never reach in-degree 0 and are left out of
    both returned maps.
    """
    dependents = build_reverse_graph(graph)
    in_degree = {task_id: len(deps) for task_id, deps in graph.items()}
    earliest: dict[str, Decimal] = {}
    finish: dict[str, Decimal] = {}

    queue: deque[str] = deque()
    for task_id, degree in in_degree.items():
        if degree == 0:
            queue.append(task_id)
            earliest[task_id] = Decimal(0)

    terminus: str | None = None
    while queue:
        current = queue.popleft()
        end = earliest[current] + hours[current]
        finish[current] = end
        logger.debug(
            "Task %r start=%s hours=%s end=%s", current, earliest[current], hours[current], end
        )

        if terminus is None or end > finish[terminus]:
            terminus = current

        for next_id in dependents[current]:
            earliest[next_id] = max(earliest.get(next_id, Decimal(0)), end)
            in_degree[next_id] -= 1
            if in_degree[next_id] == 0:
                queue.append(next_id)

    if len(finish) < len(graph):
        logger.warning(
            "Forward pass reached %d of %d tasks; the rest are blocked by a cycle",
            len(finish), len(graph),
        )
    return earliest, finish, terminus


def calculate_critical_path(tasks: Iterable[Task | dict]) -> CriticalPath:
    """Compute the longest dependency chain and the total project duration.

    Callers should run cycle detection first: on a cyclic graph only the
    acyclic portion is scheduled. When several dependencies finish exactly
    when a task starts, the first in dependency order is followed, so the
    returned path is deterministic but not necessarily unique.
    """
    task_list = unique_tasks(coerce_tasks(tasks))
    if not task_list:
        return CriticalPath(path=[], total_hours=0.0)

    graph = build_graph(task_list)
    hours = {t.id: _exact(t.estimated_hours) for t in task_list}
    earliest, finish, terminus = _forward_pass(graph, hours)

    path: list[str] = []
    current = terminus
    while current is not None:
        path.append(current)
        start = earliest[current]
        current = next(
            (dep for dep in graph[current] if finish.get(dep) == start),
            None,
        )
    path.reverse()

    total = finish[terminus] if terminus is not None else Decimal(0)
    logger.debug("Critical path %s, total hours %s", path, total)
    return CriticalPath(path=path, total_hours=float(total))
