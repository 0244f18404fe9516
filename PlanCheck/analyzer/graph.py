"""Graph builder — normalizes a task list into an adjacency map.

An edge ``A -> B`` in the adjacency map means "A requires B to finish
first". Dependencies naming unknown tasks are dropped and reported; repeated
dependencies collapse to a single edge.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .models import InvalidReference, Task, coerce_tasks

logger = logging.getLogger(__name__)

Adjacency = dict[str, list[str]]


def unique_tasks(tasks: list[Task]) -> list[Task]:
    """Drop tasks whose id was already seen. The first occurrence wins."""
    seen: set[str] = set()
    result: list[Task] = []
    for task in tasks:
        if task.id in seen:
            logger.warning("Duplicate task id %r ignored", task.id)
            continue
        seen.add(task.id)
        result.append(task)
    return result


def build_graph(
    tasks: Iterable[Task | dict],
    on_invalid: Callable[[InvalidReference], None] | None = None,
) -> Adjacency:
    """Build the adjacency map: task id -> ordered, de-duplicated valid dependencies.

    Args:
        tasks: Task objects or raw task records.
        on_invalid: Optional callback invoked for every dropped reference.

    Returns:
        One entry per distinct task id, in input order.
    """
    task_list = unique_tasks(coerce_tasks(tasks))
    valid_ids = {t.id for t in task_list}
    graph: Adjacency = {}

    for task in task_list:
        deps: list[str] = []
        for dep_id in task.dependencies:
            if dep_id not in valid_ids:
                logger.warning(
                    "Task %r has invalid dependency reference %r (task does not exist)",
                    task.id, dep_id,
                )
                if on_invalid is not None:
                    on_invalid(InvalidReference(task_id=task.id, dependency_id=dep_id))
                continue
            if dep_id not in deps:
                deps.append(dep_id)
        graph[task.id] = deps

    logger.debug("Built graph with %d tasks", len(graph))
    return graph


def build_reverse_graph(graph: Adjacency) -> Adjacency:
    """Map each task id to the ids of the tasks that depend on it."""
    reverse: Adjacency = {task_id: [] for task_id in graph}
    for task_id, deps in graph.items():
        for dep_id in deps:
            reverse[dep_id].append(task_id)
    return reverse


def find_invalid_references(tasks: Iterable[Task | dict]) -> list[InvalidReference]:
    """List every dependency that names a task missing from the input."""
    found: list[InvalidReference] = []
    build_graph(tasks, on_invalid=found.append)
    return found
