"""Output formatters for validation reports."""

from __future__ import annotations

import json
from pathlib import Path

from .models import Task, ValidationReport


def to_json(report: ValidationReport, indent: int = 2) -> str:
    """Convert a ValidationReport to formatted JSON string."""
    return json.dumps(report.to_dict(), indent=indent)


def _format_hours(hours: float) -> str:
    return f"{hours:g}h"


def to_markdown(
    report: ValidationReport,
    tasks: list[Task] | None = None,
    project_title: str = "",
) -> str:
    """Convert a ValidationReport to a human-readable Markdown document.

    When ``tasks`` is given, titles and estimates are shown next to ids.
    """
    by_id = {t.id: t for t in reversed(tasks or [])}

    def label(task_id: str) -> str:
        task = by_id.get(task_id)
        if task is None:
            return task_id
        title = f": {task.title}" if task.title else ""
        return f"{task_id}{title} `[{_format_hours(task.estimated_hours)}]`"

    lines: list[str] = []
    heading = f"# Dependency Report: {project_title}" if project_title else "# Dependency Report"
    lines.append(heading)
    lines.append("")
    status = "valid" if report.is_valid else "INVALID"
    lines.append(f"**Status:** {status} ({report.total_tasks} tasks)")
    lines.append("")

    cycles = report.circular_dependencies
    lines.append("## Circular Dependencies")
    lines.append("")
    if cycles.has_cycle:
        lines.append(f"Cycle: {' -> '.join(cycles.cycle)}")
        lines.append("")
    lines.append(cycles.suggestion)
    lines.append("")

    if report.invalid_references:
        lines.append("## Invalid References")
        lines.append("")
        for ref in report.invalid_references:
            lines.append(f"- {ref.task_id} depends on unknown task `{ref.dependency_id}`")
        lines.append("")

    cp = report.critical_path
    lines.append(f"## Critical Path ({_format_hours(cp.total_hours)})")
    lines.append("")
    if cp.path:
        for i, task_id in enumerate(cp.path, 1):
            lines.append(f"{i}. {label(task_id)}")
    else:
        lines.append("(empty)")
    lines.append("")

    for i, level in enumerate(report.parallel_tasks):
        lines.append(f"## Level {i + 1} (parallel)")
        lines.append("")
        for task_id in level:
            lines.append(f"- {label(task_id)}")
        lines.append("")

    return "\n".join(lines)


def save_report(
    report: ValidationReport,
    output_dir: str = "output/plancheck",
    tasks: list[Task] | None = None,
    project_title: str = "",
) -> tuple[str, str]:
    """Save a report as both JSON and Markdown files."""
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)

    json_path = path / "validation_report.json"
    md_path = path / "validation_report.md"

    json_path.write_text(to_json(report))
    md_path.write_text(to_markdown(report, tasks=tasks, project_title=project_title))

    return str(json_path), str(md_path)
