"""CLI entry point for the dependency analyzer.

Usage:
    python -m PlanCheck.analyzer <tasks.json> [--output-dir DIR] [--json] [--strict]
    python -m PlanCheck.analyzer --help
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from PlanCheck.config import setup_logging
from .models import TaskValidationError, coerce_tasks
from .output import save_report, to_json, to_markdown
from .validator import DependencyAnalyzer

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_STRICT_FAILURE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="plancheck",
        description="Detect dependency cycles, compute the critical path and "
                    "group tasks into parallel levels.",
    )
    parser.add_argument(
        "tasks_file",
        help="JSON file with a list of tasks, or an object with a 'tasks' list",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Also write validation_report.json and validation_report.md here",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the report as JSON instead of Markdown",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit with status 2 on cycles or unknown dependency ids",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Log analysis progress to stderr",
    )
    return parser.parse_args(argv)


def load_task_file(path: str) -> tuple[list[dict], str]:
    """Read a task file. Returns (records, project_title)."""
    data = json.loads(Path(path).read_text())
    if isinstance(data, list):
        return data, ""
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        return data["tasks"], data.get("project_title", "")
    raise TaskValidationError("Tasks is required and must be an array")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        records, title = load_task_file(args.tasks_file)
        tasks = coerce_tasks(records)
    except (OSError, json.JSONDecodeError, TaskValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    report = DependencyAnalyzer().validate(tasks)

    if args.output_dir:
        json_path, md_path = save_report(
            report, output_dir=args.output_dir, tasks=tasks, project_title=title
        )
        print(f"Report saved to: {json_path}", file=sys.stderr)
        print(f"Markdown saved to: {md_path}", file=sys.stderr)

    if args.json:
        print(to_json(report))
    else:
        print(to_markdown(report, tasks=tasks, project_title=title))

    if args.strict and (not report.is_valid or report.invalid_references):
        return EXIT_STRICT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
