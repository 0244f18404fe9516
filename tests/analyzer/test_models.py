"""Tests for analyzer data models and the ingestion policy."""

import json
import math
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from PlanCheck.analyzer.models import (
    CriticalPath,
    CycleReport,
    InvalidReference,
    Task,
    TaskValidationError,
    ValidationReport,
    coerce_tasks,
)


class TestTaskFromDict(unittest.TestCase):
    def test_minimal(self):
        task = Task.from_dict({"id": "t1"})
        self.assertEqual(task.id, "t1")
        self.assertEqual(task.dependencies, [])
        self.assertEqual(task.estimated_hours, 0.0)
        self.assertEqual(task.priority, 1)
        self.assertEqual(task.ambiguity_flags, [])

    def test_wire_keys(self):
        task = Task.from_dict({
            "id": "t2",
            "title": "Auth endpoints",
            "estimatedHours": 6,
            "dependencies": ["t1"],
            "category": "backend",
            "priority": 3,
            "ambiguityFlags": ["scope unclear"],
        })
        self.assertEqual(task.estimated_hours, 6.0)
        self.assertEqual(task.dependencies, ["t1"])
        self.assertEqual(task.category, "backend")
        self.assertEqual(task.priority, 3)
        self.assertEqual(task.ambiguity_flags, ["scope unclear"])

    def test_null_dependencies(self):
        task = Task.from_dict({"id": "t1", "dependencies": None})
        self.assertEqual(task.dependencies, [])

    def test_invalid_hours_default_to_zero(self):
        for value in (None, "5", True, -2, float("nan"), float("inf"), [3]):
            with self.subTest(value=value):
                task = Task.from_dict({"id": "t1", "estimatedHours": value})
                self.assertEqual(task.estimated_hours, 0.0)
                self.assertFalse(math.isnan(task.estimated_hours))

    def test_huge_integer_hours_default_to_zero(self):
        task = Task.from_dict({"id": "t1", "estimatedHours": int("9" * 400)})
        self.assertEqual(task.estimated_hours, 0.0)

    def test_huge_integer_hours_from_json(self):
        records = json.loads('[{"id": "a", "estimatedHours": ' + "9" * 400 + "}]")
        self.assertEqual(coerce_tasks(records)[0].estimated_hours, 0.0)

    def test_fractional_hours_kept(self):
        task = Task.from_dict({"id": "t1", "estimatedHours": 1.5})
        self.assertEqual(task.estimated_hours, 1.5)

    def test_non_string_id_rejected(self):
        with self.assertRaises(TaskValidationError):
            Task.from_dict({"id": 7})
        with self.assertRaises(TaskValidationError):
            Task.from_dict({"title": "no id"})

    def test_bad_dependencies_rejected(self):
        with self.assertRaises(TaskValidationError):
            Task.from_dict({"id": "t1", "dependencies": "t0"})
        with self.assertRaises(TaskValidationError):
            Task.from_dict({"id": "t1", "dependencies": ["t0", 3]})

    def test_non_dict_record_rejected(self):
        with self.assertRaises(TaskValidationError):
            Task.from_dict(["t1"])

    def test_validation_error_is_value_error(self):
        self.assertTrue(issubclass(TaskValidationError, ValueError))

    def test_roundtrip(self):
        task = Task(id="t1", title="Setup", dependencies=["t0"], estimated_hours=2.5)
        restored = Task.from_dict(task.to_dict())
        self.assertEqual(restored, task)

    def test_to_dict_uses_wire_keys(self):
        d = Task(id="t1", estimated_hours=3).to_dict()
        self.assertIn("estimatedHours", d)
        self.assertIn("ambiguityFlags", d)


class TestCoerceTasks(unittest.TestCase):
    def test_mixed_input(self):
        existing = Task(id="a")
        tasks = coerce_tasks([existing, {"id": "b", "dependencies": ["a"]}])
        self.assertIs(tasks[0], existing)
        self.assertEqual(tasks[1].dependencies, ["a"])

    def test_empty(self):
        self.assertEqual(coerce_tasks([]), [])


class TestResultModels(unittest.TestCase):
    def test_cycle_report_dict(self):
        report = CycleReport(has_cycle=True, cycle=["a", "a"], suggestion="fix")
        self.assertEqual(
            report.to_dict(),
            {"hasCycle": True, "cycle": ["a", "a"], "suggestion": "fix"},
        )

    def test_critical_path_dict(self):
        cp = CriticalPath(path=["t1", "t3"], total_hours=7.0)
        self.assertEqual(cp.to_dict(), {"path": ["t1", "t3"], "totalHours": 7.0})

    def test_validation_report_dict(self):
        report = ValidationReport(
            is_valid=True,
            circular_dependencies=CycleReport(suggestion="none"),
            critical_path=CriticalPath(path=["a"], total_hours=1.0),
            parallel_tasks=[["a"]],
            total_tasks=1,
            invalid_references=[InvalidReference("a", "ghost")],
        )
        d = report.to_dict()
        self.assertTrue(d["isValid"])
        self.assertEqual(d["totalTasks"], 1)
        self.assertEqual(d["parallelTasks"], [["a"]])
        self.assertEqual(d["invalidReferences"], [{"taskId": "a", "dependencyId": "ghost"}])


if __name__ == "__main__":
    unittest.main()
