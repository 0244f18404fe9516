"""Tests for DependencyAnalyzer and the combined validation report."""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from PlanCheck.analyzer import DependencyAnalyzer, TaskValidationError
from PlanCheck.analyzer.models import InvalidReference, ValidationReport


class TestDependencyAnalyzer(unittest.TestCase):
    def setUp(self):
        self.analyzer = DependencyAnalyzer()

    def test_validate_acyclic(self):
        tasks = [
            {"id": "t1", "estimatedHours": 2, "dependencies": []},
            {"id": "t2", "estimatedHours": 3, "dependencies": ["t1"]},
            {"id": "t3", "estimatedHours": 5, "dependencies": ["t1"]},
        ]
        report = self.analyzer.validate(tasks)
        self.assertIsInstance(report, ValidationReport)
        self.assertTrue(report.is_valid)
        self.assertFalse(report.circular_dependencies.has_cycle)
        self.assertEqual(report.critical_path.path, ["t1", "t3"])
        self.assertEqual(report.critical_path.total_hours, 7)
        self.assertEqual(report.parallel_tasks[0], ["t1"])
        self.assertEqual(set(report.parallel_tasks[1]), {"t2", "t3"})
        self.assertEqual(report.total_tasks, 3)
        self.assertEqual(report.invalid_references, [])

    def test_validate_cycle(self):
        tasks = [
            {"id": "A", "dependencies": ["B"]},
            {"id": "B", "dependencies": ["C"]},
            {"id": "C", "dependencies": ["A"]},
        ]
        report = self.analyzer.validate(tasks)
        self.assertFalse(report.is_valid)
        cycle = report.circular_dependencies.cycle
        self.assertEqual(cycle[0], cycle[-1])
        self.assertEqual(sorted(cycle[:-1]), ["A", "B", "C"])
        # Degenerate but well-formed outputs
        self.assertEqual(report.critical_path.path, [])
        self.assertEqual(report.parallel_tasks, [["A", "B", "C"]])

    def test_validate_empty(self):
        report = self.analyzer.validate([])
        self.assertTrue(report.is_valid)
        self.assertFalse(report.circular_dependencies.has_cycle)
        self.assertEqual(report.critical_path.path, [])
        self.assertEqual(report.critical_path.total_hours, 0)
        self.assertEqual(report.parallel_tasks, [])
        self.assertEqual(report.total_tasks, 0)

    def test_validate_reports_invalid_references(self):
        report = self.analyzer.validate([
            {"id": "a", "dependencies": ["nope"]},
        ])
        self.assertTrue(report.is_valid)
        self.assertEqual(report.invalid_references, [InvalidReference("a", "nope")])

    def test_total_tasks_counts_input_records(self):
        report = self.analyzer.validate([{"id": "a"}, {"id": "a"}])
        self.assertEqual(report.total_tasks, 2)
        self.assertEqual(report.parallel_tasks, [["a"]])

    def test_malformed_record_raises(self):
        with self.assertRaises(TaskValidationError):
            self.analyzer.validate([{"id": None}])

    def test_individual_operations(self):
        tasks = [{"id": "a", "estimatedHours": 1}, {"id": "b", "dependencies": ["a"]}]
        self.assertFalse(self.analyzer.detect_cycles(tasks).has_cycle)
        self.assertEqual(self.analyzer.critical_path(tasks).path, ["a"])
        self.assertEqual(self.analyzer.parallel_levels(tasks), [["a"], ["b"]])

    def test_invalid_edge_tolerance_across_operations(self):
        with_ghost = [
            {"id": "a", "estimatedHours": 1, "dependencies": ["ghost"]},
            {"id": "b", "estimatedHours": 2, "dependencies": ["ghost", "a"]},
        ]
        without = [
            {"id": "a", "estimatedHours": 1},
            {"id": "b", "estimatedHours": 2, "dependencies": ["a"]},
        ]
        left, right = self.analyzer.validate(with_ghost), self.analyzer.validate(without)
        self.assertEqual(left.circular_dependencies, right.circular_dependencies)
        self.assertEqual(left.critical_path, right.critical_path)
        self.assertEqual(left.parallel_tasks, right.parallel_tasks)

    def test_invalid_reference_logged_once(self):
        tasks = [
            {"id": "a", "dependencies": ["ghost"]},
            {"id": "b", "dependencies": ["a"]},
        ]
        with self.assertLogs("PlanCheck.analyzer.graph", level="WARNING") as cm:
            report = self.analyzer.validate(tasks)
        ghost_lines = [line for line in cm.output if "'ghost'" in line]
        self.assertEqual(len(ghost_lines), 1)
        self.assertEqual(report.invalid_references, [InvalidReference("a", "ghost")])
        self.assertEqual(report.parallel_tasks, [["a"], ["b"]])

    def test_input_records_not_mutated(self):
        tasks = [{"id": "a", "dependencies": ["a", "ghost"]}]
        self.analyzer.validate(tasks)
        self.assertEqual(tasks, [{"id": "a", "dependencies": ["a", "ghost"]}])


if __name__ == "__main__":
    unittest.main()
