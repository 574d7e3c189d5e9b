"""
Tests for the convergence and progress modules.

This file contains tests for sparsecore.convergence and sparsecore.progress.
"""

import io
import unittest
from contextlib import redirect_stdout

from sparsecore.convergence import ConvergenceMonitor
from sparsecore.progress import (
    ProgressSink,
    NullProgress,
    PrintProgress,
    RecordingProgress,
    resolve_progress
)


class CallLog(ProgressSink):
    """Sink recording the order of the protocol calls."""

    active = True

    def __init__(self):
        super().__init__()
        self.calls = []

    def start(self, total):
        super().start(total)
        self.calls.append(("start", total))

    def step(self, record):
        super().step(record)
        self.calls.append(("step", self.counter))

    def finish(self, total, record=None):
        super().finish(total, record)
        self.calls.append(("finish", total))


class TestConvergenceMonitor(unittest.TestCase):
    """Test class for the convergence monitor."""

    def test_stops_below_tolerance(self):
        """The loop ends once a measure is below abstol."""
        monitor = ConvergenceMonitor(0.1, maxiter=10, abstol=1e-3)
        monitor.start()
        for measure in (1.0, 0.1, 1e-4):
            self.assertTrue(monitor.running)
            monitor.update(measure)
        self.assertFalse(monitor.running)
        state = monitor.finish()
        self.assertTrue(state.converged)
        self.assertEqual(state.iterations, 3)
        self.assertAlmostEqual(state.convergence, 1e-4)
        self.assertEqual(state.threshold, 0.1)

    def test_iteration_cap_is_not_an_error(self):
        """Exhausting maxiter ends the loop without convergence."""
        monitor = ConvergenceMonitor(0.1, maxiter=2, abstol=0.0)
        monitor.start()
        while monitor.running:
            monitor.update(1.0)
        state = monitor.finish()
        self.assertFalse(state.converged)
        self.assertEqual(state.iterations, 2)

    def test_metrics_skipped_without_sink(self):
        """Metrics are only computed for active sinks."""
        def metrics():
            raise AssertionError("metrics evaluated for an inactive sink")

        monitor = ConvergenceMonitor(0.1, maxiter=3, abstol=1e-3, progress=NullProgress())
        monitor.start()
        monitor.update(1.0, metrics)
        monitor.finish(metrics)

    def test_metrics_skipped_for_base_sink(self):
        """The base sink has no hooks and does not trigger metrics."""
        def metrics():
            raise AssertionError("metrics evaluated for the base sink")

        sink = ProgressSink()
        self.assertFalse(sink.active)
        monitor = ConvergenceMonitor(0.1, maxiter=3, abstol=1e-3, progress=sink)
        monitor.start()
        while monitor.running:
            monitor.update(1.0, metrics)
        monitor.finish(metrics)
        self.assertEqual(sink.counter, 3)

    def test_records(self):
        """Active sinks receive threshold, objective, sparsity and convergence."""
        sink = RecordingProgress()
        monitor = ConvergenceMonitor(0.5, maxiter=5, abstol=1e-3, progress=sink)
        monitor.start()
        monitor.update(0.2, lambda: (3, 1.5))
        monitor.update(1e-4, lambda: (2, 1.0))
        monitor.finish(lambda: (2, 0.9))

        self.assertEqual(len(sink.records), 2)
        self.assertEqual(sink.records[0], {
            "threshold": 0.5, "sparsity": 3, "objective": 1.5, "convergence": 0.2
        })
        self.assertEqual(sink.final, {"threshold": 0.5, "sparsity": 2, "objective": 0.9})
        self.assertEqual(sink.counter, 5)

    def test_call_order(self):
        """start, step and finish are called in sequence."""
        sink = CallLog()
        monitor = ConvergenceMonitor(0.5, maxiter=4, abstol=0.0, progress=sink)
        monitor.start()
        while monitor.running:
            monitor.update(1.0)
        monitor.finish()
        self.assertEqual(sink.calls, [
            ("start", 4), ("step", 1), ("step", 2), ("step", 3), ("step", 4), ("finish", 4)
        ])


class TestProgress(unittest.TestCase):
    """Test class for the progress sinks."""

    def test_resolve_progress(self):
        """Explicit sinks win over the verbose flag."""
        sink = RecordingProgress()
        self.assertIs(resolve_progress(sink, verbose=True), sink)
        self.assertIsInstance(resolve_progress(None, verbose=True), PrintProgress)
        self.assertIsInstance(resolve_progress(), NullProgress)
        self.assertFalse(resolve_progress().active)

    def test_print_progress(self):
        """PrintProgress prints the first step and the final record."""
        sink = PrintProgress(every=5, name="ADMM")
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            sink.start(10)
            sink.step({"threshold": 0.1, "objective": 2.0, "sparsity": 3, "convergence": 0.5})
            sink.step({"threshold": 0.1, "objective": 1.0, "sparsity": 2, "convergence": 0.1})
            sink.finish(10, {"threshold": 0.1, "objective": 1.0, "sparsity": 2})
        output = buffer.getvalue()
        self.assertIn("Starting ADMM", output)
        self.assertIn("Iter     1", output)
        self.assertNotIn("Iter     2", output)
        self.assertIn("Final: Threshold = 0.1", output)
        self.assertIn("ADMM finished.", output)


if __name__ == '__main__':
    unittest.main()
