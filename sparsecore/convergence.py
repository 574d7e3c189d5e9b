"""
Convergence monitoring shared by the iterative solvers.
"""

from dataclasses import dataclass

from .progress import NullProgress


@dataclass
class ConvergenceState:
    """Outcome of a single solve."""
    threshold: float
    iterations: int = 0
    converged: bool = False
    convergence: float = float("nan")


class ConvergenceMonitor:
    """
    Track the convergence measure of an iterative solver.

    The loop runs while ``running`` is true, i.e. until either the iteration
    cap is reached or a measure below ``abstol`` was reported. Reaching the cap
    is not an error.

    Parameters:
    -----------
    threshold : float
        Sparsity threshold of the current solve, reported with every record
    maxiter : int
        Iteration cap
    abstol : float
        Absolute tolerance on the convergence measure
    progress : ProgressSink, optional
        Sink receiving the progress records
    """

    def __init__(self, threshold, maxiter, abstol, progress=None):
        self.threshold = threshold
        self.maxiter = maxiter
        self.abstol = abstol
        self.progress = progress if progress is not None else NullProgress()
        self.iterations = 0
        self.converged = False
        self.convergence = float("nan")

    @property
    def running(self):
        return self.iterations < self.maxiter and not self.converged

    def start(self):
        self.progress.start(self.maxiter)

    def update(self, measure, metrics=None):
        """
        Record the convergence measure of one iteration.

        Parameters:
        -----------
        measure : float
            Convergence measure of the iteration
        metrics : callable, optional
            Returns (sparsity, objective). Only evaluated if the progress sink
            is active.

        Returns:
        --------
        bool : True if the measure is below the absolute tolerance
        """
        self.iterations += 1
        self.convergence = float(measure)

        if self.progress.active:
            record = self._record(metrics)
            record["convergence"] = self.convergence
            self.progress.step(record)

        if self.convergence < self.abstol:
            self.converged = True
        return self.converged

    def finish(self, metrics=None):
        record = self._record(metrics) if self.progress.active else None
        self.progress.finish(self.maxiter, record)
        return self.state()

    def state(self):
        return ConvergenceState(
            threshold=self.threshold,
            iterations=self.iterations,
            converged=self.converged,
            convergence=self.convergence
        )

    def _record(self, metrics):
        record = {"threshold": self.threshold}
        if metrics is not None:
            sparsity, objective = metrics()
            record["sparsity"] = sparsity
            record["objective"] = objective
        return record
