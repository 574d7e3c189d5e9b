"""
Progress sinks for the iterative solvers.

A solver calls ``start(total)`` once, ``step(record)`` once per iteration and
``finish(total, record)`` once at the end, always in this order. Records are
dictionaries with the keys ``threshold``, ``objective``, ``sparsity`` and
(during the iterations) ``convergence``.
"""


class ProgressSink:
    """
    Base progress sink. Does nothing and is inactive; subclasses override the
    hooks they need and set ``active``.

    ``active`` tells the solver whether per-iteration metrics should be
    computed at all.
    """

    active = False

    def __init__(self):
        self.counter = 0
        self.total = 0

    def start(self, total):
        self.counter = 0
        self.total = total

    def step(self, record):
        self.counter += 1

    def finish(self, total, record=None):
        self.counter = total


class NullProgress(ProgressSink):
    """Inactive sink used when no progress reporting is requested."""

    active = False


class PrintProgress(ProgressSink):
    """
    Print progress records to stdout.

    Parameters:
    -----------
    every : int, optional
        Print every ``every``-th step. The final record is always printed.
    name : str, optional
        Prefix used in the printed lines
    """

    active = True

    def __init__(self, every=10, name="Solver"):
        super().__init__()
        self.every = max(int(every), 1)
        self.name = name

    def start(self, total):
        super().start(total)
        print(f"\n--- Starting {self.name} (max. {total} iterations) ---")

    def step(self, record):
        super().step(record)
        if self.counter == 1 or self.counter % self.every == 0:
            print(f"Iter {self.counter:5d}: " + _format_record(record))

    def finish(self, total, record=None):
        super().finish(total, record)
        if record is not None:
            print("Final: " + _format_record(record))
        print(f"{self.name} finished.")


class RecordingProgress(ProgressSink):
    """Keep every record in ``records``; the last final record in ``final``."""

    active = True

    def __init__(self):
        super().__init__()
        self.records = []
        self.final = None

    def start(self, total):
        super().start(total)
        self.records = []
        self.final = None

    def step(self, record):
        super().step(record)
        self.records.append(dict(record))

    def finish(self, total, record=None):
        super().finish(total, record)
        self.final = dict(record) if record is not None else None


def _format_record(record):
    parts = []
    for key in ("threshold", "objective", "sparsity", "convergence"):
        if key in record:
            parts.append(f"{key.capitalize()} = {record[key]:.4g}")
    return ", ".join(parts)


def resolve_progress(progress=None, verbose=False, name="Solver"):
    """
    Pick the progress sink for a solve call.

    An explicit sink wins, ``verbose=True`` selects a PrintProgress and
    anything else results in a NullProgress.
    """
    if progress is not None:
        return progress
    if verbose:
        return PrintProgress(name=name)
    return NullProgress()
