# Sparse regression core for data driven equation discovery.
# This package contains the iterative sparse optimizers (ADM, ADMM), their
# thresholding operators, convergence monitoring and candidate selection.

__version__ = "0.1.0"

from .exceptions import (
    SparseCoreError,
    ParameterValidationError,
    DimensionMismatchError,
    IllConditionedWarning
)

from .thresholds import (
    ThresholdOperator,
    SoftThreshold,
    HardThreshold,
    ClippedAbsoluteDeviation,
    clip_by_threshold
)

from .linalg import (
    nullspace,
    numerical_rank,
    linear_independent_columns
)

from .objectives import (
    count_active,
    sparsity_residual,
    euclidean_score,
    compose
)

from .progress import (
    ProgressSink,
    NullProgress,
    PrintProgress,
    RecordingProgress
)

from .convergence import (
    ConvergenceMonitor,
    ConvergenceState
)

from .selection import (
    evaluate_pareto,
    select_candidates
)

from .solvers import (
    Optimizer,
    SubspaceOptimizer,
    ADM,
    ADMM,
    check_dimensions
)

from .sweep import (
    SweepResult,
    threshold_sweep
)
