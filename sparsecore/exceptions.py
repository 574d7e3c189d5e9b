"""
Exceptions and warnings raised by the sparse regression solvers.
"""


class SparseCoreError(Exception):
    """Base class for errors raised by sparsecore."""


class ParameterValidationError(SparseCoreError, ValueError):
    """A threshold or penalty parameter is outside its admissible range."""


class DimensionMismatchError(SparseCoreError, ValueError):
    """The shapes of the dictionary, target and coefficient matrices disagree."""


class IllConditionedWarning(RuntimeWarning):
    """The coefficient matrix found by a solver is rank deficient."""
