"""
Core infrastructure for pylikelihood.

This module provides shared abstractions, utilities, and compute
infrastructure used by the estimation domain (mle).

Key components:
    protocols: Objective, Stepper, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, optimizer settings, special functions, minimizers
"""

from pylikelihood.core.protocols import (
    Objective,
    DifferentiableObjective,
    Stepper,
    Backend,
)
from pylikelihood.core.result import Result
from pylikelihood.core.exceptions import (
    PyLikelihoodError,
    ValidationError,
    DimensionError,
    NumericalError,
    StepFailure,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Objective",
    "DifferentiableObjective",
    "Stepper",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLikelihoodError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "StepFailure",
    "ConvergenceError",
]
