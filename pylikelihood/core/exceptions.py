"""
Exception hierarchy for pylikelihood.

All exceptions inherit from PyLikelihoodError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - An infeasible parameter region is NOT an error: likelihoods
      return +inf there and the minimizer moves away
"""


class PyLikelihoodError(Exception):
    """Base exception for all pylikelihood errors."""
    pass


class ValidationError(PyLikelihoodError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, e.g. a
    starting point whose length differs from the model's parameter count.
    """
    pass


class NumericalError(PyLikelihoodError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class StepFailure(NumericalError):
    """
    A single minimizer step could not proceed.

    Raised by a stepper (simplex or BFGS) when it cannot make progress:
    a non-finite objective at the current point, a degenerate search
    direction, or a shrink that produced infeasible values. The
    optimization loop catches it, stops, and keeps the last valid point.

    Attributes:
        reason: Short machine-readable cause (e.g. 'no_progress')
    """

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.reason = reason


class ConvergenceError(PyLikelihoodError):
    """
    Iterative algorithm failed to converge.

    Only raised when the caller asks for strict convergence; by default
    non-convergence is reported as a warning and the best point found
    is still returned.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final value of the convergence metric
        reason: Why convergence failed (e.g. 'max_iterations', 'step_failed')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
