"""
Shared iterate / test / budget loop.

Both minimization strategies run through iterate(): the strategy supplies
a stepper (how to take one step) and a convergence test (when to stop).
The loop owns the iteration budget, the verbose trace and the handling
of step failures.
"""

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.exceptions import StepFailure
from pylikelihood.core.protocols import Stepper


STATUS_CONVERGED = 'converged'
STATUS_MAX_ITERATIONS = 'max_iterations'
STATUS_STEP_FAILED = 'step_failed'


@dataclass(frozen=True)
class OptimizationResult:
    """
    Outcome of one minimization run.

    Attributes:
        x: Best point found (a fresh copy, owned by the caller)
        fval: Objective value at x as tracked by the stepper
        n_iter: Iterations attempted
        status: 'converged', 'max_iterations' or 'step_failed'
        metric: Last convergence metric (size or gradient norm)
        message: Human-readable description of the status
        failure_reason: StepFailure reason code when a step failure ended
            the run (also set when that run counts as converged), else None
    """
    x: NDArray[np.floating[Any]]
    fval: float
    n_iter: int
    status: str
    metric: float
    message: str
    failure_reason: str | None = None

    @property
    def converged(self) -> bool:
        return self.status == STATUS_CONVERGED


def iterate(
    stepper: Stepper,
    converged: Callable[[Stepper], bool],
    *,
    max_iter: int,
    verbose: bool = False,
) -> OptimizationResult:
    """
    Run a stepper until convergence, step failure or budget exhaustion.

    A StepFailure ends the run immediately; the stepper still holds the
    last valid point, which is returned. Running out of iterations is not
    an error either: the best point found is returned with status
    'max_iterations' and the caller decides how loudly to report it.

    A step failure counts as convergence when the stepper sits at an exact
    minimum (the test passes at a finite value) or at an unbounded one
    (fval is -inf).

    Args:
        stepper: Strategy state, advanced by stepper.iterate()
        converged: Convergence test evaluated after every successful step
        max_iter: Iteration budget (>= 1)
        verbose: Print one line per iteration

    Returns:
        OptimizationResult
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")

    metric_name = getattr(stepper, 'metric_name', 'metric')
    metric = stepper.metric()
    status = STATUS_MAX_ITERATIONS
    message = f"Minimization reached maximum number of iterations ({max_iter})."
    n_iter = 0
    failure_reason = None

    while n_iter < max_iter:
        n_iter += 1
        try:
            stepper.iterate()
        except StepFailure as e:
            failure_reason = e.reason
            # A stepper cannot move off an exact minimum either
            if stepper.fval == -np.inf:
                status = STATUS_CONVERGED
                message = f"Converged after {n_iter - 1} iterations (objective unbounded below)."
            elif np.isfinite(stepper.fval) and converged(stepper):
                status = STATUS_CONVERGED
                message = f"Converged after {n_iter - 1} iterations ({metric_name}={metric:.3e})."
            else:
                status = STATUS_STEP_FAILED
                message = f"Minimizer step failed at iteration {n_iter}: {e}"
                if e.reason:
                    message += f" [{e.reason}]"
            if verbose:
                print(message)
            break

        metric = stepper.metric()
        done = converged(stepper)

        if verbose:
            _print_iteration(n_iter, stepper.x, stepper.fval, metric_name, metric)
            if done:
                print("Minimum found at:")
                _print_iteration(n_iter, stepper.x, stepper.fval, metric_name, metric)

        if done:
            status = STATUS_CONVERGED
            message = f"Converged after {n_iter} iterations ({metric_name}={metric:.3e})."
            break

    if verbose and status == STATUS_MAX_ITERATIONS:
        print(message)

    return OptimizationResult(
        x=np.array(stepper.x, dtype=np.float64, copy=True),
        fval=float(stepper.fval),
        n_iter=n_iter,
        status=status,
        metric=float(metric),
        message=message,
        failure_reason=failure_reason,
    )


def _print_iteration(
    n_iter: int,
    x: NDArray[np.floating[Any]],
    fval: float,
    metric_name: str,
    metric: float,
) -> None:
    params = " ".join(f"{v:10.3e}" for v in x)
    print(f"{n_iter:5d} {params} f()={fval:10.5f} {metric_name}={metric:.3e}")
