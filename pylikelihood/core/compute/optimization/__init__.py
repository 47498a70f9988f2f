"""
Optimization machinery for pylikelihood.

Two interchangeable minimization strategies share one iterate/test/budget
loop:
    NelderMeadSimplex: derivative-free, converged on simplex size
    VectorBFGS: gradient-based quasi-Newton, converged on gradient norm

Usage:
    stepper = VectorBFGS(objective, x0, step_size=0.001, line_tol=1e-4)
    run = iterate(stepper, lambda s: gradient_converged(s.gradient, 1e-4),
                  max_iter=500)
"""

from pylikelihood.core.compute.optimization.convergence import (
    size_converged,
    gradient_converged,
)
from pylikelihood.core.compute.optimization.loop import (
    OptimizationResult,
    iterate,
    STATUS_CONVERGED,
    STATUS_MAX_ITERATIONS,
    STATUS_STEP_FAILED,
)
from pylikelihood.core.compute.optimization.simplex import NelderMeadSimplex
from pylikelihood.core.compute.optimization.bfgs import VectorBFGS

__all__ = [
    "size_converged",
    "gradient_converged",
    "OptimizationResult",
    "iterate",
    "STATUS_CONVERGED",
    "STATUS_MAX_ITERATIONS",
    "STATUS_STEP_FAILED",
    "NelderMeadSimplex",
    "VectorBFGS",
]
