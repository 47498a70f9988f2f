"""
Optimizer settings for maximum likelihood estimation.

Defines the default tolerances, iteration budgets and step scales of the
two minimization strategies:
- SIMPLEX: derivative-free Nelder-Mead, converged on simplex size
- BFGS: gradient-based quasi-Newton, converged on gradient norm

Entry points accept keyword overrides; None means "use these defaults".
"""

from dataclasses import dataclass, replace


# Iteration budgets of the two strategies
MAX_ITERATIONS = 500
MAX_ITERATIONS_W_D = 500


@dataclass(frozen=True)
class OptimizerSettings:
    """Settings for one minimization strategy."""
    tol: float
    max_iter: int
    step_size: float
    name: str
    description: str
    line_tol: float | None = None

    def with_overrides(
        self,
        *,
        tol: float | None = None,
        max_iter: int | None = None,
        step_size: float | None = None,
    ) -> 'OptimizerSettings':
        """Copy with any non-None override applied."""
        changes = {}
        if tol is not None:
            changes['tol'] = tol
        if max_iter is not None:
            changes['max_iter'] = max_iter
        if step_size is not None:
            changes['step_size'] = step_size
        return replace(self, **changes)


# Nelder-Mead: stop when mean vertex distance from the centroid < tol.
# step_size is the initial simplex edge along each coordinate.
SIMPLEX = OptimizerSettings(
    tol=1e-3,
    max_iter=MAX_ITERATIONS,
    step_size=1.0,
    name='simplex',
    description='Nelder-Mead simplex, size test',
)

# Vector BFGS: stop when ||gradient|| < tol.
# step_size is the first trial step of the line minimization,
# line_tol the orthogonality tolerance that ends it.
BFGS = OptimizerSettings(
    tol=1e-4,
    max_iter=MAX_ITERATIONS_W_D,
    step_size=0.001,
    name='bfgs',
    description='vector BFGS, gradient test',
    line_tol=1e-4,
)


def select_settings(method: str) -> OptimizerSettings:
    """Default settings for a minimization method."""
    if method == 'simplex':
        return SIMPLEX
    if method == 'bfgs':
        return BFGS
    raise ValueError(f"Unknown method: {method!r}. Use 'bfgs' or 'simplex'.")
