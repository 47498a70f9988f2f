"""
Derivative-free Nelder-Mead simplex stepper.

The simplex has n + 1 vertices. Each step replaces the worst vertex by
its reflection through the centroid of the others, an expansion of that
reflection, or a one-dimensional contraction; when none of these helps,
the whole simplex shrinks halfway toward its best vertex.

+inf and NaN objective values (what an infeasible parameter produces) are
treated as "worse than anything", so the simplex moves away from
infeasible regions without special handling. -inf is an unbounded
minimum: it ranks best, and the simplex stops once it is the current
point.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.exceptions import StepFailure
from pylikelihood.core.protocols import Objective


class NelderMeadSimplex:
    """
    Nelder-Mead simplex state for one minimization.

    Parameters
    ----------
    objective : Objective
        Bound objective providing value(x)
    x0 : ndarray, shape (n,)
        Starting point; becomes vertex 0. The current point is the best
        vertex of the initial simplex, which need not be x0
    step_size : float
        Initial edge length along every coordinate axis
    """

    metric_name = 'size'

    def __init__(
        self,
        objective: Objective,
        x0: NDArray[np.floating[Any]],
        step_size: float,
    ):
        x0 = np.array(x0, dtype=np.float64, copy=True)
        n = x0.shape[0]

        self._objective = objective
        self._vertices = np.tile(x0, (n + 1, 1))
        self._vertices[1:] += step_size * np.eye(n)
        self._values = np.array(
            [objective.value(v) for v in self._vertices], dtype=np.float64
        )

        self._update_best()

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def fval(self) -> float:
        return self._fval

    @property
    def vertices(self) -> NDArray[np.floating[Any]]:
        """Current simplex, one vertex per row (read-only view)."""
        view = self._vertices.view()
        view.flags.writeable = False
        return view

    def metric(self) -> float:
        return self._size

    def iterate(self) -> None:
        """Advance the simplex one step."""
        if self._fval == -np.inf:
            raise StepFailure(
                "objective is unbounded below at the current point",
                reason='unbounded',
            )
        if not _usable(self._fval):
            raise StepFailure(
                f"objective is not finite at the current point ({self._fval})",
                reason='non_finite',
            )

        values = self._values
        order = np.argsort(values, kind='stable')
        lo, s_hi, hi = order[0], order[-2], order[-1]

        # reflect the worst vertex
        xc, val = self._move_corner(-1.0, hi)

        if _usable(val) and val < values[lo]:
            # reflection is the new best point, try expanding further
            xc2, val2 = self._move_corner(-2.0, hi)
            if _usable(val2) and val2 < values[lo]:
                self._replace(hi, xc2, val2)
            else:
                self._replace(hi, xc, val)

        elif not _usable(val) or val > values[s_hi]:
            # reflection does not improve things enough
            if _usable(val) and val <= values[hi]:
                self._replace(hi, xc, val)

            xc2, val2 = self._move_corner(0.5, hi)
            if _usable(val2) and val2 <= values[hi]:
                self._replace(hi, xc2, val2)
            else:
                self._shrink_toward(lo)

        else:
            # better than the second worst: accept the reflection
            self._replace(hi, xc, val)

        self._update_best()

    # ------------------------------------------------------------------
    # Simplex moves
    # ------------------------------------------------------------------

    def _move_corner(
        self, coeff: float, corner: int
    ) -> tuple[NDArray[np.floating[Any]], float]:
        """
        Move one vertex along the line through the centroid of the others.

        coeff = -1 reflects, -2 expands, 0.5 contracts halfway.
        """
        others = np.delete(self._vertices, corner, axis=0)
        centroid = others.mean(axis=0)
        xc = centroid - coeff * (centroid - self._vertices[corner])
        return xc, float(self._objective.value(xc))

    def _update_best(self) -> None:
        # NaN ranks with +inf
        best = int(np.argmin(np.where(np.isnan(self._values), np.inf, self._values)))
        self._x = self._vertices[best].copy()
        self._fval = float(self._values[best])
        self._size = self._compute_size()

    def _replace(self, i: int, x: NDArray[np.floating[Any]], value: float) -> None:
        self._vertices[i] = x
        self._values[i] = value

    def _shrink_toward(self, best: int) -> None:
        """
        Contract every vertex halfway toward the best one.

        The shrink is always completed; an unusable value at any new
        vertex is reported afterwards as a step failure, leaving x/fval
        at the previous best point.
        """
        bad = 0
        for i in range(self._vertices.shape[0]):
            if i == best:
                continue
            self._vertices[i] = 0.5 * (self._vertices[i] + self._vertices[best])
            self._values[i] = self._objective.value(self._vertices[i])
            if not _usable(self._values[i]):
                bad += 1

        if bad:
            raise StepFailure(
                f"simplex contraction produced {bad} infeasible values",
                reason='contraction_failed',
            )

    def _compute_size(self) -> float:
        """Mean Euclidean distance of the vertices from their centroid."""
        centroid = self._vertices.mean(axis=0)
        return float(np.mean(np.linalg.norm(self._vertices - centroid, axis=1)))


def _usable(value: float) -> bool:
    """False for +inf and NaN; -inf ranks below every finite value."""
    return value < np.inf
