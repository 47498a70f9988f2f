"""
Gradient-based vector BFGS stepper.

Each step searches along a direction p for a lower objective value:

1. A trial step of the current length. If it lowers the objective it is
   accepted outright and the next trial step is doubled.
2. Otherwise an intermediate point is chosen by parabolic interpolation
   (bisection when the trial point was infeasible) and a bracketing
   line minimization refines it until the new gradient is nearly
   orthogonal to p.
3. The direction is reset to the gradient every n steps and otherwise
   updated with the BFGS formula.

Directions point uphill; steps move along -p (or +p, whichever is
downhill at the current point).
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.exceptions import StepFailure
from pylikelihood.core.protocols import DifferentiableObjective


# Sub-iterations allowed in one line minimization
LINE_MINIMIZE_MAX_ITER = 10

# Golden-section fraction used when parabolic interpolation is rejected
GOLDEN_FRACTION = 0.38


class VectorBFGS:
    """
    Vector BFGS state for one minimization.

    Parameters
    ----------
    objective : DifferentiableObjective
        Bound objective providing value, gradient and value_and_gradient
    x0 : ndarray, shape (n,)
        Starting point
    step_size : float
        Length of the first trial step
    line_tol : float
        Line minimization stops when |p.g| / (|p| |g|) < line_tol
    """

    metric_name = 'gradient_norm'

    def __init__(
        self,
        objective: DifferentiableObjective,
        x0: NDArray[np.floating[Any]],
        step_size: float = 0.001,
        line_tol: float = 1e-4,
    ):
        self._objective = objective
        self._x = np.array(x0, dtype=np.float64, copy=True)
        self._n = self._x.shape[0]
        self._step = float(step_size)
        self._line_tol = float(line_tol)
        self._iter = 0

        f, g = objective.value_and_gradient(self._x)
        self._fval = float(f)
        self._gradient = np.asarray(g, dtype=np.float64)

        # Start along the gradient
        self._x0 = self._x.copy()
        self._g0 = self._gradient.copy()
        self._p = self._gradient.copy()
        self._pnorm = self._g0norm = self._norm(self._gradient)

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def fval(self) -> float:
        return self._fval

    @property
    def gradient(self) -> NDArray[np.floating[Any]]:
        return self._gradient

    def metric(self) -> float:
        return self._norm(self._gradient)

    def iterate(self) -> None:
        """Advance one quasi-Newton step."""
        if not np.isfinite(self._fval) or not np.all(np.isfinite(self._gradient)):
            raise StepFailure(
                f"objective is not finite at the current point (f={self._fval})",
                reason='non_finite',
            )
        if self._pnorm == 0.0 or self._g0norm == 0.0:
            raise StepFailure("search direction vanished", reason='no_progress')

        x, p = self._x, self._p
        fa = self._fval
        stepa = 0.0
        stepc = self._step

        # Which way is downhill, +p or -p
        pg = float(p @ self._gradient)
        lam = (1.0 if pg >= 0.0 else -1.0) / self._pnorm

        x1 = self._take_step(x, p, stepc, lam)
        fc = float(self._objective.value(x1))

        if fc < fa:
            self._step = stepc * 2.0
            self._fval = fc
            self._x = x1
            self._gradient = np.asarray(self._objective.gradient(x1), dtype=np.float64)
            return

        stepb, fb, xb, gb = self._intermediate_point(x, p, lam, pg, stepc, fa, fc)
        if stepb == 0.0:
            raise StepFailure("line search made no progress", reason='no_progress')

        x2, f2, g2, g2norm, step = self._line_minimize(
            x, p, lam, stepa, stepb, stepc, fa, fb, fc, xb, gb,
        )
        self._x, self._fval, self._gradient, self._step = x2, f2, g2, step

        # Choose the next direction
        self._iter = (self._iter + 1) % self._n
        if self._iter == 0:
            self._p = g2.copy()
            self._pnorm = g2norm
        else:
            dx0 = x2 - self._x0
            dg0 = g2 - self._g0
            dxg = float(dx0 @ g2)
            dgg = float(dg0 @ g2)
            dxdg = float(dx0 @ dg0)
            dgnorm = self._norm(dg0)

            if dxdg != 0.0:
                B = dxg / dxdg
                A = -(1.0 + dgnorm * dgnorm / dxdg) * B + dgg / dxdg
            else:
                A = 0.0
                B = 0.0

            self._p = g2 - A * dx0 - B * dg0
            self._pnorm = self._norm(self._p)

        self._g0 = g2.copy()
        self._x0 = x2.copy()
        self._g0norm = self._norm(self._g0)

    # ------------------------------------------------------------------
    # Line search
    # ------------------------------------------------------------------

    @staticmethod
    def _take_step(
        x: NDArray[np.floating[Any]],
        p: NDArray[np.floating[Any]],
        step: float,
        lam: float,
    ) -> NDArray[np.floating[Any]]:
        return x - (step * lam) * p

    @staticmethod
    def _norm(v: NDArray[np.floating[Any]]) -> float:
        return float(np.linalg.norm(v))

    def _intermediate_point(
        self,
        x: NDArray[np.floating[Any]],
        p: NDArray[np.floating[Any]],
        lam: float,
        pg: float,
        stepc: float,
        fa: float,
        fc: float,
    ) -> tuple[float, float, NDArray[np.floating[Any]], NDArray[np.floating[Any]] | None]:
        """
        Find a step in (0, stepc) with a lower value than at x.

        Returns (0, fa, x, None) when the trial point no longer moves.
        """
        while True:
            if np.isfinite(fc):
                u = abs(pg * lam * stepc)
                denom = (fc - fa) + u
                stepb = 0.5 * stepc * u / denom if denom > 0.0 else 0.0
            else:
                stepb = 0.5 * stepc

            xb = self._take_step(x, p, stepb, lam)
            if np.array_equal(x, xb):
                return 0.0, fa, x, None

            fb = float(self._objective.value(xb))
            if not fb < fa and stepb > 0.0:
                # downhill step failed, shrink and try again
                fc = fb
                stepc = stepb
                continue

            gb = np.asarray(self._objective.gradient(xb), dtype=np.float64)
            return stepb, fb, xb, gb

    def _line_minimize(
        self,
        x: NDArray[np.floating[Any]],
        p: NDArray[np.floating[Any]],
        lam: float,
        stepa: float,
        stepb: float,
        stepc: float,
        fa: float,
        fb: float,
        fc: float,
        xb: NDArray[np.floating[Any]],
        gb: NDArray[np.floating[Any]],
    ) -> tuple[NDArray[np.floating[Any]], float, NDArray[np.floating[Any]], float, float]:
        """
        Refine the bracket (stepa, stepb, stepc) with fa > fb < fc.

        Returns (x, f, gradient, gradient norm, step) at the best point.
        """
        u, v, w = stepb, stepa, stepc
        fu, fv, fw = fb, fa, fc
        old2 = abs(w - v)
        old1 = abs(v - u)

        x_best, f_best, g_best, step_best = xb, fb, gb, stepb
        gnorm = self._norm(gb)

        for _ in range(LINE_MINIMIZE_MAX_ITER):
            dw = w - u
            dv = v - u
            du = 0.0

            e1 = (fv - fu) * dw * dw + (fu - fw) * dv * dv
            e2 = 2.0 * ((fv - fu) * dw + (fu - fw) * dv)
            if e2 != 0.0:
                du = e1 / e2

            if 0.0 < du < (stepc - stepb) and abs(du) < 0.5 * old2:
                stepm = u + du
            elif (stepa - stepb) < du < 0.0 and abs(du) < 0.5 * old2:
                stepm = u + du
            elif (stepc - stepb) > (stepb - stepa):
                stepm = GOLDEN_FRACTION * (stepc - stepb) + stepb
            else:
                stepm = stepb - GOLDEN_FRACTION * (stepb - stepa)

            xm = self._take_step(x, p, stepm, lam)
            fm = float(self._objective.value(xm))

            if fm > fb:
                if fm < fv:
                    w, v = v, stepm
                    fw, fv = fv, fm
                elif fm < fw:
                    w = stepm
                    fw = fm

                if stepm < stepb:
                    stepa = stepm
                else:
                    stepc = stepm

            elif fm <= fb:
                old2 = old1
                old1 = abs(u - stepm)
                w, v, u = v, u, stepm
                fw, fv, fu = fv, fu, fm

                gm = np.asarray(self._objective.gradient(xm), dtype=np.float64)
                gnorm = self._norm(gm)
                x_best, f_best, g_best, step_best = xm, fm, gm, stepm

                if gnorm == 0.0 or abs(float(p @ gm) * lam / gnorm) < self._line_tol:
                    break

                if stepm < stepb:
                    stepc = stepb
                else:
                    stepa = stepb
                stepb, fb = stepm, fm

            else:
                # NaN objective: keep the best point found so far
                break

        return x_best, f_best, g_best, gnorm, step_best
