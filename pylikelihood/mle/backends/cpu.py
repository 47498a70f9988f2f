"""
CPU backends for maximum likelihood estimation.

CPUBFGSBackend: vector BFGS on the model's value and analytic gradient.
CPUSimplexBackend: Nelder-Mead simplex on the model's value only.

Both run the shared optimization loop and then evaluate the negative
log-likelihood once more at the returned point.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pylikelihood.core.result import Result
from pylikelihood.core.compute.timing import Timer
from pylikelihood.core.compute.tolerances import OptimizerSettings, BFGS, SIMPLEX
from pylikelihood.core.compute.optimization import (
    NelderMeadSimplex,
    OptimizationResult,
    VectorBFGS,
    gradient_converged,
    iterate,
    size_converged,
)
from pylikelihood.mle.design import MLEDesign
from pylikelihood.mle.solution import MLEParams
from pylikelihood.mle.models.base import BoundLikelihood, LikelihoodModel


class CPUBFGSBackend:
    """
    Gradient-based backend.

    Requires a model with the 'gradient' capability. Converged when the
    gradient norm drops below settings.tol.
    """

    @property
    def name(self) -> str:
        return 'cpu_bfgs'

    def solve(
        self,
        design: MLEDesign,
        model: LikelihoodModel,
        x0: NDArray[np.floating[Any]],
        *,
        settings: OptimizerSettings = BFGS,
        verbose: bool = False,
    ) -> Result[MLEParams]:
        """
        Maximize the likelihood of model given design.

        Parameters
        ----------
        design : MLEDesign
            Data design wrapper
        model : LikelihoodModel
            Gradient-capable likelihood model
        x0 : ndarray
            Starting point
        settings : OptimizerSettings
            tol (gradient norm), max_iter, step_size (first trial step),
            line_tol (line minimization tolerance)
        verbose : bool
            Print one line per iteration

        Returns
        -------
        Result[MLEParams]
        """
        timer = Timer()
        timer.start()

        objective = model.bind(design.data)

        with timer.section('setup'):
            stepper = VectorBFGS(
                objective, x0,
                step_size=settings.step_size,
                line_tol=settings.line_tol if settings.line_tol is not None else BFGS.line_tol,
            )

        with timer.section('optimization'):
            run = iterate(
                stepper,
                lambda s: gradient_converged(s.gradient, settings.tol),
                max_iter=settings.max_iter,
                verbose=verbose,
            )

        return _finish(self.name, timer, objective, run, settings)


class CPUSimplexBackend:
    """
    Derivative-free backend.

    Works with any model. Converged when the simplex size drops below
    settings.tol.
    """

    @property
    def name(self) -> str:
        return 'cpu_simplex'

    def solve(
        self,
        design: MLEDesign,
        model: LikelihoodModel,
        x0: NDArray[np.floating[Any]],
        *,
        settings: OptimizerSettings = SIMPLEX,
        verbose: bool = False,
    ) -> Result[MLEParams]:
        """
        Maximize the likelihood of model given design.

        Parameters
        ----------
        design : MLEDesign
            Data design wrapper
        model : LikelihoodModel
            Any likelihood model
        x0 : ndarray
            Starting point; vertex 0 of the initial simplex
        settings : OptimizerSettings
            tol (simplex size), max_iter, step_size (initial edge length)
        verbose : bool
            Print one line per iteration

        Returns
        -------
        Result[MLEParams]
        """
        timer = Timer()
        timer.start()

        objective = model.bind(design.data)

        with timer.section('setup'):
            stepper = NelderMeadSimplex(objective, x0, step_size=settings.step_size)

        with timer.section('optimization'):
            run = iterate(
                stepper,
                lambda s: size_converged(s.metric(), settings.tol),
                max_iter=settings.max_iter,
                verbose=verbose,
            )

        return _finish(self.name, timer, objective, run, settings)


def _finish(
    backend_name: str,
    timer: Timer,
    objective: BoundLikelihood,
    run: OptimizationResult,
    settings: OptimizerSettings,
) -> Result[MLEParams]:
    """Re-evaluate at the optimum and package the Result."""
    warnings_list = []

    with timer.section('final_evaluation'):
        neg_loglik = objective.value(run.x)

    if not run.converged:
        warnings_list.append(
            f"Optimization did not converge: {run.message} "
            f"(final {settings.name} metric: {run.metric:.2e}, tol: {settings.tol:.2e})"
        )

    timer.stop()

    params = MLEParams(
        parameters=run.x,
        neg_loglik=neg_loglik,
        n_iter=run.n_iter,
        converged=run.converged,
        status=run.status,
        convergence_metric=run.metric,
    )

    return Result(
        params=params,
        info={
            'method': settings.name,
            'model': objective.model.name,
            'status': run.status,
            'message': run.message,
            'failure_reason': run.failure_reason,
            'tol': settings.tol,
            'max_iter': settings.max_iter,
            'step_size': settings.step_size,
            'n_function_evals': objective.n_function_evals,
            'n_gradient_evals': objective.n_gradient_evals,
        },
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(warnings_list),
    )
