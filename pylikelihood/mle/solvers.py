"""
Solver dispatch for maximum likelihood estimation.

Public API:
    maximum_likelihood(data_or_design, model, ...) -> MLESolution
    mle_probit / mle_waring / mle_yule / mle_zipf / mle_ols
    likelihood_vector(data, parameters, model) -> ndarray
"""

import warnings
from typing import Literal
import numpy as np

from pylikelihood.core.capabilities import CAPABILITY_GRADIENT, CAPABILITY_ROWWISE
from pylikelihood.core.exceptions import ConvergenceError, ValidationError
from pylikelihood.core.compute.tolerances import select_settings
from pylikelihood.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_length,
    check_positive_scalar,
)
from pylikelihood.mle.design import MLEDesign
from pylikelihood.mle.solution import MLESolution
from pylikelihood.mle.backends.cpu import CPUBFGSBackend, CPUSimplexBackend
from pylikelihood.mle.models import (
    LikelihoodModel,
    ProbitModel,
    WaringModel,
    YuleModel,
    ZipfModel,
    OLSModel,
    get_model,
)


MethodChoice = Literal['bfgs', 'simplex']


def maximum_likelihood(
    data_or_design,
    model: str | LikelihoodModel,
    *,
    starting_point=None,
    step_size: float | None = None,
    method: MethodChoice = 'bfgs',
    tol: float | None = None,
    max_iter: int | None = None,
    verbose: bool = False,
    strict: bool = False,
) -> MLESolution:
    """
    Most likely parameters of a likelihood model given a data matrix.

    Accepts EITHER:
        1. An MLEDesign object
        2. Raw 2D data array or DataFrame (convenience)

    Parameters
    ----------
    data_or_design : array-like or MLEDesign
        Data matrix, laid out as the model expects.
    model : str or LikelihoodModel
        Model instance or registered name: 'probit', 'waring', 'yule',
        'zipf', 'ols'.
    starting_point : array-like or None
        Initial parameter vector. None means a zero vector of the model's
        parameter count.
    step_size : float or None
        Initial simplex edge (simplex) or first line-search trial step
        (bfgs). None uses the method default.
    method : str
        'bfgs' (default, needs an analytic gradient) or 'simplex'.
    tol : float or None
        Simplex size tolerance (simplex, default 1e-3) or gradient norm
        tolerance (bfgs, default 1e-4).
    max_iter : int or None
        Iteration budget. Default 500.
    verbose : bool
        Print progress information.
    strict : bool
        Raise ConvergenceError instead of warning when the optimizer
        stops without converging.

    Returns
    -------
    MLESolution

    Examples
    --------
    >>> from pylikelihood.mle import maximum_likelihood
    >>> sol = maximum_likelihood(data, 'yule', starting_point=[3.0])
    >>> print(sol.parameters, sol.loglik)
    """
    model_impl = get_model(model)

    # Get or build Design
    if isinstance(data_or_design, MLEDesign):
        design = data_or_design
    else:
        design = MLEDesign.from_array(data_or_design)

    model_impl.validate(design.data)

    n_params = model_impl.n_params(design.data)
    if n_params < 1:
        raise ValidationError(
            f"{model_impl.name} model has no parameters for data with {design.p} columns"
        )

    x0 = _starting_point(starting_point, n_params)

    settings = select_settings(method)
    if tol is not None and not tol >= 0:
        raise ValidationError(f"tol: must be >= 0, got {tol}")
    if max_iter is not None and max_iter < 1:
        raise ValidationError(f"max_iter: must be >= 1, got {max_iter}")
    if step_size is not None:
        step_size = check_positive_scalar(step_size, 'step_size')
    settings = settings.with_overrides(tol=tol, max_iter=max_iter, step_size=step_size)

    backend_impl = _get_backend(method, model_impl)

    if verbose:
        print(f"MLE ({model_impl.name}): {design.n} observations, "
              f"{n_params} parameters")
        print(f"Backend: {backend_impl.name}")

    result = backend_impl.solve(design, model_impl, x0, settings=settings, verbose=verbose)

    if not result.params.converged:
        message = result.warnings[0]
        if strict:
            raise ConvergenceError(
                message,
                iterations=result.params.n_iter,
                final_change=result.params.convergence_metric,
                reason=result.params.status,
                threshold=settings.tol,
            )
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    if verbose:
        print(f"Converged: {result.params.converged} "
              f"(iterations: {result.params.n_iter}, "
              f"loglik: {-result.params.neg_loglik:.6f})")

    return MLESolution(_result=result, _design=design, _model=model_impl)


def mle_probit(data, starting_point=None, step_size=None, verbose=False, *,
               method: MethodChoice = 'bfgs', tol=None, max_iter=None,
               strict=False) -> MLESolution:
    """
    Probit regression by maximum likelihood.

    data: column 0 is the 0/1 outcome, columns 1.. the covariates. There
    is no implicit intercept; include a column of ones for one.
    """
    return maximum_likelihood(
        data, ProbitModel(), starting_point=starting_point, step_size=step_size,
        method=method, tol=tol, max_iter=max_iter, verbose=verbose, strict=strict,
    )


def mle_waring(data, starting_point=None, step_size=None, verbose=False, *,
               method: MethodChoice = 'bfgs', tol=None, max_iter=None,
               strict=False) -> MLESolution:
    """
    Waring distribution by maximum likelihood; parameters [b, a].

    data: column k (k >= 1) holds the number of elements with k links.
    Column 0 is ignored.
    """
    return maximum_likelihood(
        data, WaringModel(), starting_point=starting_point, step_size=step_size,
        method=method, tol=tol, max_iter=max_iter, verbose=verbose, strict=strict,
    )


def mle_yule(data, starting_point=None, step_size=None, verbose=False, *,
             method: MethodChoice = 'bfgs', tol=None, max_iter=None,
             strict=False) -> MLESolution:
    """Yule distribution by maximum likelihood; parameter [b]. Layout as mle_waring."""
    return maximum_likelihood(
        data, YuleModel(), starting_point=starting_point, step_size=step_size,
        method=method, tol=tol, max_iter=max_iter, verbose=verbose, strict=strict,
    )


def mle_zipf(data, starting_point=None, step_size=None, verbose=False, *,
             method: MethodChoice = 'bfgs', tol=None, max_iter=None,
             strict=False) -> MLESolution:
    """
    Zipf distribution by maximum likelihood; parameter [C].

    data: column k (k >= 0) holds the number of elements with k links,
    summed over all rows.
    """
    return maximum_likelihood(
        data, ZipfModel(), starting_point=starting_point, step_size=step_size,
        method=method, tol=tol, max_iter=max_iter, verbose=verbose, strict=strict,
    )


def mle_ols(data, starting_point=None, step_size=None, verbose=False, *,
            tol=None, max_iter=None, strict=False) -> MLESolution:
    """
    Normal-error linear regression by maximum likelihood (simplex only).

    data: column 0 is the response, columns 1.. the regressors. The
    parameter vector is [intercept, slopes...].
    """
    return maximum_likelihood(
        data, OLSModel(), starting_point=starting_point, step_size=step_size,
        method='simplex', tol=tol, max_iter=max_iter, verbose=verbose, strict=strict,
    )


def likelihood_vector(data, parameters, model: str | LikelihoodModel) -> np.ndarray:
    """
    Per-observation negative log-likelihood.

    Evaluates the model on each row of data separately, giving one value
    per observation (e.g. for outer-product variance estimates). Values
    are +inf where the parameters are outside the model's domain.

    Raises:
        ValidationError: If the model does not support row-wise evaluation
        DimensionError: If parameters has the wrong length
    """
    model_impl = get_model(model)
    if not model_impl.supports(CAPABILITY_ROWWISE):
        raise ValidationError(
            f"{model_impl.name} model does not support row-wise evaluation"
        )

    design = data if isinstance(data, MLEDesign) else MLEDesign.from_array(data)
    model_impl.validate(design.data)

    beta = _starting_point(parameters, model_impl.n_params(design.data), name='parameters')

    return np.array([
        model_impl.negative_log_likelihood(beta, design.row(i))
        for i in range(design.n)
    ])


def _starting_point(starting_point, n_params: int, name: str = 'starting_point') -> np.ndarray:
    """Validate a user parameter vector, or default to zeros."""
    if starting_point is None:
        return np.zeros(n_params)
    x0 = check_array(starting_point, name)
    x0 = np.atleast_1d(x0)
    check_1d(x0, name)
    check_length(x0, n_params, name)
    check_finite(x0, name)
    return np.array(x0, dtype=np.float64, copy=True)


def _get_backend(method: MethodChoice, model: LikelihoodModel):
    """Select backend for a method, checking model capabilities."""
    if method == 'bfgs':
        if not model.supports(CAPABILITY_GRADIENT):
            raise ValidationError(
                f"{model.name} model has no analytic gradient; use method='simplex'"
            )
        return CPUBFGSBackend()

    elif method == 'simplex':
        return CPUSimplexBackend()

    else:
        raise ValueError(f"Unknown method: {method!r}. Use 'bfgs' or 'simplex'.")
