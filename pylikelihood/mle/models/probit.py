"""
Probit model.

Data layout: column 0 is the binary outcome (0/1), columns 1..n are the
covariates. The parameter vector has one coefficient per covariate.

With linear predictor eta = x . beta, an observation with outcome 0
contributes log Φ(eta) and one with outcome 1 contributes log(1 - Φ(eta)).
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.compute.special import log_normal_cdf, normal_pdf_over_cdf
from pylikelihood.core.validation import check_binary, check_min_columns
from pylikelihood.mle.models.base import LikelihoodModel, GRADIENT_AND_ROWWISE


@dataclass
class LinearPredictorCache:
    """
    Scratch space for the linear predictor X @ beta.

    Owned by a single value_and_gradient() call: the value evaluation
    stores the predictor, the combined evaluator marks it current, the
    gradient evaluation reuses it and then releases it. A cache that is
    not marked current is never read.
    """
    values: NDArray[np.floating[Any]] | None = None
    is_current: bool = False

    def store(self, values: NDArray[np.floating[Any]]) -> None:
        self.values = values
        self.is_current = False

    def mark_current(self) -> None:
        if self.values is None:
            raise RuntimeError("cannot mark an empty predictor cache as current")
        self.is_current = True

    def release(self) -> None:
        self.values = None
        self.is_current = False


class ProbitModel(LikelihoodModel):
    """Probit regression on a binary outcome."""

    name = 'probit'
    capabilities = GRADIENT_AND_ROWWISE

    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        return data.shape[1] - 1

    def validate(self, data: NDArray[np.floating[Any]]) -> None:
        check_min_columns(data, 2, 'data')
        check_binary(data[:, 0], 'data[:, 0] (outcome)')

    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
        cache: LinearPredictorCache | None = None,
    ) -> float:
        eta = data[:, 1:] @ beta
        if cache is not None:
            cache.store(eta)

        # log(1 - Φ(eta)) == log Φ(-eta)
        log_p = np.where(data[:, 0] == 0, log_normal_cdf(eta), log_normal_cdf(-eta))
        return -float(np.sum(log_p))

    def gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
        cache: LinearPredictorCache | None = None,
    ) -> NDArray[np.floating[Any]]:
        X = data[:, 1:]
        if cache is not None and cache.is_current:
            eta = cache.values
        else:
            eta = X @ beta

        # φ/Φ for outcome 0, φ/(Φ - 1) for outcome 1
        ratio = np.where(
            data[:, 0] == 0,
            normal_pdf_over_cdf(eta),
            -normal_pdf_over_cdf(-eta),
        )
        grad = -(X * ratio[:, np.newaxis]).sum(axis=0)

        if cache is not None:
            cache.release()
        return grad

    def value_and_gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        cache = LinearPredictorCache()
        f = self.negative_log_likelihood(beta, data, cache)
        cache.mark_current()
        g = self.gradient(beta, data, cache)
        return f, g
