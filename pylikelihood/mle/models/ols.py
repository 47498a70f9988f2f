"""
Normal-error log-likelihood of a linear regression.

Data layout: column 0 is the dependent variable, columns 1..n the
regressors. The parameter vector has one entry per column; beta[0] is
the intercept and beta[1:] the slopes.

The error variance is not a parameter: sigma is the sample standard
deviation (n - 1 denominator) of the errors at beta. The coefficients
themselves may come from any solver; this model only scores them.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.compute.special import log_normal_pdf
from pylikelihood.core.validation import check_min_samples
from pylikelihood.mle.models.base import LikelihoodModel


class OLSModel(LikelihoodModel):
    """Linear regression with normally distributed errors (value only)."""

    name = 'ols'
    capabilities = frozenset()

    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        return data.shape[1]

    def validate(self, data: NDArray[np.floating[Any]]) -> None:
        check_min_samples(data, 2, 'data')

    def errors(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Fitted minus observed value for every row."""
        expected = beta[0] + data[:, 1:] @ beta[1:]
        return expected - data[:, 0]

    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        errors = self.errors(beta, data)
        sigma = float(np.std(errors, ddof=1))
        if sigma == 0.0:
            # exact fit: the likelihood is unbounded
            return -np.inf
        return -float(np.sum(log_normal_pdf(errors, sigma)))
