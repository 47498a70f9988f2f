"""
Zipf (geometric-tail) distribution for link-count data.

P(link count == k) is proportional to C^{-k}; with density
ln(C) C^{-k}, the log-likelihood of one draw with degree k is
    ln(ln C) - k ln C

Data layout: every column k (0-based, column 0 included) of every row is
a count bucket for degree k. One parameter [C]; +inf for C <= 1.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.validation import check_non_negative
from pylikelihood.mle.models.base import LikelihoodModel, GRADIENT_AND_ROWWISE


class ZipfModel(LikelihoodModel):
    """Zipf distribution, parameter [C]."""

    name = 'zipf'
    capabilities = GRADIENT_AND_ROWWISE

    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        return 1

    def validate(self, data: NDArray[np.floating[Any]]) -> None:
        check_non_negative(data, 'data (counts)')

    @staticmethod
    def in_domain(c: float) -> bool:
        return c > 1

    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        c = float(beta[0])
        if not self.in_domain(c):
            return np.inf

        k = np.arange(data.shape[1], dtype=np.float64)
        totals = data.sum(axis=0)
        ln_c = np.log(c)
        return -float(totals @ (np.log(ln_c) - k * ln_c))

    def gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        c = float(beta[0])
        if not self.in_domain(c):
            return np.full(1, np.nan)

        k = np.arange(data.shape[1], dtype=np.float64)
        totals = data.sum(axis=0)
        d_c = totals @ ((1.0 / np.log(c) - k) / c)
        return -np.array([d_c])
