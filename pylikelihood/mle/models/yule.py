"""
Yule distribution for link-count data.

The special case a = 0 of the Waring distribution, parameter [b]:
    P(k) = (b - 1) Γ(k) Γ(b) / Γ(k + b)

Same data layout as Waring: column k (k >= 1) holds the number of
elements with k links. Returns +inf for b <= 2.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.compute.special import lngamma, digamma
from pylikelihood.mle.models.waring import LinkCountModel, bucket_totals


class YuleModel(LinkCountModel):
    """Yule distribution, parameter [b]."""

    name = 'yule'

    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        return 1

    @staticmethod
    def in_domain(b: float) -> bool:
        return b > 2

    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        b = float(beta[0])
        if not self.in_domain(b):
            return np.inf

        k, totals = bucket_totals(data)
        ln_k = np.where(k > 1, lngamma(k), 0.0)
        terms = np.log(b - 1) + ln_k + lngamma(b) - lngamma(k + b)
        return -float(totals @ terms)

    def gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        b = float(beta[0])
        if not self.in_domain(b):
            return np.full(1, np.nan)

        k, totals = bucket_totals(data)
        d_b = totals @ (1.0 / (b - 1) + digamma(b) - digamma(k + b))
        return -np.array([d_b])
