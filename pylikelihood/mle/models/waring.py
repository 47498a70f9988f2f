"""
Waring distribution for link-count data.

Data layout: each row is one observation; column k (k >= 1) holds the
number of elements with k links. Column 0 is ignored.

Parameters [b, a]:
    P(k) = (b - 1) Γ(k + a) Γ(b + a) / (Γ(a + 1) Γ(k + a + b))

Returns +inf for b <= 2 or a <= -1 before any log-gamma is evaluated.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.compute.special import lngamma, digamma
from pylikelihood.core.validation import check_min_columns, check_non_negative
from pylikelihood.mle.models.base import LikelihoodModel, GRADIENT_AND_ROWWISE


def bucket_totals(
    data: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Link counts k = 1..m-1 and the total count in each bucket."""
    k = np.arange(1, data.shape[1], dtype=np.float64)
    totals = data[:, 1:].sum(axis=0)
    return k, totals


class LinkCountModel(LikelihoodModel):
    """Shared validation for the column-per-link-count layout."""

    capabilities = GRADIENT_AND_ROWWISE

    def validate(self, data: NDArray[np.floating[Any]]) -> None:
        check_min_columns(data, 2, 'data')
        check_non_negative(data[:, 1:], 'data[:, 1:] (counts)')


class WaringModel(LinkCountModel):
    """Waring distribution, parameters [b, a]."""

    name = 'waring'

    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        return 2

    @staticmethod
    def in_domain(b: float, a: float) -> bool:
        return b > 2 and a > -1

    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        b, a = float(beta[0]), float(beta[1])
        if not self.in_domain(b, a):
            return np.inf

        k, totals = bucket_totals(data)
        terms = (
            np.log(b - 1)
            + lngamma(k + a)
            + lngamma(b + a)
            - lngamma(a + 1)
            - lngamma(k + a + b)
        )
        return -float(totals @ terms)

    def gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        b, a = float(beta[0]), float(beta[1])
        if not self.in_domain(b, a):
            return np.full(2, np.nan)

        k, totals = bucket_totals(data)
        psi_ab = digamma(b + a)
        psi_kab = digamma(k + a + b)

        d_b = totals @ (1.0 / (b - 1) + psi_ab - psi_kab)
        d_a = totals @ (digamma(k + a) + psi_ab - digamma(a + 1) - psi_kab)
        return -np.array([d_b, d_a])
