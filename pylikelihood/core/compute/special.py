"""
Special functions used by the likelihood models.

Thin element-wise wrappers over scipy so that every model reaches the
special functions through one place. All functions take float64 arrays
(or scalars) and follow scipy's IEEE-754 double precision semantics.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import special
from scipy.stats import norm


def lngamma(x: ArrayLike) -> NDArray:
    """log Γ(x), for x > 0."""
    return special.gammaln(x)


def digamma(x: ArrayLike) -> NDArray:
    """ψ(x) = d/dx log Γ(x), for x > 0."""
    return special.digamma(x)


def log_normal_cdf(x: ArrayLike) -> NDArray:
    """
    log Φ(x), accurate in both tails.

    log(1 - Φ(x)) is obtained as log_normal_cdf(-x).
    """
    return special.log_ndtr(np.asarray(x, dtype=np.float64))


def log_normal_pdf(x: ArrayLike, sigma: float = 1.0) -> NDArray:
    """log of the normal density with mean 0 and standard deviation sigma."""
    return norm.logpdf(x, loc=0.0, scale=sigma)


def normal_pdf_over_cdf(x: ArrayLike) -> NDArray:
    """
    Inverse Mills ratio φ(x) / Φ(x).

    Evaluated in log space so that it stays finite where Φ(x) underflows.
    φ(x) / (Φ(x) - 1) equals -normal_pdf_over_cdf(-x).
    """
    x = np.asarray(x, dtype=np.float64)
    return np.exp(log_normal_pdf(x) - log_normal_cdf(x))
