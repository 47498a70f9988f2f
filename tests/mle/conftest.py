"""
Shared helpers for likelihood model tests.
"""

import numpy as np
import pytest
from scipy.special import gammaln


def _numerical_gradient(f, x, h=1e-6):
    """Central finite differences."""
    x = np.asarray(x, dtype=np.float64)
    grad = np.zeros_like(x)
    for i in range(len(x)):
        step = np.zeros_like(x)
        step[i] = h
        grad[i] = (f(x + step) - f(x - step)) / (2 * h)
    return grad


@pytest.fixture
def numerical_gradient():
    return _numerical_gradient


def waring_pmf(k, b, a):
    return (b - 1) * np.exp(
        gammaln(k + a) + gammaln(b + a) - gammaln(a + 1) - gammaln(k + a + b)
    )


@pytest.fixture
def waring_counts():
    """Expected link counts of 1000 draws from Waring(b=3, a=1), k = 1..2000."""
    k = np.arange(1, 2001, dtype=np.float64)
    return np.concatenate([[0.0], 1000 * waring_pmf(k, 3.0, 1.0)])[np.newaxis, :]


@pytest.fixture
def yule_counts():
    """Expected link counts of 1000 draws from Yule(b=3), k = 1..300."""
    k = np.arange(1, 301, dtype=np.float64)
    return np.concatenate([[0.0], 1000 * waring_pmf(k, 3.0, 0.0)])[np.newaxis, :]
