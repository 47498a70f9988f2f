"""
Objectives shared by the optimizer tests.
"""

import numpy as np
import pytest


class Quadratic:
    """f(x) = sum(scale * (x - center)**2), minimum 0 at center."""

    def __init__(self, center, scale):
        self.center = np.asarray(center, dtype=np.float64)
        self.scale = np.asarray(scale, dtype=np.float64)
        self.n_evals = 0

    @property
    def n_params(self):
        return len(self.center)

    def value(self, x):
        self.n_evals += 1
        return float(np.sum(self.scale * (x - self.center) ** 2))

    def gradient(self, x):
        return 2.0 * self.scale * (x - self.center)

    def value_and_gradient(self, x):
        return self.value(x), self.gradient(x)


class Infeasible:
    """+inf everywhere, NaN gradient."""

    n_params = 1

    def value(self, x):
        return np.inf

    def gradient(self, x):
        return np.full(len(x), np.nan)

    def value_and_gradient(self, x):
        return np.inf, self.gradient(x)


@pytest.fixture
def quadratic():
    return Quadratic(center=[1.0, -2.0], scale=[1.0, 10.0])


@pytest.fixture
def infeasible():
    return Infeasible()
