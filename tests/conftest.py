"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def probit_data(rng):
    """Probit dataset: outcome, intercept column, one covariate."""
    n = 400
    x = rng.standard_normal(n)
    beta_true = np.array([0.3, -0.8])
    eta = beta_true[0] + beta_true[1] * x
    # P(outcome == 0) = Phi(eta)
    y = (rng.standard_normal(n) > eta).astype(float)
    return np.column_stack([y, np.ones(n), x]), beta_true


@pytest.fixture
def link_counts():
    """Link-count table: column k holds the number of elements with k links."""
    return np.array([
        [0.0, 120.0, 40.0, 18.0, 9.0, 5.0, 3.0, 2.0],
        [0.0, 100.0, 35.0, 15.0, 8.0, 4.0, 3.0, 1.0],
    ])


@pytest.fixture
def regression_data(rng):
    """Linear regression dataset: response, then two regressors."""
    n = 60
    X = rng.standard_normal((n, 2))
    y = 1.5 + X @ np.array([2.0, -1.0]) + rng.standard_normal(n) * 0.5
    return np.column_stack([y, X])
