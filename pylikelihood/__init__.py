"""
PyLikelihood: maximum likelihood estimation for Python.

Fits probit regression and the Waring, Yule and Zipf link-count
distributions by minimizing the negative log-likelihood, with a
derivative-free simplex or a gradient-based BFGS minimizer.

Submodules:
    mle: Likelihood models, estimators and solutions
    core: Exceptions, validation, optimizers, timing
"""

__version__ = "0.1.0"

from pylikelihood import mle
from pylikelihood.mle import (
    maximum_likelihood,
    mle_probit,
    mle_waring,
    mle_yule,
    mle_zipf,
    mle_ols,
    likelihood_vector,
)

__all__ = [
    "__version__",
    "mle",
    "maximum_likelihood",
    "mle_probit",
    "mle_waring",
    "mle_yule",
    "mle_zipf",
    "mle_ols",
    "likelihood_vector",
]
