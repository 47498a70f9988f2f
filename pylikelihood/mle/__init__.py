"""
Maximum likelihood estimation.

Public API:
    maximum_likelihood(data, model, ...) -> MLESolution
    mle_probit(data, ...) -> MLESolution
    mle_waring(data, ...) -> MLESolution
    mle_yule(data, ...) -> MLESolution
    mle_zipf(data, ...) -> MLESolution
    mle_ols(data, ...) -> MLESolution
    likelihood_vector(data, parameters, model) -> ndarray
"""

from pylikelihood.mle.design import MLEDesign
from pylikelihood.mle.solution import MLEParams, MLESolution
from pylikelihood.mle.solvers import (
    maximum_likelihood,
    mle_probit,
    mle_waring,
    mle_yule,
    mle_zipf,
    mle_ols,
    likelihood_vector,
)
from pylikelihood.mle.models import (
    LikelihoodModel,
    ProbitModel,
    WaringModel,
    YuleModel,
    ZipfModel,
    OLSModel,
    MODELS,
)

__all__ = [
    "MLEDesign",
    "MLEParams",
    "MLESolution",
    "maximum_likelihood",
    "mle_probit",
    "mle_waring",
    "mle_yule",
    "mle_zipf",
    "mle_ols",
    "likelihood_vector",
    "LikelihoodModel",
    "ProbitModel",
    "WaringModel",
    "YuleModel",
    "ZipfModel",
    "OLSModel",
    "MODELS",
]
