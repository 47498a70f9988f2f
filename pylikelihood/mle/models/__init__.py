"""
Likelihood models for maximum likelihood estimation.

Each model provides the negative log-likelihood of a parameter vector
given a data matrix, plus (where available) its analytic gradient.

Registered models:
    probit: binary outcome in column 0, covariates after it
    waring: link counts, parameters [b, a]
    yule:   link counts, parameter [b]
    zipf:   degree counts, parameter [C]
    ols:    normal-error linear regression (value only)
"""

from pylikelihood.mle.models.base import LikelihoodModel, BoundLikelihood
from pylikelihood.mle.models.probit import ProbitModel, LinearPredictorCache
from pylikelihood.mle.models.waring import WaringModel
from pylikelihood.mle.models.yule import YuleModel
from pylikelihood.mle.models.zipf import ZipfModel
from pylikelihood.mle.models.ols import OLSModel


MODELS: dict[str, type[LikelihoodModel]] = {
    'probit': ProbitModel,
    'waring': WaringModel,
    'yule': YuleModel,
    'zipf': ZipfModel,
    'ols': OLSModel,
}


def get_model(model: str | LikelihoodModel) -> LikelihoodModel:
    """
    Resolve a model instance or registry name.

    Raises:
        ValueError: If the name is not registered
        TypeError: If model is neither a string nor a LikelihoodModel
    """
    if isinstance(model, LikelihoodModel):
        return model
    if isinstance(model, str):
        try:
            return MODELS[model.lower()]()
        except KeyError:
            raise ValueError(
                f"Unknown model: {model!r}. Available: {sorted(MODELS)}"
            ) from None
    raise TypeError(
        f"model must be a name or LikelihoodModel, got {type(model).__name__}"
    )


__all__ = [
    "LikelihoodModel",
    "BoundLikelihood",
    "ProbitModel",
    "LinearPredictorCache",
    "WaringModel",
    "YuleModel",
    "ZipfModel",
    "OLSModel",
    "MODELS",
    "get_model",
]
