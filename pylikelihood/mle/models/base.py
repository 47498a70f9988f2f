"""
Base class for likelihood models.

A model maps (parameter vector, data matrix) to the NEGATIVE
log-likelihood, so that maximum likelihood becomes minimization. Models
that can, also provide the analytic gradient and a combined
value-and-gradient evaluation that shares intermediate work.

Models are stateless: every method is a pure function of its arguments,
and the data matrix is never modified.
"""

from abc import ABC, abstractmethod
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.capabilities import CAPABILITY_GRADIENT, CAPABILITY_ROWWISE


class LikelihoodModel(ABC):
    """
    Abstract likelihood model.

    Subclasses define:
        name: Registry name ('probit', 'waring', ...)
        capabilities: Subset of {'gradient', 'rowwise'}
        n_params(data): Parameter count for a data matrix
        negative_log_likelihood(beta, data)
    and, when 'gradient' is a capability, gradient(beta, data).
    """

    name: str = ''
    capabilities: frozenset[str] = frozenset()

    @abstractmethod
    def n_params(self, data: NDArray[np.floating[Any]]) -> int:
        """Number of free parameters for this data matrix."""
        ...

    @abstractmethod
    def negative_log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        """-log L(beta | data); +inf outside the parameter domain."""
        ...

    def gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Gradient of the negative log-likelihood."""
        raise NotImplementedError(f"{self.name} model has no analytic gradient")

    def value_and_gradient(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """
        Negative log-likelihood and its gradient.

        Outside the domain returns (+inf, NaN vector) without evaluating
        the gradient.
        """
        f = self.negative_log_likelihood(beta, data)
        if not np.isfinite(f):
            return f, np.full(len(beta), np.nan)
        return f, self.gradient(beta, data)

    def log_likelihood(
        self,
        beta: NDArray[np.floating[Any]],
        data: NDArray[np.floating[Any]],
    ) -> float:
        """log L(beta | data), i.e. the negated objective."""
        return -self.negative_log_likelihood(beta, data)

    def validate(self, data: NDArray[np.floating[Any]]) -> None:
        """
        Check model-specific preconditions on the data matrix.

        The generic checks (2D, finite, non-empty) happen in MLEDesign.
        """
        pass

    def supports(self, capability: str) -> bool:
        """Check if this model supports a given capability."""
        return capability in self.capabilities

    def bind(self, data: NDArray[np.floating[Any]]) -> 'BoundLikelihood':
        """Fix the data matrix, producing an objective for the minimizers."""
        return BoundLikelihood(self, data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class BoundLikelihood:
    """
    A model with its data matrix fixed.

    Satisfies the Objective protocol (and DifferentiableObjective when the
    model has a gradient). Counts evaluations for diagnostics.
    """

    def __init__(self, model: LikelihoodModel, data: NDArray[np.floating[Any]]):
        self._model = model
        self._data = data
        self._n_params = model.n_params(data)
        self.n_function_evals = 0
        self.n_gradient_evals = 0

    @property
    def model(self) -> LikelihoodModel:
        return self._model

    @property
    def n_params(self) -> int:
        return self._n_params

    def value(self, x: NDArray[np.floating[Any]]) -> float:
        self.n_function_evals += 1
        return float(self._model.negative_log_likelihood(x, self._data))

    def gradient(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        self.n_gradient_evals += 1
        return self._model.gradient(x, self._data)

    def value_and_gradient(
        self, x: NDArray[np.floating[Any]]
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        self.n_function_evals += 1
        self.n_gradient_evals += 1
        f, g = self._model.value_and_gradient(x, self._data)
        return float(f), g


GRADIENT_AND_ROWWISE = frozenset({CAPABILITY_GRADIENT, CAPABILITY_ROWWISE})
