"""
MLE solution types.

Contains the parameter payload and user-facing solution wrapper.

Sign convention: the optimizers minimize the NEGATIVE log-likelihood.
`neg_loglik` is that minimized value; `loglik` is its negation.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.result import Result

if TYPE_CHECKING:
    from pylikelihood.mle.design import MLEDesign
    from pylikelihood.mle.models.base import LikelihoodModel


@dataclass(frozen=True)
class MLEParams:
    """
    Parameter payload for maximum likelihood estimation.

    Immutable data computed by backends.
    """
    parameters: NDArray[np.floating[Any]]
    neg_loglik: float
    n_iter: int
    converged: bool
    status: str
    convergence_metric: float


@dataclass
class MLESolution:
    """
    User-facing MLE results.

    Wraps the backend Result and provides convenient accessors for the
    estimate, its likelihood and the optimizer's convergence status.
    """
    _result: Result[MLEParams]
    _design: 'MLEDesign'
    _model: 'LikelihoodModel'

    @property
    def parameters(self) -> NDArray[np.floating[Any]]:
        """Most likely parameter vector."""
        return self._result.params.parameters

    @property
    def neg_loglik(self) -> float:
        """Negative log-likelihood at the estimate (the minimized value)."""
        return self._result.params.neg_loglik

    @property
    def loglik(self) -> float:
        """Log-likelihood at the estimate."""
        return -self._result.params.neg_loglik

    @property
    def converged(self) -> bool:
        """Whether the optimizer met its convergence test."""
        return self._result.params.converged

    @property
    def status(self) -> str:
        """'converged', 'max_iterations' or 'step_failed'."""
        return self._result.params.status

    @property
    def n_iter(self) -> int:
        """Number of iterations."""
        return self._result.params.n_iter

    @property
    def convergence_metric(self) -> float:
        """Final simplex size (simplex) or gradient norm (bfgs)."""
        return self._result.params.convergence_metric

    @property
    def model_name(self) -> str:
        return self._model.name

    @property
    def n_params(self) -> int:
        return len(self.parameters)

    @property
    def aic(self) -> float:
        """Akaike Information Criterion."""
        return 2 * self.neg_loglik + 2 * self.n_params

    @property
    def bic(self) -> float:
        """Bayesian Information Criterion (n = number of rows)."""
        return 2 * self.neg_loglik + self.n_params * np.log(self._design.n)

    @property
    def info(self) -> dict[str, Any]:
        """Backend metadata."""
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        """Execution timing breakdown."""
        return self._result.timing

    @property
    def backend_name(self) -> str:
        """Name of the backend that produced this result."""
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        """Non-fatal warnings from computation."""
        return self._result.warnings

    def as_tuple(self) -> tuple[NDArray[np.floating[Any]], float]:
        """(parameters, negative log-likelihood) pair."""
        return self.parameters, self.neg_loglik

    def summary(self) -> str:
        """Generate summary output."""
        lines = [
            f"Maximum Likelihood Results: {self.model_name}",
            "=" * 60,
            f"Observations: {self._design.n}",
            f"Parameters: {self.n_params}",
            f"Method: {self.info.get('method', '')}",
            f"Status: {self.status}",
            f"Iterations: {self.n_iter}",
            f"Convergence metric: {self.convergence_metric:.3e}",
            f"Log-likelihood: {self.loglik:.6f}",
            f"AIC: {self.aic:.2f}",
            f"BIC: {self.bic:.2f}",
            "",
            "Estimates:",
            "-" * 60,
        ]

        for i, value in enumerate(self.parameters):
            lines.append(f"  beta[{i}]: {value:12.6f}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        if self.warnings:
            lines.append(f"Warnings: {len(self.warnings)}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'model': self.model_name,
            'parameters': self.parameters.tolist(),
            'neg_loglik': self.neg_loglik,
            'loglik': self.loglik,
            'converged': self.converged,
            'status': self.status,
            'n_iter': self.n_iter,
            'n': self._design.n,
            'backend': self.backend_name,
        }

    def __repr__(self) -> str:
        return (
            f"MLESolution(model={self.model_name!r}, n={self._design.n}, "
            f"converged={self.converged}, loglik={self.loglik:.4f})"
        )
