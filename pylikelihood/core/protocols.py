"""
Core protocols for pylikelihood.

These define structural interfaces that domain-specific implementations
must satisfy. We use Protocol (structural typing) rather than ABC
(nominal typing) so that any object with the right methods can be handed
to the optimizer.

Design Principles:
    - Minimal contracts: the optimizer only sees a bound objective
    - Capability-driven: gradient-free objectives simply omit gradient()
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Objective(Protocol):
    """
    Value-only objective: the contract of the derivative-free minimizer.

    The objective is already bound to its data; the minimizer only passes
    parameter vectors. Values are minimized, so likelihood objectives
    return the NEGATIVE log-likelihood. +inf marks an infeasible point.
    """

    @property
    def n_params(self) -> int:
        """Length of the parameter vector."""
        ...

    def value(self, x: NDArray[np.floating[Any]]) -> float:
        """Objective value at x."""
        ...


@runtime_checkable
class DifferentiableObjective(Objective, Protocol):
    """
    Value + gradient objective: the contract of the quasi-Newton minimizer.

    value_and_gradient() must agree with value() and gradient() evaluated
    separately; it exists so implementations can share intermediate work.
    """

    def gradient(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Gradient of the objective at x."""
        ...

    def value_and_gradient(
        self, x: NDArray[np.floating[Any]]
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """Objective value and gradient at x in one pass."""
        ...


@runtime_checkable
class Stepper(Protocol):
    """
    One iterative minimization strategy.

    A stepper holds its own state (simplex vertices, search direction,
    ...) and advances it one step per iterate() call. It raises
    StepFailure when it cannot proceed, leaving x/fval at the last
    valid point.
    """

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Current best point."""
        ...

    @property
    def fval(self) -> float:
        """Objective value at the current best point."""
        ...

    def iterate(self) -> None:
        """Advance one step."""
        ...

    def metric(self) -> float:
        """Convergence metric (simplex size, gradient norm, ...)."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a design plus a likelihood model and
    produce a domain-specific parameter payload wrapped in a Result.

    Backends are stateless; all configuration is passed to solve().

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_bfgs', 'cpu_simplex'
        """
        ...

    def solve(self, design: D, model: Any, x0: Any, **kwargs: Any) -> 'Result[P]':
        """
        Execute the estimation from starting point x0.

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            ValidationError: If design is invalid for this backend/model
        """
        ...
