"""
Convergence tests for iterative minimizers.

Each test answers one question about the current state of a stepper
and returns True when the minimizer may stop.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


def size_converged(size: float, tol: float) -> bool:
    """
    Simplex size test.

    Args:
        size: Characteristic size of the simplex
        tol: Absolute tolerance

    Returns:
        True when size < tol
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    return bool(size < tol)


def gradient_converged(gradient: NDArray[np.floating[Any]], tol: float) -> bool:
    """
    Gradient norm test.

    Args:
        gradient: Gradient at the current point
        tol: Absolute tolerance on the Euclidean norm

    Returns:
        True when ||gradient|| < tol
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    return bool(np.linalg.norm(gradient) < tol)
