"""
Input validation utilities for pylikelihood.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylikelihood.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    # Likelihood arithmetic is done in double precision
    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_min_columns(array: NDArray[np.floating[Any]], min_columns: int, name: str) -> None:
    """
    Verify a 2D array has at least the minimum number of columns.

    Raises:
        DimensionError: If array has fewer than min_columns columns
    """
    p = array.shape[1]
    if p < min_columns:
        raise DimensionError(
            f"{name}: requires at least {min_columns} columns, got {p}"
        )


def check_length(array: NDArray[np.floating[Any]], length: int, name: str) -> None:
    """
    Verify a 1D array has exactly the given length.

    Raises:
        DimensionError: If the length differs
    """
    if array.shape[0] != length:
        raise DimensionError(
            f"{name}: expected length {length}, got {array.shape[0]}"
        )


def check_non_negative(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no negative values.

    Raises:
        ValidationError: If any entry is negative
    """
    negative = np.argwhere(array < 0)
    if len(negative) > 0:
        raise ValidationError(
            f"{name}: contains {len(negative)} negative values "
            f"(first at index {tuple(int(i) for i in negative[0])})"
        )


def check_binary(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains only the values 0 and 1.

    Raises:
        ValidationError: If any other value is present
    """
    bad = ~np.isin(array, (0.0, 1.0))
    if np.any(bad):
        values = np.unique(array[bad])[:5].tolist()
        raise ValidationError(
            f"{name}: expected binary 0/1 values, found {values}"
        )


def check_positive_scalar(value: float, name: str) -> float:
    """
    Verify a scalar setting is finite and strictly positive.

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If the value is not finite or not positive
    """
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {value!r}") from e
    if not np.isfinite(value) or value <= 0:
        raise ValidationError(f"{name}: must be finite and > 0, got {value}")
    return value
