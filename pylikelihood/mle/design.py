"""
MLEDesign: data wrapper for maximum likelihood estimation.

Wraps a data matrix and provides validation and metadata for the
estimation pipeline. How the columns are interpreted is up to the
likelihood model (outcome + covariates for probit, count buckets for
Waring/Yule/Zipf, response + regressors for OLS).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylikelihood.core.exceptions import ValidationError
from pylikelihood.core.validation import check_array, check_2d, check_finite


@dataclass(frozen=True)
class MLEDesign:
    """
    Design for maximum likelihood estimation.

    Wraps a data matrix (n observations x p columns). Immutable after
    construction; the underlying array is marked read-only so that no
    model can modify it.

    Construction:
        MLEDesign.from_array(data)
    """
    _data: NDArray[np.floating[Any]]
    _n: int
    _p: int

    @classmethod
    def from_array(cls, data) -> MLEDesign:
        """
        Build MLEDesign from array-like data.

        Parameters
        ----------
        data : array-like
            2D data matrix. Can be numpy array, pandas DataFrame,
            or any array-like with .values attribute.
        """
        if hasattr(data, 'values'):
            data = data.values
        data_array = check_array(data, 'data')
        return cls._build(data_array)

    @classmethod
    def _build(cls, data: NDArray) -> MLEDesign:
        """Internal builder with validation."""
        check_2d(data, 'data')

        n, p = data.shape

        if n < 1:
            raise ValidationError(f"data: need at least 1 observation, got {n}")

        if p < 1:
            raise ValidationError(f"data: need at least 1 column, got {p}")

        check_finite(data, 'data')

        data = np.array(data, dtype=np.float64, copy=True)
        data.flags.writeable = False

        return cls(_data=data, _n=n, _p=p)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data matrix (n x p), read-only."""
        return self._data

    @property
    def n(self) -> int:
        """Number of observations (rows)."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns."""
        return self._p

    def row(self, i: int) -> NDArray[np.floating[Any]]:
        """Observation i as a 1 x p matrix."""
        return self._data[i:i + 1]

    def __repr__(self) -> str:
        return f"MLEDesign(n={self._n}, p={self._p})"
