"""Dense numpy-backed design."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from larspath._typing import FloatArray
from larspath.linear.designs.base import BaseDesign, _resolve_dtype


class DenseDesign(BaseDesign):
    """Design backend over an in-memory ``(n, p)`` array.

    Columns are stored Fortran-ordered so that ``X[:, j]`` is contiguous.

    Parameters
    ----------
    X : array-like, shape (n_observations, n_features)
    y : array-like, shape (n_observations,)
    dtype : {np.float32, np.float64} or None
        Scalar type.  ``None`` keeps float32 inputs as float32 and uses
        float64 otherwise.
    """

    def __init__(self, X: Any, y: Any, dtype=None) -> None:
        self.dtype = _resolve_dtype(dtype, np.asarray(X), np.asarray(y))
        X = np.asarray(X, dtype=self.dtype, order="F")
        if X.ndim != 2:
            raise ValueError(f"X must be 2-D, got {X.ndim}-D array.")
        self.X = X
        self.y = self._check_response(y, X.shape[0])

    @property
    def n_observations(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    def residual_correlations(self, out: FloatArray) -> FloatArray:
        out[:] = self.X.T @ self.y
        return out

    def column_dot(self, i: int, j: int) -> float:
        return float(np.dot(self.X[:, i], self.X[:, j]))

    def direction_correlations(
        self,
        active: Sequence[int],
        direction: FloatArray,
        out: FloatArray,
    ) -> FloatArray:
        # equiangular vector, then its correlation with every column
        u = self.X[:, active] @ direction
        out[:] = self.X.T @ u
        return out
