"""Design backend over a precomputed Gram matrix.

Useful when ``n_observations >> n_features``: every query costs
``O(n_features)`` instead of ``O(n_observations)``.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from larspath._typing import FloatArray
from larspath.linear.designs.base import BaseDesign, _resolve_dtype


class GramDesign(BaseDesign):
    """Design backend holding ``G = X.T @ X`` and ``Xy = X.T @ y``.

    Parameters
    ----------
    gram : array-like, shape (n_features, n_features)
        Symmetric Gram matrix.
    xy : array-like, shape (n_features,)
        Correlations of the features with the response.
    n_observations : int
        Number of rows of the underlying design, which bounds the size of
        the active set.
    dtype : {np.float32, np.float64} or None
    """

    def __init__(self, gram: Any, xy: Any, n_observations: int, dtype=None) -> None:
        self.dtype = _resolve_dtype(dtype, np.asarray(gram), np.asarray(xy))
        gram = np.asarray(gram, dtype=self.dtype)
        xy = np.asarray(xy, dtype=self.dtype).ravel()
        if gram.ndim != 2 or gram.shape[0] != gram.shape[1]:
            raise ValueError(f"gram must be square, got shape {gram.shape}.")
        if xy.shape[0] != gram.shape[0]:
            raise ValueError(
                f"xy has {xy.shape[0]} entries, expected {gram.shape[0]}."
            )
        if int(n_observations) < 1:
            raise ValueError(
                f"n_observations must be positive, got {n_observations}."
            )
        self.gram = gram
        self.xy = xy
        self._n_observations = int(n_observations)

    @classmethod
    def from_arrays(cls, X: Any, y: Any, dtype=None) -> "GramDesign":
        X = np.asarray(X)
        if X.ndim != 2:
            raise ValueError(f"X must be 2-D, got {X.ndim}-D array.")
        dtype = _resolve_dtype(dtype, X, np.asarray(y))
        X = X.astype(dtype, copy=False)
        y = np.asarray(y, dtype=dtype).ravel()
        if y.shape[0] != X.shape[0]:
            raise ValueError(
                f"X and y have incompatible shapes: X has {X.shape[0]} rows, "
                f"y has {y.shape[0]} elements."
            )
        return cls(X.T @ X, X.T @ y, n_observations=X.shape[0], dtype=dtype)

    @property
    def n_observations(self) -> int:
        return self._n_observations

    @property
    def n_features(self) -> int:
        return self.gram.shape[0]

    def residual_correlations(self, out: FloatArray) -> FloatArray:
        out[:] = self.xy
        return out

    def column_dot(self, i: int, j: int) -> float:
        return float(self.gram[i, j])

    def direction_correlations(
        self,
        active: Sequence[int],
        direction: FloatArray,
        out: FloatArray,
    ) -> FloatArray:
        out[:] = self.gram[:, active] @ direction
        return out
