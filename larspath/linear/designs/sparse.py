"""Sparse (CSC) design with optional implicit column centering.

Centering a sparse matrix destroys its sparsity, so instead the backend
keeps the raw matrix plus a vector of column offsets ``m`` and answers every
query as if it held ``X - 1 m^T``:

.. math::

    (x_i - m_i 1)^T y        &= x_i^T y - m_i \\sum y \\\\
    (x_i - m_i 1)^T (x_j - m_j 1) &= x_i^T x_j - m_j s_i - m_i s_j + n\\, m_i m_j

where ``s_i`` is the sum of column ``i``.  With ``m`` the column means the
last three terms collapse to ``-n m_i m_j``, but any offset is accepted.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import scipy.sparse as sp

from larspath._typing import FloatArray
from larspath.linear.designs.base import BaseDesign, _resolve_dtype


class SparseDesign(BaseDesign):
    """Design backend over a ``scipy.sparse`` matrix stored column-major.

    Parameters
    ----------
    X : sparse matrix or array-like, shape (n_observations, n_features)
        Converted to CSC with sorted, de-duplicated indices.
    y : array-like, shape (n_observations,)
    X_offset : array-like, shape (n_features,), optional
        Column offsets subtracted implicitly from ``X``.
    dtype : {np.float32, np.float64} or None
    """

    def __init__(self, X: Any, y: Any, X_offset: Any = None, dtype=None) -> None:
        if not sp.issparse(X):
            X = np.asarray(X)
            if X.ndim != 2:
                raise ValueError(f"X must be 2-D, got {X.ndim}-D array.")
        self.dtype = _resolve_dtype(dtype, X, np.asarray(y))
        X = sp.csc_matrix(X, dtype=self.dtype)
        X.sum_duplicates()
        X.sort_indices()
        self.X = X
        self.y = self._check_response(y, X.shape[0])

        if X_offset is None:
            self.X_offset = None
            self._col_sums = None
        else:
            X_offset = np.asarray(X_offset, dtype=self.dtype).ravel()
            if X_offset.shape[0] != X.shape[1]:
                raise ValueError(
                    f"X_offset has {X_offset.shape[0]} entries, "
                    f"expected {X.shape[1]}."
                )
            self.X_offset = X_offset
            self._col_sums = np.asarray(X.sum(axis=0), dtype=self.dtype).ravel()

    @property
    def n_observations(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    def _column(self, j: int):
        start, stop = self.X.indptr[j], self.X.indptr[j + 1]
        return self.X.indices[start:stop], self.X.data[start:stop]

    def residual_correlations(self, out: FloatArray) -> FloatArray:
        out[:] = self.X.T @ self.y
        if self.X_offset is not None:
            out -= self.X_offset * self.y.sum()
        return out

    def column_dot(self, i: int, j: int) -> float:
        rows_i, vals_i = self._column(i)
        rows_j, vals_j = self._column(j)
        _, ii, jj = np.intersect1d(
            rows_i, rows_j, assume_unique=True, return_indices=True
        )
        dot = float(np.dot(vals_i[ii], vals_j[jj]))
        if self.X_offset is not None:
            m, s = self.X_offset, self._col_sums
            dot += float(
                self.n_observations * m[i] * m[j] - m[j] * s[i] - m[i] * s[j]
            )
        return dot

    def direction_correlations(
        self,
        active: Sequence[int],
        direction: FloatArray,
        out: FloatArray,
    ) -> FloatArray:
        active = np.asarray(active, dtype=np.intp)
        u = np.asarray(self.X[:, active] @ direction, dtype=self.dtype).ravel()
        if self.X_offset is not None:
            u -= np.dot(self.X_offset[active], direction)
        out[:] = self.X.T @ u
        if self.X_offset is not None:
            out -= self.X_offset * u.sum()
        return out
