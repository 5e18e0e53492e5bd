"""Incremental Cholesky factorization of the active-feature Gram matrix.

The factor ``L`` (lower triangular, ``G = L @ L.T``) lives in a preallocated
``(max_rank, max_rank)`` buffer.  Adding a feature borders ``L`` with one
row (a forward substitution); removing a feature deletes its row and
restores triangular form with Givens rotations, so neither operation
refactors from scratch.

.. code-block:: text

            ( L   0 )
    L  ->   (       )   where  L @ z = X_A.T @ x_j
            ( z.T d )   and    d = sqrt(x_j.T @ x_j - z.T @ z)

References
----------
.. [1] Golub, G.H. and Van Loan, C.F. (2013). *Matrix Computations*,
       4th ed., §6.5.4 (updating the Cholesky factorization).
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import solve_triangular

from larspath._typing import FloatArray

SOLVE_TRIANGULAR_ARGS = {"check_finite": False}


class CholeskyFactor:
    """Cholesky factor of ``X_A.T @ X_A`` maintained under append/remove.

    Parameters
    ----------
    max_rank : int
        Capacity of the factor, ``min(n_observations, n_features)``.
    dtype : numpy dtype
        Floating-point precision of the factor.
    """

    def __init__(self, max_rank: int, dtype=np.float64) -> None:
        if max_rank < 0:
            raise ValueError(f"max_rank must be non-negative, got {max_rank}.")
        self.max_rank = int(max_rank)
        self.dtype = np.dtype(dtype)
        self._L = np.zeros((self.max_rank, self.max_rank), dtype=self.dtype)
        self._rank = 0
        # smallest relative pivot accepted for a new column
        self._tol = np.finfo(self.dtype).eps ** (2.0 / 3.0)

    @property
    def rank(self) -> int:
        """Number of basis vectors currently factored."""
        return self._rank

    @property
    def factor(self) -> FloatArray:
        """The current lower-triangular factor (a view, do not mutate)."""
        return self._L[: self._rank, : self._rank]

    # ------------------------------------------------------------------
    # Update / downdate
    # ------------------------------------------------------------------

    def append(self, cross: FloatArray) -> bool:
        """Border the factor with one new basis vector.

        Parameters
        ----------
        cross : array-like, shape (rank + 1,)
            Dot products of the new column with every column already in
            the basis (in basis order), followed by its squared norm.

        Returns
        -------
        bool
            ``False`` if the factor is full or the new column is
            numerically dependent on the basis; the factor is unchanged.
        """
        k = self._rank
        cross = np.asarray(cross, dtype=self.dtype)
        if cross.shape != (k + 1,):
            raise ValueError(
                f"cross must have {k + 1} entries for a rank-{k} factor, "
                f"got shape {cross.shape}."
            )
        if k >= self.max_rank:
            return False

        norm2 = cross[k]
        if k:
            z = solve_triangular(
                self._L[:k, :k], cross[:k], lower=True, **SOLVE_TRIANGULAR_ARGS
            )
            pivot = norm2 - np.dot(z, z)
        else:
            z = None
            pivot = norm2

        # pivot is a squared distance to span(X_A); compare relative to |x_j|^2
        if not np.isfinite(pivot) or pivot <= self._tol * abs(norm2):
            return False

        if z is not None:
            self._L[k, :k] = z
        self._L[k, k] = np.sqrt(pivot)
        self._rank = k + 1
        return True

    def remove(self, position: int) -> None:
        """Delete basis vector *position* and re-triangularise the factor."""
        k = self._rank
        if not 0 <= position < k:
            raise IndexError(
                f"position {position} out of range for a rank-{k} factor."
            )
        L = self._L
        # Drop the row; rows below shift up and gain one superdiagonal entry.
        L[position : k - 1, :k] = L[position + 1 : k, :k]
        L[k - 1, :k] = 0.0

        for i in range(position, k - 1):
            a, b = L[i, i], L[i, i + 1]
            r = np.hypot(a, b)
            if r == 0.0:
                continue
            cos, sin = a / r, b / r
            col_i = L[i : k - 1, i].copy()
            col_j = L[i : k - 1, i + 1].copy()
            L[i : k - 1, i] = cos * col_i + sin * col_j
            L[i : k - 1, i + 1] = cos * col_j - sin * col_i
            L[i, i + 1] = 0.0

        L[:k, k - 1] = 0.0
        self._rank = k - 1

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self, rhs: FloatArray, out: FloatArray | None = None) -> FloatArray:
        """Solve ``L @ L.T @ x = rhs`` for the current basis.

        Parameters
        ----------
        rhs : array-like, shape (rank,)
        out : ndarray, shape (rank,), optional
            Destination; may alias *rhs* for an in-place solve.

        Returns
        -------
        ndarray, shape (rank,)
        """
        k = self._rank
        rhs = np.asarray(rhs, dtype=self.dtype)
        if rhs.shape != (k,):
            raise ValueError(
                f"rhs must have shape ({k},), got {rhs.shape}."
            )
        if k == 0:
            result = np.zeros(0, dtype=self.dtype)
        else:
            L = self._L[:k, :k]
            z = solve_triangular(L, rhs, lower=True, **SOLVE_TRIANGULAR_ARGS)
            result = solve_triangular(
                L, z, lower=True, trans="T", **SOLVE_TRIANGULAR_ARGS
            )
        if out is None:
            return result.astype(self.dtype, copy=False)
        out[:] = result
        return out
