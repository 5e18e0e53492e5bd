"""Abstract base class for design-matrix backends.

The LARS engine never touches the design matrix directly.  It asks a
backend for the problem dimensions and for three kinds of inner products
(feature/response, feature/feature and feature/direction), so the storage
layout is the backend's business.  The engine *holds* a backend; it is
never subclassed per storage format.

Design principles
-----------------
* **Single Responsibility**: a backend only answers inner-product queries.
* **Open / Closed**: new storage formats are added by subclassing and
  registering; the engine is never modified.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from larspath._typing import FloatArray

_FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def _resolve_dtype(dtype, *arrays) -> np.dtype:
    """Pick the scalar type: explicit *dtype*, else float32 if every input
    is float32, else float64."""
    if dtype is not None:
        dtype = np.dtype(dtype)
        if dtype not in _FLOAT_DTYPES:
            raise TypeError(f"dtype must be float32 or float64, got {dtype}.")
        return dtype
    if arrays and all(getattr(a, "dtype", None) == np.float32 for a in arrays):
        return np.dtype(np.float32)
    return np.dtype(np.float64)


class BaseDesign(ABC):
    """Inner-product capability set over a design matrix and response.

    Subclasses **must** provide the two dimensions, :attr:`dtype` and the
    three correlation queries.  They **may** override :meth:`from_arrays`
    when they are not constructed from ``(X, y)`` directly.
    """

    dtype: np.dtype

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def n_observations(self) -> int:
        """Number of rows of the design matrix."""

    @property
    @abstractmethod
    def n_features(self) -> int:
        """Number of columns of the design matrix."""

    # ------------------------------------------------------------------
    # Correlation queries
    # ------------------------------------------------------------------

    @abstractmethod
    def residual_correlations(self, out: FloatArray) -> FloatArray:
        """Fill ``out[j] = x_j @ y`` for every feature and return *out*."""

    @abstractmethod
    def column_dot(self, i: int, j: int) -> float:
        """Return ``x_i @ x_j``."""

    @abstractmethod
    def direction_correlations(
        self,
        active: Sequence[int],
        direction: FloatArray,
        out: FloatArray,
    ) -> FloatArray:
        """Fill ``out[j] = x_j @ (X[:, active] @ direction)`` and return *out*."""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_arrays(cls, X: Any, y: Any, **kwargs: Any) -> "BaseDesign":
        """Build the backend from a design matrix and a response."""
        return cls(X, y, **kwargs)

    def _check_response(self, y: Any, n: int) -> np.ndarray:
        y = np.asarray(y, dtype=self.dtype)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()
        if y.ndim != 1:
            raise ValueError(f"y must be 1-D, got {y.ndim}-D array.")
        if y.shape[0] != n:
            raise ValueError(
                f"X and y have incompatible shapes: X has {n} rows, "
                f"y has {y.shape[0]} elements."
            )
        return y

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_observations={self.n_observations}, "
            f"n_features={self.n_features}, dtype={self.dtype.name})"
        )
