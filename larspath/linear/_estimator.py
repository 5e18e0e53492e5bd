"""Sklearn-compatible LARS / LASSO regressor.

.. code-block:: python

    from larspath import LarsRegressor
    model = LarsRegressor(method="lasso", alpha=0.05)
    model.fit(X, y)
    y_hat = model.predict(X_new)

The whole path is computed once in ``fit`` and kept on the estimator
(``alphas_``, ``coef_path_``); ``coef_`` is the path evaluated at
``alpha``.  ``alpha`` is a user-supplied level on the same scale as
``alphas_`` (``max |X^T r| / n_samples``); it is never chosen
automatically.

Notes
-----
1. **Mixin order** – ``RegressorMixin`` before ``BaseEstimator``, as
   sklearn's ``check_mixin_order`` requires.
2. **Intercept** – with ``fit_intercept=True`` dense data is centered
   explicitly; sparse data is centered implicitly through
   :class:`~larspath.linear.designs.SparseDesign` column offsets so the
   matrix stays sparse.
3. **Precision** – float32 input stays float32 through the whole path.
"""

from __future__ import annotations

import warnings
from typing import Optional

import numpy as np
import scipy.sparse as sp
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.extmath import safe_sparse_dot
from sklearn.utils.validation import check_is_fitted, validate_data

from larspath.linear._engine import Mode
from larspath.linear._path import compute_path
from larspath.linear.designs import get_design
from larspath.util.interpolation import interpolate_coefficients


class LarsRegressor(RegressorMixin, BaseEstimator):
    """Least Angle Regression / LASSO-LARS with an sklearn interface.

    Parameters
    ----------
    method : {"lar", "lasso", "positive_lasso"}, default="lar"
        Path variant.  ``"lasso"`` drops a feature whose coefficient
        reaches zero.  ``"positive_lasso"`` currently behaves like
        ``"lar"``.
    alpha : float, default=0.0
        Regularization level at which ``coef_`` is read off the path.
        ``0`` gives the end of the path.
    fit_intercept : bool, default=True
        Whether to center the data and fit an intercept.
    design : str or None, default=None
        Inner-product backend: ``"dense"``, ``"sparse"`` or ``"gram"``.
        ``None`` picks ``"sparse"`` for sparse input and ``"dense"``
        otherwise.  Sparse input is always read through ``"sparse"``; any
        other explicit choice triggers a ``UserWarning``.
    max_steps : int or None, default=None
        Upper bound on the number of path iterations.

    Attributes
    ----------
    coef_ : ndarray, shape (n_features,)
        Coefficients at ``alpha``.
    intercept_ : float
        Intercept.  Zero when ``fit_intercept=False``.
    alphas_ : ndarray, shape (n_breakpoints,)
        Regularization level at each breakpoint.
    coef_path_ : ndarray, shape (n_features, n_breakpoints)
        Coefficients at each breakpoint.
    active_ : list of int
        Active features at the end of the path.
    n_iter_ : int
        Number of path iterations.
    path_result_ : PathResult
        Full path output.
    n_features_in_ : int
        Number of features seen during ``fit``.

    Examples
    --------
    >>> import numpy as np
    >>> from larspath import LarsRegressor
    >>> X = np.random.randn(100, 5)
    >>> y = X @ [1, 0, 0, 2, 0] + 0.1 * np.random.randn(100)
    >>> model = LarsRegressor(method="lasso", alpha=0.1).fit(X, y)
    >>> model.coef_  # doctest: +SKIP
    array([...])
    """

    def __init__(
        self,
        method: str = "lar",
        alpha: float = 0.0,
        fit_intercept: bool = True,
        design: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        self.method = method
        self.alpha = alpha
        self.fit_intercept = fit_intercept
        self.design = design
        self.max_steps = max_steps

    # ──────────────────────────────────────────────────────────────────
    # fit / predict
    # ──────────────────────────────────────────────────────────────────

    def fit(self, X, y):
        """Compute the path and read the coefficients off at ``alpha``.

        Parameters
        ----------
        X : array-like or sparse matrix, shape (n_samples, n_features)
        y : array-like, shape (n_samples,)

        Returns
        -------
        self
        """
        Mode.parse(self.method)
        if self.alpha < 0:
            raise ValueError(f"alpha must be non-negative, got {self.alpha}.")

        X, y = validate_data(
            self, X, y,
            accept_sparse="csc",
            y_numeric=True,
            dtype=[np.float64, np.float32],
        )
        y = y.astype(X.dtype, copy=False)

        if sp.issparse(X):
            if self.design not in (None, "sparse"):
                warnings.warn(
                    f"design={self.design!r} ignored for sparse input; "
                    "using the \"sparse\" design.",
                    UserWarning,
                    stacklevel=2,
                )
            X_offset = np.asarray(X.mean(axis=0)).ravel() if self.fit_intercept else None
            y_offset = y.mean() if self.fit_intercept else 0.0
            backend = get_design(
                "sparse", X, y - y_offset, X_offset=X_offset, dtype=X.dtype
            )
        else:
            if self.fit_intercept:
                X_offset = X.mean(axis=0)
                y_offset = y.mean()
                X = X - X_offset
                y = y - y_offset
            else:
                X_offset, y_offset = None, 0.0
            backend = get_design(self.design or "dense", X, y, dtype=X.dtype)

        result = compute_path(backend, method=self.method, max_steps=self.max_steps)

        self.path_result_ = result
        self.alphas_ = result.alphas
        self.coef_path_ = result.coefs
        self.active_ = list(result.active)
        self.n_iter_ = result.n_iter
        self.coef_ = interpolate_coefficients(result.alphas, result.coefs, self.alpha)
        if X_offset is not None:
            self.intercept_ = float(y_offset - np.dot(X_offset, self.coef_))
        else:
            self.intercept_ = 0.0
        return self

    def predict(self, X):
        """Predict using the fitted path at ``alpha``.

        Parameters
        ----------
        X : array-like or sparse matrix, shape (n_samples, n_features)

        Returns
        -------
        ndarray, shape (n_samples,)
        """
        check_is_fitted(self)
        X = validate_data(
            self, X, accept_sparse="csc", dtype=[np.float64, np.float32], reset=False
        )
        return safe_sparse_dot(X, self.coef_) + self.intercept_

    # ──────────────────────────────────────────────────────────────────
    # sklearn tags
    # ──────────────────────────────────────────────────────────────────

    def __sklearn_tags__(self):
        tags = super().__sklearn_tags__()
        # CSC input goes through the sparse design backend.
        tags.input_tags.sparse = True
        return tags

    # score() is inherited from RegressorMixin (returns R²).
