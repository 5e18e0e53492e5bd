"""Evaluate a piecewise-linear coefficient path at a regularization level."""

from __future__ import annotations

import numpy as np


def interpolate_coefficients(
    alphas: np.ndarray,
    coefs: np.ndarray,
    alpha: float,
) -> np.ndarray:
    """Coefficients of a LARS / LASSO path at regularization level *alpha*.

    Between two breakpoints the path is linear in ``alpha``, so each
    coefficient is interpolated with :func:`numpy.interp` over the
    breakpoints in increasing order of ``alpha``.

    Parameters
    ----------
    alphas : ndarray, shape (n_breakpoints,)
        Non-increasing regularization levels of the breakpoints.
    coefs : ndarray, shape (n_features, n_breakpoints)
        Coefficients at each breakpoint.
    alpha : float
        Target level.  Levels above ``alphas[0]`` give the first column,
        levels below ``alphas[-1]`` give the last.

    Returns
    -------
    ndarray, shape (n_features,)
    """
    alphas = np.asarray(alphas)
    coefs = np.asarray(coefs)
    if alphas.ndim != 1 or alphas.size == 0:
        raise ValueError("alphas must be a non-empty 1-D array.")
    if coefs.ndim != 2 or coefs.shape[1] != alphas.size:
        raise ValueError(
            f"coefs must have shape (n_features, {alphas.size}), "
            f"got {coefs.shape}."
        )

    # np.interp wants increasing abscissae and clamps outside the range
    xp = alphas[::-1]
    return np.array(
        [np.interp(alpha, xp, row[::-1]) for row in coefs], dtype=coefs.dtype
    )
