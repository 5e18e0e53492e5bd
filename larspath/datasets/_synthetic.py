"""Synthetic regression problems with known LARS / LASSO paths."""

from __future__ import annotations

import numpy as np
from sklearn.utils import Bunch, check_random_state


def make_orthogonal_regression() -> Bunch:
    """Four mutually orthogonal features, response tied to feature 2 only.

    The columns have disjoint supports, so every cross product is exactly
    zero and the LARS path activates feature 2 alone before jumping to its
    least-squares coefficient ``13 / 6``.

    Returns
    -------
    sklearn.utils.Bunch
        Dictionary-like with keys:

        - ``data`` : ndarray, shape (10, 4)
        - ``target`` : ndarray, shape (10,)
        - ``coef`` : ndarray, shape (4,), least-squares coefficients
        - ``DESCR`` : str
    """
    X = np.zeros((10, 4))
    X[0:2, 0] = [1.0, -1.0]
    X[2:5, 1] = [2.0, 1.0, 1.0]
    X[5:8, 2] = [1.0, 2.0, 1.0]
    X[8:10, 3] = [1.0, 3.0]
    y = np.zeros(10)
    y[5:8] = [2.0, 5.0, 1.0]

    return Bunch(
        data=X,
        target=y,
        coef=np.array([0.0, 0.0, 13.0 / 6.0, 0.0]),
        DESCR=(
            "Ten observations of four orthogonal features with disjoint "
            "supports.  The response lies on the support of feature 2 only, "
            "so it is the single feature with non-zero correlation."
        ),
    )


def make_sign_flip_regression() -> Bunch:
    """Three features where the first to enter has a negative OLS coefficient.

    With ``e1, e2, e3`` the standard basis of R^3::

        x0 = (e1 + e2) / sqrt(2) + 0.5 e3,   x1 = e1,   x2 = e2
        y  = e1 + e2 - 0.1 e3

    ``x0`` has the largest correlation with ``y`` (positive) but its
    least-squares coefficient is ``-0.2``, so the LASSO path must drop it
    before the end and let it re-enter with the opposite sign.  ``x1`` and
    ``x2`` are exactly tied throughout.

    Returns
    -------
    sklearn.utils.Bunch
        Keys ``data`` (3, 3), ``target`` (3,), ``coef`` (3,), ``DESCR``.
    """
    s = 1.0 / np.sqrt(2.0)
    X = np.array([
        [s, 1.0, 0.0],
        [s, 0.0, 1.0],
        [0.5, 0.0, 0.0],
    ])
    y = np.array([1.0, 1.0, -0.1])
    coef = np.linalg.solve(X, y)

    return Bunch(
        data=X,
        target=y,
        coef=coef,
        DESCR=(
            "Three features whose most correlated member has a negative "
            "least-squares coefficient; the LASSO path drops it once."
        ),
    )


def make_correlated_regression(
    n_samples: int = 100,
    n_features: int = 10,
    n_informative: int = 3,
    rho: float = 0.5,
    noise: float = 0.1,
    random_state=None,
) -> Bunch:
    """Gaussian design with equicorrelated features and a sparse truth.

    Parameters
    ----------
    n_samples, n_features : int
    n_informative : int
        Number of leading features with a non-zero true coefficient.
    rho : float
        Pairwise correlation of the features, in ``[0, 1)``.
    noise : float
        Standard deviation of the additive Gaussian noise.
    random_state : int, RandomState instance or None

    Returns
    -------
    sklearn.utils.Bunch
        Keys ``data``, ``target``, ``coef`` (true coefficients), ``DESCR``.
    """
    if not 0 <= rho < 1:
        raise ValueError(f"rho must be in [0, 1), got {rho}.")
    if not 0 <= n_informative <= n_features:
        raise ValueError(
            f"n_informative must be in [0, {n_features}], got {n_informative}."
        )
    rng = check_random_state(random_state)

    shared = rng.standard_normal((n_samples, 1))
    X = np.sqrt(rho) * shared + np.sqrt(1.0 - rho) * rng.standard_normal(
        (n_samples, n_features)
    )
    coef = np.zeros(n_features)
    coef[:n_informative] = rng.uniform(1.0, 3.0, n_informative) * rng.choice(
        [-1.0, 1.0], n_informative
    )
    y = X @ coef + noise * rng.standard_normal(n_samples)

    return Bunch(
        data=X,
        target=y,
        coef=coef,
        DESCR=(
            f"{n_samples} Gaussian observations of {n_features} features with "
            f"pairwise correlation {rho}; the first {n_informative} features "
            "carry the signal."
        ),
    )
