"""Path driver: run a :class:`LarsEngine` to convergence and record breakpoints.

.. code-block:: python

    from larspath import lars_path
    result = lars_path(X, y, method="lasso")
    result.alphas        # regularization level at each breakpoint
    result.coefs         # (n_features, n_breakpoints) coefficient path
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from larspath._typing import FloatArray
from larspath.linear._engine import LarsEngine, Mode
from larspath.linear.designs import BaseDesign, get_design

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathResult:
    """Breakpoints of a LARS / LASSO path.

    Parameters
    ----------
    alphas : FloatArray
        ``max_j |x_j.T (y - X beta)| / n_observations`` at each breakpoint,
        shape ``(n_breakpoints,)``.  The first entry is the empty model.
    coefs : FloatArray
        Dense coefficients at each breakpoint, shape
        ``(n_features, n_breakpoints)``.
    active : list of int
        Active features at the end of the path, in the order they entered.
    n_iter : int
        Number of successful ``iterate()`` calls.
    converged : bool
        ``False`` if ``max_steps`` cut the path short.
    method : str
        The engine mode that produced the path.
    """

    alphas: FloatArray
    coefs: FloatArray
    active: List[int] = field(default_factory=list)
    n_iter: int = 0
    converged: bool = True
    method: str = Mode.LAR.value


def _default_max_steps(design: BaseDesign) -> int:
    return 8 * max(1, min(design.n_observations, design.n_features))


def compute_path(
    design: BaseDesign,
    method="lar",
    max_steps: Optional[int] = None,
) -> PathResult:
    """Compute the full path for an existing design backend.

    Parameters
    ----------
    design : BaseDesign
    method : {"lar", "lasso", "positive_lasso"}
    max_steps : int or None
        Upper bound on ``iterate()`` calls.  ``None`` means
        ``8 * min(n_observations, n_features)``.

    Returns
    -------
    PathResult
    """
    if max_steps is None:
        max_steps = _default_max_steps(design)
    elif max_steps < 0:
        raise ValueError(f"max_steps must be non-negative, got {max_steps}.")

    engine = LarsEngine(design, mode=method)
    n = max(design.n_observations, 1)

    alphas = [engine.max_correlation() / n]
    coefs = [engine.coef()]
    converged = False
    while True:
        if engine.n_iter >= max_steps:
            break
        if not engine.iterate():
            converged = True
            break
        alphas.append(engine.max_correlation() / n)
        coefs.append(engine.coef())

    if not converged:
        # the step cap may coincide with the last breakpoint
        converged = engine.n_active >= engine.n_features
    if not converged:
        warnings.warn(
            f"LARS path stopped after max_steps={max_steps} iterations "
            f"with {engine.n_active} active features.",
            ConvergenceWarning,
            stacklevel=2,
        )

    logger.debug(
        "%s path: %d breakpoints, %d active", engine.mode.value,
        len(alphas), engine.n_active,
    )
    return PathResult(
        alphas=np.asarray(alphas, dtype=engine.dtype),
        coefs=np.column_stack(coefs),
        active=[int(f) for f in engine.active_set.features],
        n_iter=engine.n_iter,
        converged=converged,
        method=engine.mode.value,
    )


def lars_path(
    X: Any,
    y: Any,
    method="lar",
    design: str = "dense",
    max_steps: Optional[int] = None,
    dtype=None,
) -> PathResult:
    """Compute the LARS or LASSO path of ``y`` regressed on ``X``.

    No intercept is fitted; center the data first if one is wanted (or use
    :class:`~larspath.LarsRegressor`).

    Parameters
    ----------
    X : array-like or sparse matrix, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    method : {"lar", "lasso", "positive_lasso"}
    design : str
        Backend name, see :func:`~larspath.linear.designs.list_designs`.
    max_steps : int or None
        Upper bound on the number of breakpoints.
    dtype : {np.float32, np.float64} or None
        Precision of the computation.

    Returns
    -------
    PathResult

    Examples
    --------
    >>> from larspath import lars_path
    >>> from larspath.datasets import make_orthogonal_regression
    >>> data = make_orthogonal_regression()
    >>> result = lars_path(data.data, data.target)
    >>> result.active[0]
    2
    """
    backend = get_design(design, X, y, dtype=dtype)
    return compute_path(backend, method=method, max_steps=max_steps)
