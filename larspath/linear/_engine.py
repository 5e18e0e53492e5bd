"""Least Angle Regression engine (LAR and LASSO modes).

One call to :meth:`LarsEngine.iterate` advances the coefficient path by one
breakpoint: features tied for the largest absolute residual correlation
join the active set, the equiangular direction is solved through an
incrementally updated Cholesky factor, and the path moves until an
inactive feature catches up with the active ones (or, in LASSO mode, until
an active coefficient reaches zero and is dropped).

The engine is a state machine that is never reset::

    Initialized --iterate()--> Iterating --iterate() is False--> Converged

Nothing in the algorithm raises: activation, removal, active-set growth
and ``iterate`` all report failure through their boolean return value.

References
----------
.. [1] Efron, B., Hastie, T., Johnstone, I. and Tibshirani, R. (2004).
       "Least angle regression." *Annals of Statistics* 32(2): 407–499.
"""

from __future__ import annotations

import logging
import warnings
from enum import Enum
from typing import List, Optional

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from larspath._typing import Basis, FloatArray, PathEntry
from larspath.linear._active_set import ActiveSet
from larspath.linear._cholesky import CholeskyFactor
from larspath.linear.designs.base import BaseDesign

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Path variant, fixed for the lifetime of an engine."""

    LAR = "lar"
    LASSO = "lasso"
    POSITIVE_LASSO = "positive_lasso"

    @classmethod
    def parse(cls, value) -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown mode {value!r}. Expected one of: {choices}"
            ) from None


class LarsEngine:
    """Incremental LARS / LASSO path solver over a design backend.

    Parameters
    ----------
    design : BaseDesign
        Source of every inner product the algorithm needs.  Its ``dtype``
        fixes the precision of all engine state.
    mode : Mode or str
        ``"lar"``, ``"lasso"`` or ``"positive_lasso"``.

    Notes
    -----
    ``"positive_lasso"`` is accepted but currently produces the LAR path:
    no non-negativity constraint is enforced and coefficients are never
    dropped.  A ``UserWarning`` is issued at construction.

    Examples
    --------
    >>> from larspath.linear import LarsEngine
    >>> from larspath.linear.designs import DenseDesign
    >>> engine = LarsEngine(DenseDesign(X, y), mode="lasso")
    >>> while engine.iterate():
    ...     print(engine.get_parameters())
    """

    def __init__(self, design: BaseDesign, mode="lar") -> None:
        if not isinstance(design, BaseDesign):
            raise TypeError(f"{design!r} is not a BaseDesign instance.")
        self.design = design
        self.mode = Mode.parse(mode)
        if self.mode is Mode.POSITIVE_LASSO:
            warnings.warn(
                "mode='positive_lasso' follows the LAR path; non-negativity "
                "of the coefficients is not enforced.",
                UserWarning,
                stacklevel=2,
            )

        self.dtype = np.dtype(design.dtype)
        self.n_observations = design.n_observations
        self.n_features = design.n_features
        self.max_rank = min(self.n_observations, self.n_features)

        self._eps = np.finfo(self.dtype).eps
        self._step_tol = self._eps ** (2.0 / 3.0)

        self._active = ActiveSet(self.n_features, self.max_rank, self.dtype)
        self._chol = CholeskyFactor(self.max_rank, self.dtype)
        self._w = np.zeros(self.max_rank, dtype=self.dtype)
        self._c = np.zeros(self.n_features, dtype=self.dtype)
        self._a = np.zeros(self.n_features, dtype=self.dtype)
        self._xty = np.zeros(self.n_features, dtype=self.dtype)
        self._recently_deactivated = False
        self.n_iter = 0
        self.last_step: Optional[float] = None

        self._initialize()

    def _initialize(self) -> None:
        self.design.residual_correlations(self._c)
        self._xty[:] = self._c

    # ──────────────────────────────────────────────────────────────────
    # State queries
    # ──────────────────────────────────────────────────────────────────

    @property
    def active_set(self) -> ActiveSet:
        return self._active

    @property
    def n_active(self) -> int:
        return len(self._active)

    @property
    def correlations(self) -> FloatArray:
        """Residual correlations ``X.T @ (y - X @ beta)`` (a copy)."""
        return self._c.copy()

    @property
    def direction_correlations(self) -> FloatArray:
        """Correlations of every feature with the last step direction (a copy)."""
        return self._a.copy()

    @property
    def direction(self) -> FloatArray:
        """Last step direction, aligned with the coefficient path (a copy)."""
        return self._w[: len(self._active)].copy()

    def max_correlation(self) -> float:
        """Largest absolute residual correlation over all features."""
        if self.n_features == 0:
            return 0.0
        return float(np.max(np.abs(self._c)))

    def coef(self) -> FloatArray:
        """Current coefficients as a dense ``(n_features,)`` vector."""
        out = np.zeros(self.n_features, dtype=self.dtype)
        out[self._active.features] = self._active.coefs
        return out

    # ──────────────────────────────────────────────────────────────────
    # Active-set tracker
    # ──────────────────────────────────────────────────────────────────

    def is_active(self, feature: int) -> bool:
        return self._active.is_active(feature)

    def activate(self, feature: int) -> bool:
        """Add *feature* to the active set with a zero coefficient.

        Returns ``False`` without changing anything when the feature is
        already active, when the active set already holds as many features
        as there are observations, or when the feature's column is
        numerically dependent on the active columns.
        """
        if self._active.is_active(feature):
            return False
        if len(self._active) >= self.n_observations:
            return False

        features = self._active.features
        cross = np.empty(len(features) + 1, dtype=self.dtype)
        for k, other in enumerate(features):
            cross[k] = self.design.column_dot(feature, int(other))
        cross[-1] = self.design.column_dot(feature, feature)

        if not self._chol.append(cross):
            warnings.warn(
                f"Feature {feature} is numerically dependent on the "
                f"{len(features)} active features; the path stops here.",
                ConvergenceWarning,
                stacklevel=2,
            )
            return False

        pos = self._active.append(feature, 0.0)
        self._w[pos] = 0.0
        logger.debug("activated feature %d at position %d", feature, pos)
        return True

    def deactivate(self, feature: int) -> bool:
        """Remove *feature* from the active set; ``False`` if it was inactive."""
        pos = self._active.position(feature)
        if pos is None:
            return False
        k = len(self._active)
        self._active.remove(feature)
        self._w[pos : k - 1] = self._w[pos + 1 : k]
        self._w[k - 1] = 0.0
        self._chol.remove(pos)
        self._recently_deactivated = True
        logger.debug("deactivated feature %d from position %d", feature, pos)
        return True

    def update_active_set(self) -> bool:
        """Activate every inactive feature tied for the largest |correlation|.

        Returns
        -------
        bool
            ``True`` if the active set changed (or just shrank, in which
            case it is not regrown in the same pass); ``False`` if nothing
            qualified or an activation failed.
        """
        if self._recently_deactivated:
            self._recently_deactivated = False
            return True

        inactive = self._active.inactive_features()
        if inactive.size == 0:
            return False
        abs_c = np.abs(self._c[inactive])
        C = abs_c.max()
        ties = inactive[np.abs(abs_c - C) < self._eps]

        for feature in ties:
            if not self.activate(int(feature)):
                return False
        return ties.size > 0

    # ──────────────────────────────────────────────────────────────────
    # Search direction
    # ──────────────────────────────────────────────────────────────────

    def find_search_direction(self) -> None:
        """Solve ``(X_A.T X_A) w = c_A`` and refresh the direction correlations."""
        features = self._active.features
        w = self._w[: len(features)]
        w[:] = self._c[features]
        self._chol.solve(w, out=w)
        self.design.direction_correlations(features, w, self._a)

    # ──────────────────────────────────────────────────────────────────
    # Step controller
    # ──────────────────────────────────────────────────────────────────

    def _smallest_eligible(self, candidates: FloatArray) -> float:
        eligible = candidates[np.isfinite(candidates) & (candidates > self._step_tol)]
        if eligible.size == 0:
            return np.inf
        return float(eligible.min())

    def take_step(self) -> float:
        """Move along the current direction to the next breakpoint.

        Returns
        -------
        float
            The step length, in ``(0, 1]``.
        """
        features = self._active.features
        beta = self._active.coefs
        w = self._w[: len(features)]
        step = 1.0

        # Next inactive feature to reach the active correlation level.
        inactive = self._active.inactive_features()
        if inactive.size and features.size:
            ref = features[0]
            C, A = self._c[ref], self._a[ref]
            c_in, a_in = self._c[inactive], self._a[inactive]
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                candidates = np.concatenate(
                    [(C - c_in) / (A - a_in), (C + c_in) / (A + a_in)]
                )
            step = min(step, self._smallest_eligible(candidates))

        drop_pos = None
        if self.mode is Mode.LASSO and features.size:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                crossings = -beta / w
            eligible = np.isfinite(crossings) & (crossings > self._step_tol)
            if eligible.any():
                idx = np.flatnonzero(eligible)
                pos = int(idx[np.argmin(crossings[idx])])
                if crossings[pos] < step:
                    step = float(crossings[pos])
                    drop_pos = pos

        step = self.dtype.type(step)
        beta += step * w
        self._c -= step * self._a
        self.last_step = float(step)

        if drop_pos is not None:
            feature = int(features[drop_pos])
            beta[drop_pos] = 0.0
            self.deactivate(feature)
            logger.debug("feature %d crossed zero at step %.6g", feature, step)
        return self.last_step

    # ──────────────────────────────────────────────────────────────────
    # Engine
    # ──────────────────────────────────────────────────────────────────

    def iterate(self) -> bool:
        """Advance the path by one breakpoint.

        Returns
        -------
        bool
            ``False`` once the path has converged: every feature is active,
            no feature can be added, or degrees of freedom are exhausted.
        """
        if len(self._active) >= self.n_features:
            return False
        if not self.update_active_set():
            return False
        self.find_search_direction()
        self.take_step()
        self.n_iter += 1
        logger.debug(
            "iteration %d: %d active, step %.6g",
            self.n_iter, len(self._active), self.last_step,
        )
        return True

    def get_parameters(self, basis: Optional[Basis] = None) -> List[PathEntry]:
        """Return coefficients as ``(feature, value)`` pairs.

        Parameters
        ----------
        basis : sequence of int or (int, float) pairs, optional
            When omitted, the current (regularized) path entry is returned
            in insertion order.  When given, the unconstrained
            least-squares fit restricted to exactly these features is
            returned, solved with the current factorization.  The caller
            must pass the features the factorization currently holds, in
            the same order; otherwise the result is meaningless.

        Returns
        -------
        list of (int, float)
        """
        if basis is None:
            return self._active.items()
        features = [
            int(entry[0]) if isinstance(entry, (tuple, list)) else int(entry)
            for entry in basis
        ]
        solution = self._chol.solve(self._xty[features])
        return [(f, float(v)) for f, v in zip(features, solution)]

    def __repr__(self) -> str:
        return (
            f"LarsEngine(mode={self.mode.value!r}, n_active={self.n_active}, "
            f"n_iter={self.n_iter}, design={self.design!r})"
        )
