"""larspath: Least Angle Regression and LASSO solution paths for Python.

Provides an incremental LARS engine that advances the regularization path
one breakpoint at a time, a path driver returning every breakpoint, and an
sklearn-compatible :class:`LarsRegressor`.

Quick start::

    from larspath import lars_path, LarsRegressor
    path = lars_path(X, y, method="lasso")
    model = LarsRegressor(method="lasso", alpha=0.1).fit(X, y)
    y_pred = model.predict(X_test)
"""

__version__ = "0.1.0"

from larspath.datasets import make_orthogonal_regression
from larspath.linear._engine import LarsEngine, Mode
from larspath.linear._estimator import LarsRegressor
from larspath.linear._path import PathResult, compute_path, lars_path
from larspath.linear.designs import (
    BaseDesign,
    get_design,
    list_designs,
    register_design,
)
from larspath.util.interpolation import interpolate_coefficients

__all__ = [
    "LarsEngine",
    "Mode",
    "LarsRegressor",
    "PathResult",
    "compute_path",
    "lars_path",
    "BaseDesign",
    "get_design",
    "list_designs",
    "register_design",
    "interpolate_coefficients",
    "make_orthogonal_regression",
]
