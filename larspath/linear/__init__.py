"""Linear path-following subpackage.

Contains the :class:`LarsEngine` state machine, its collaborators (active
set, incremental Cholesky factor, design backends), the path driver and
the :class:`LarsRegressor` estimator.
"""

from larspath.linear._active_set import ActiveSet
from larspath.linear._cholesky import CholeskyFactor
from larspath.linear._engine import LarsEngine, Mode
from larspath.linear._estimator import LarsRegressor
from larspath.linear._path import PathResult, compute_path, lars_path
from larspath.linear.designs import (
    BaseDesign,
    DenseDesign,
    GramDesign,
    SparseDesign,
    get_design,
    list_designs,
    register_design,
)

__all__ = [
    "ActiveSet",
    "CholeskyFactor",
    "LarsEngine",
    "Mode",
    "LarsRegressor",
    "PathResult",
    "compute_path",
    "lars_path",
    "BaseDesign",
    "DenseDesign",
    "SparseDesign",
    "GramDesign",
    "get_design",
    "list_designs",
    "register_design",
]
