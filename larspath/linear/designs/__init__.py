"""Named design backends.

The path driver and the estimator pick a backend by name (``"dense"``,
``"sparse"`` or ``"gram"``) and build it from ``(X, y)`` through
:func:`get_design`.  Third-party storage formats subclass
:class:`BaseDesign` and become available by name after
:func:`register_design`.

>>> from larspath.linear.designs import get_design, list_designs
>>> list_designs()
['dense', 'gram', 'sparse']
>>> get_design("gram", X, y).n_features  # doctest: +SKIP
"""

from __future__ import annotations

from typing import Any

from larspath.linear.designs.base import BaseDesign
from larspath.linear.designs.dense import DenseDesign
from larspath.linear.designs.gram import GramDesign
from larspath.linear.designs.sparse import SparseDesign

__all__ = [
    "BaseDesign",
    "DenseDesign",
    "SparseDesign",
    "GramDesign",
    "get_design",
    "register_design",
    "list_designs",
]


# backend name -> BaseDesign subclass
_REGISTRY: dict[str, type[BaseDesign]] = {}


def register_design(name: str, cls: type[BaseDesign]) -> None:
    """Make *cls* available to :func:`get_design` as *name*.

    An existing entry under the same name is replaced.  Raises
    ``TypeError`` unless *cls* is a :class:`BaseDesign` subclass.
    """
    if not (isinstance(cls, type) and issubclass(cls, BaseDesign)):
        raise TypeError(f"{cls!r} is not a BaseDesign subclass.")
    _REGISTRY[name] = cls


def get_design(name: str, X: Any, y: Any, **kwargs: Any) -> BaseDesign:
    """Construct the *name* backend over design matrix *X* and response *y*.

    Extra keyword arguments (``dtype``, ``X_offset`` for the sparse
    backend) go to the backend's ``from_arrays``.  An unknown name raises
    ``KeyError`` listing the registered ones.
    """
    try:
        cls = _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise KeyError(
            f"Unknown design {name!r}; registered: {available}"
        ) from None
    return cls.from_arrays(X, y, **kwargs)


def list_designs() -> list[str]:
    """Sorted backend names."""
    return sorted(_REGISTRY)


for _name, _cls in (
    ("dense", DenseDesign),
    ("sparse", SparseDesign),
    ("gram", GramDesign),
):
    register_design(_name, _cls)
del _name, _cls
