"""Bookkeeping for the features currently holding a coefficient.

``ActiveSet`` keeps the coefficient path ``beta`` as two parallel arrays
(feature index, coefficient) in insertion order, and a position map of
length ``n_features`` whose entry is the feature's position in ``beta`` or
``-1`` when the feature is inactive.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np

from larspath._typing import FloatArray, IntArray, PathEntry

INACTIVE = -1


class ActiveSet:
    """Ordered active features and their coefficients.

    Parameters
    ----------
    n_features : int
        Size of the position map.
    capacity : int
        Maximum number of simultaneously active features.
    dtype : numpy dtype
        Precision of the stored coefficients.
    """

    def __init__(self, n_features: int, capacity: int, dtype=np.float64) -> None:
        self.n_features = int(n_features)
        self.capacity = int(capacity)
        self._positions = np.full(self.n_features, INACTIVE, dtype=np.intp)
        self._features = np.zeros(self.capacity, dtype=np.intp)
        self._coefs = np.zeros(self.capacity, dtype=dtype)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self.items())

    def __repr__(self) -> str:
        return f"ActiveSet({self.items()!r})"

    @property
    def features(self) -> IntArray:
        """Active feature indices in insertion order (a view)."""
        return self._features[: self._size]

    @property
    def coefs(self) -> FloatArray:
        """Coefficients aligned with :attr:`features` (a writable view)."""
        return self._coefs[: self._size]

    def is_active(self, feature: int) -> bool:
        return self._positions[feature] != INACTIVE

    def position(self, feature: int) -> Optional[int]:
        """Position of *feature* in the path, or ``None`` if inactive."""
        pos = self._positions[feature]
        return None if pos == INACTIVE else int(pos)

    def is_full(self) -> bool:
        return self._size >= self.capacity

    def inactive_features(self) -> IntArray:
        """Indices of every feature not in the path, ascending."""
        return np.flatnonzero(self._positions == INACTIVE)

    def items(self) -> List[PathEntry]:
        """The path as ``(feature, coefficient)`` tuples."""
        return [
            (int(f), float(b))
            for f, b in zip(self._features[: self._size], self._coefs[: self._size])
        ]

    def append(self, feature: int, coef: float = 0.0) -> int:
        """Add *feature* at the end of the path and return its position."""
        if self.is_active(feature):
            raise ValueError(f"feature {feature} is already active.")
        if self.is_full():
            raise ValueError(f"active set is full ({self.capacity} features).")
        pos = self._size
        self._features[pos] = feature
        self._coefs[pos] = coef
        self._positions[feature] = pos
        self._size += 1
        return pos

    def remove(self, feature: int) -> int:
        """Drop *feature* from the path and return the position it held."""
        pos = self.position(feature)
        if pos is None:
            raise ValueError(f"feature {feature} is not active.")
        k = self._size
        self._features[pos : k - 1] = self._features[pos + 1 : k]
        self._coefs[pos : k - 1] = self._coefs[pos + 1 : k]
        self._size = k - 1
        self._rebuild_positions()
        return pos

    def _rebuild_positions(self) -> None:
        # Full rebuild, O(active size); the set is bounded by min(n, p).
        self._positions.fill(INACTIVE)
        self._positions[self._features[: self._size]] = np.arange(
            self._size, dtype=np.intp
        )
