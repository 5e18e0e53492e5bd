"""Type aliases and common types for the larspath package."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

# Array-like types accepted as input
ArrayLike = Union[np.ndarray, list, tuple]

# Strict numpy array types returned from computations
FloatArray = npt.NDArray[np.floating]
IntArray = npt.NDArray[np.intp]

# One ``(feature, coefficient)`` entry of the coefficient path
PathEntry = Tuple[int, float]
Basis = Sequence[Union[int, PathEntry]]
