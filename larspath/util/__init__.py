"""Utility functions for working with coefficient paths."""

from larspath.util.interpolation import interpolate_coefficients

__all__ = [
    "interpolate_coefficients",
]
