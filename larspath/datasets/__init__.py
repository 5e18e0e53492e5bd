"""Synthetic datasets for examples and testing."""

from larspath.datasets._synthetic import (
    make_correlated_regression,
    make_orthogonal_regression,
    make_sign_flip_regression,
)

__all__ = [
    "make_orthogonal_regression",
    "make_sign_flip_regression",
    "make_correlated_regression",
]
