"""Shared fixtures for the larspath test suite."""

import numpy as np
import pytest


def _check_active_set(engine):
    """Every feature is active iff it sits in the path at its mapped position."""
    features = [f for f, _ in engine.get_parameters()]
    assert len(set(features)) == len(features)
    for i in range(engine.n_features):
        pos = engine.active_set.position(i)
        if engine.is_active(i):
            assert pos is not None
            assert features[pos] == i
        else:
            assert pos is None
            assert i not in features


@pytest.fixture
def check_active_set():
    return _check_active_set


@pytest.fixture
def random_data():
    rng = np.random.RandomState(42)
    n, p = 50, 6
    X = rng.randn(n, p)
    y = X @ [1.5, 0.0, -2.0, 0.5, 0.0, 1.0] + rng.randn(n) * 0.3
    return X, y
