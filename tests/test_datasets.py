import numpy as np
import pytest

from larspath.datasets import (
    make_correlated_regression,
    make_orthogonal_regression,
    make_sign_flip_regression,
)


def test_orthogonal_columns():
    data = make_orthogonal_regression()
    G = data.data.T @ data.data
    np.testing.assert_array_equal(G, np.diag(np.diag(G)))
    coef, *_ = np.linalg.lstsq(data.data, data.target, rcond=None)
    np.testing.assert_allclose(coef, data.coef, atol=1e-12)
    assert np.argmax(np.abs(data.data.T @ data.target)) == 2


def test_sign_flip_structure():
    data = make_sign_flip_regression()
    c = data.data.T @ data.target
    assert np.argmax(np.abs(c)) == 0
    assert c[0] > 0
    assert data.coef[0] == pytest.approx(-0.2)
    assert data.coef[1] == pytest.approx(data.coef[2])
    np.testing.assert_allclose(data.data @ data.coef, data.target)


def test_correlated_shapes():
    data = make_correlated_regression(n_samples=30, n_features=5, n_informative=2,
                                      random_state=0)
    assert data.data.shape == (30, 5)
    assert data.target.shape == (30,)
    assert np.count_nonzero(data.coef) == 2
    assert np.all(data.coef[2:] == 0)
    assert isinstance(data.DESCR, str)


def test_correlated_reproducible():
    a = make_correlated_regression(random_state=7)
    b = make_correlated_regression(random_state=7)
    np.testing.assert_array_equal(a.data, b.data)
    np.testing.assert_array_equal(a.target, b.target)


def test_correlated_rho():
    data = make_correlated_regression(n_samples=5000, n_features=4, rho=0.6,
                                      random_state=1)
    corr = np.corrcoef(data.data, rowvar=False)
    off = corr[~np.eye(4, dtype=bool)]
    np.testing.assert_allclose(off, 0.6, atol=0.05)


@pytest.mark.parametrize("kwargs", [
    {"rho": 1.0},
    {"rho": -0.1},
    {"n_informative": 11},
    {"n_informative": -1},
])
def test_correlated_invalid(kwargs):
    with pytest.raises(ValueError):
        make_correlated_regression(**kwargs)
